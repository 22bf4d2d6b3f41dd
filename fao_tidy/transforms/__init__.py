"""
Transforms sub-package for fao-tidy.

Contains composable transformation steps that form the cleaning pipeline.
Each transform is a function that takes a DataFrame (+ settings) and
returns a new DataFrame or a small result dataclass.

Design: Pipeline Pattern
- pipeline.py orchestrates the sequence of transforms.
- Individual transforms are in separate modules for testability:
  - tidy.py: Drop aggregate countries, drop trade_flow, sort.
  - values.py: Translate FAO value codes, parse value/year as numbers.
  - lookup.py: Inner-join the commodity -> product lookup.
  - regions.py: Split Netherlands Antilles across its successor regions.
  - units.py: Derive the unit label from the file name, rename ``value``.
"""
