"""
Parsers sub-package for fao-tidy.

Contains the reader that converts raw FAO fisheries commodity exports
into the long-format intermediate representation the transforms expect
(one row per country x commodity x trade flow x year, all cells text).

Design:
- base.py defines the BaseParser ABC and the ParseResult container.
- wide.py implements FaoWideParser for the FishStat wide CSV layout
  (years spread across columns).
"""
