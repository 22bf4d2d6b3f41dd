"""
Custom exception hierarchy for fao-tidy.

Why a custom hierarchy:
- Callers can catch specific exceptions (e.g., ParsingError vs
  SchemaError) without relying on generic ValueError/RuntimeError.
- Malformed *values* never raise (they are coerced to missing); these
  exceptions are reserved for structural problems with files, tables
  and configuration.
"""


class FaoTidyError(Exception):
    """Base exception for all fao-tidy errors."""


class ParsingError(FaoTidyError):
    """Raised when a raw FAO export does not have the expected structure.

    For example, if the ``Country (Country)`` header is missing, or the
    unit label cannot be derived from the file name.
    """


class SchemaError(FaoTidyError):
    """Raised when a table is missing columns a transform requires.

    Also raised when the commodity lookup table has duplicate
    commodity keys (the join would fan out rows).
    """


class SplitConflictError(SchemaError):
    """Raised by the region splitter in strict mode.

    Signals that only some of the successor regions are already present
    in the data, so it is unclear whether the split was applied upstream.
    """


class ConfigValidationError(FaoTidyError):
    """Raised when faoconfig.yaml fails validation.

    This can happen if:
    - The file is empty.
    - The input directory matches no source files.
    """


class ExportError(FaoTidyError):
    """Raised when the exporter fails to write output files.

    For example, permission errors, disk full, or unsupported format.
    """
