"""folio: load and validate the content of a static blog."""

__version__ = "0.1.0"
