"""Custom exceptions for the catalog and its persistence layer."""


class CatalogError(Exception):
    """Base class for every error raised by mediacatalog."""

    pass


class PersistenceError(CatalogError):
    """The key-value substrate could not serve a request."""

    pass


class PersistenceWriteError(PersistenceError):
    """A write to the substrate failed (disk full, database locked, closed store...)."""

    pass


class CatalogValidationError(CatalogError):
    """Caller-side validation rejected an input before it reached the store."""

    pass


class CategoryValidationError(CatalogValidationError):
    """Invalid category name (empty, duplicate) or forbidden category operation."""

    pass


class InvalidFormatError(CatalogValidationError):
    """Imported data is not a readable catalog collection."""

    pass
