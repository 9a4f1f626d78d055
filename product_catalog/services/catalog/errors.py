"""Errors raised by the catalog layers.

User-correctable errors (ValidationError, UnsupportedFileType, FileTooLarge)
are turned into a re-rendered form by the routes; NotFound and
StorageUnavailable are rendered by the app-level error handlers.
"""


class CatalogError(Exception):
    """Base class for catalog errors. ``message`` is safe to show to users."""

    default_message = "Something went wrong"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CatalogError):
    default_message = "Please fill in both the name and the description."


class NotFound(CatalogError):
    default_message = "Product not found"


class InvalidId(CatalogError):
    default_message = "Malformed product id"


class UnsupportedFileType(CatalogError):
    default_message = "Images only! Allowed types: jpeg, jpg, png, gif."


class FileTooLarge(CatalogError):
    default_message = "Image is too large (limit 5 MB)."


class StorageUnavailable(CatalogError):
    default_message = "The product database is unavailable"
