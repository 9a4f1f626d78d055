from .errors import (  # noqa: F401
    CatalogError,
    FileTooLarge,
    InvalidId,
    NotFound,
    StorageUnavailable,
    UnsupportedFileType,
    ValidationError,
)
from .models import Product, db  # noqa: F401
from .repository import ProductRepository  # noqa: F401
from .service import ProductService  # noqa: F401
from .storage import LocalStorage  # noqa: F401
