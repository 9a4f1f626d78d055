import re
from contextlib import contextmanager

from sqlalchemy.exc import InterfaceError, OperationalError

from .errors import InvalidId, StorageUnavailable
from .models import Product

# Positive integer that still fits a signed 64-bit column
_ID_PATTERN = re.compile(r"[1-9][0-9]{0,17}")

MUTABLE_FIELDS = frozenset({"name", "description", "image", "updated_at"})


def parse_id(product_id):
    """Return ``product_id`` as an int, or raise InvalidId."""
    if isinstance(product_id, bool):
        raise InvalidId()
    if isinstance(product_id, int):
        product_id = str(product_id)
    if not isinstance(product_id, str) or not _ID_PATTERN.fullmatch(product_id):
        raise InvalidId()
    return int(product_id)


class ProductRepository:
    """Persistence for Product records.

    Each call is atomic on a single record; there are no transactions that
    span several products. Connection failures surface as StorageUnavailable.
    """

    def __init__(self, db):
        self.db = db

    @property
    def session(self):
        return self.db.session

    @contextmanager
    def _connection_guard(self):
        try:
            yield
        except (OperationalError, InterfaceError) as exc:
            self.session.rollback()
            raise StorageUnavailable() from exc

    def list_all(self):
        with self._connection_guard():
            query = self.db.select(Product).order_by(Product.id.desc())
            return list(self.session.execute(query).scalars())

    def count(self):
        with self._connection_guard():
            query = self.db.select(self.db.func.count()).select_from(Product)
            return self.session.execute(query).scalar_one()

    def find_by_id(self, product_id):
        pk = parse_id(product_id)
        with self._connection_guard():
            return self.session.get(Product, pk)

    def insert(self, product):
        with self._connection_guard():
            self.session.add(product)
            self.session.commit()
            return product.id

    def update_by_id(self, product_id, fields):
        unknown = set(fields) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        pk = parse_id(product_id)
        with self._connection_guard():
            product = self.session.get(Product, pk)
            if product is None:
                return False
            for field, value in fields.items():
                setattr(product, field, value)
            self.session.commit()
            return True

    def delete_by_id(self, product_id):
        pk = parse_id(product_id)
        with self._connection_guard():
            product = self.session.get(Product, pk)
            if product is None:
                return False
            self.session.delete(product)
            self.session.commit()
            return True
