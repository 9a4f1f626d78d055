from contextlib import contextmanager
from datetime import datetime, timezone

from loguru import logger

from .errors import InvalidId, NotFound, ValidationError
from .models import NAME_MAX_LENGTH, Product
from .repository import parse_id


def _has_file(file):
    return file is not None and bool(file.filename)


def _clean(value):
    return (value or "").strip()


class ProductService:
    """The four catalog use cases: list, create, edit and delete.

    Couples the repository (records) with the file storage (images) so that
    a failed request never leaves an uploaded file that no record points to,
    and a deleted record never leaves its image behind.
    """

    def __init__(self, repository, storage):
        self.repository = repository
        self.storage = storage

    @contextmanager
    def _staged_upload(self, file):
        """Save ``file`` (if any) and remove it again if the block raises."""
        filename = self.storage.save(file) if _has_file(file) else None
        try:
            yield filename
        except BaseException:
            if filename:
                self.storage.delete(filename)
            raise

    @staticmethod
    def _validate(name, description):
        if not name or not description:
            logger.warning("Rejected product with missing name or description")
            raise ValidationError()
        if len(name) > NAME_MAX_LENGTH:
            logger.warning("Rejected product name of {} characters", len(name))
            raise ValidationError(f"Name must be at most {NAME_MAX_LENGTH} characters.")

    def list_products(self):
        return self.repository.list_all()

    def get_product(self, product_id):
        try:
            product = self.repository.find_by_id(product_id)
        except InvalidId as exc:
            logger.warning("Malformed product id {!r}", product_id)
            raise NotFound() from exc
        if product is None:
            logger.warning("No product with id {}", product_id)
            raise NotFound()
        return product

    def create_product(self, name, description, image=None):
        name, description = _clean(name), _clean(description)

        with self._staged_upload(image) as filename:
            self._validate(name, description)
            product = Product(
                name=name,
                description=description,
                image=filename,
                created_at=datetime.now(timezone.utc),
            )
            self.repository.insert(product)

        logger.info("Created product {} ({!r})", product.id, product.name)
        return product

    def update_product(self, product_id, name, description, image=None, old_image=None):
        """Replace name, description and image of a product.

        ``old_image`` is the image the edit form was rendered with; it is kept
        when no new file is uploaded and deleted once the update is committed
        when one is.
        """
        try:
            pk = parse_id(product_id)
        except InvalidId as exc:
            logger.warning("Malformed product id {!r}", product_id)
            raise NotFound() from exc

        name, description = _clean(name), _clean(description)
        old_image = _clean(old_image) or None

        with self._staged_upload(image) as filename:
            self._validate(name, description)
            fields = {
                "name": name,
                "description": description,
                "image": filename or old_image,
                "updated_at": datetime.now(timezone.utc),
            }
            if not self.repository.update_by_id(pk, fields):
                raise NotFound()

        if filename and old_image and old_image != filename:
            self.storage.delete(old_image)

        logger.info("Updated product {}", pk)
        return self.repository.find_by_id(pk)

    def delete_product(self, product_id):
        product = self.get_product(product_id)
        pk = product.id

        # Image before record
        if product.image:
            self.storage.delete(product.image)
        if not self.repository.delete_by_id(pk):
            raise NotFound()

        logger.info("Deleted product {}", pk)
