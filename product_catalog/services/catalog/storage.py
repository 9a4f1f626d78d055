import os
import time
import uuid

from loguru import logger

from .errors import FileTooLarge, UnsupportedFileType

ALLOWED_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".gif"})
ALLOWED_MIMETYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/gif"})
DEFAULT_MAX_SIZE = 5 * 1024 * 1024
CHUNK_SIZE = 64 * 1024


class LocalStorage:
    """Local filesystem storage for product images.

    Files live flat under ``root`` and are referenced by name only. The root
    is created when the storage is constructed, once per application.
    """

    def __init__(self, root, max_size=DEFAULT_MAX_SIZE):
        self.root = os.path.abspath(root)
        self.max_size = max_size
        os.makedirs(self.root, exist_ok=True)

    def save(self, file):
        """Validate and write an uploaded ``FileStorage``, returning its new name."""
        ext = os.path.splitext(file.filename or "")[1].lower()
        if ext not in ALLOWED_EXTENSIONS or file.mimetype not in ALLOWED_MIMETYPES:
            logger.warning(
                "Rejected upload {!r} ({})", file.filename, file.mimetype or "no type"
            )
            raise UnsupportedFileType()

        filename, out = self._create_unique(ext)
        filepath = os.path.join(self.root, filename)
        try:
            with out:
                written = 0
                while True:
                    chunk = file.stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_size:
                        raise FileTooLarge()
                    out.write(chunk)
        except BaseException:
            os.remove(filepath)
            raise

        logger.debug("Saved upload {!r} as {} ({} bytes)", file.filename, filename, written)
        return filename

    def _create_unique(self, ext):
        while True:
            filename = f"image-{int(time.time() * 1000)}-{uuid.uuid4().hex}{ext}"
            try:
                return filename, open(os.path.join(self.root, filename), "xb")
            except FileExistsError:
                continue

    def path_for(self, filename):
        """Absolute path of ``filename`` inside the root, or None for unusable names."""
        if not filename:
            return None
        name = os.path.basename(filename)
        if name in ("", ".", ".."):
            return None
        return os.path.join(self.root, name)

    def exists(self, filename):
        filepath = self.path_for(filename)
        return filepath is not None and os.path.isfile(filepath)

    def delete(self, filename):
        filepath = self.path_for(filename)
        if filepath is None:
            return
        try:
            os.remove(filepath)
        except FileNotFoundError:
            return
        logger.debug("Deleted upload {}", os.path.basename(filepath))
