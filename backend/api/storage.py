# backend/api/storage.py
import logging
import os
import uuid

from django.conf import settings
from django.core.exceptions import SuspiciousFileOperation
from django.core.files import File
from django.core.files.storage import FileSystemStorage

from .exceptions import NotFoundError, StorageIOError

logger = logging.getLogger(__name__)


def file_extension(original_name):
    """".png" for "photo.png"; "" when there is no dot or only a leading one."""
    base = os.path.basename((original_name or "").replace("\\", "/"))
    dot = base.rfind(".")
    if dot > 0:
        return base[dot:]
    return ""


class FileStorageService:
    """Uploaded files kept under one directory, addressed by generated names.

    Names are ``uuid4`` + the original extension, so concurrent uploads never
    target the same path. Every name coming back from a caller is resolved
    through ``FileSystemStorage.path`` which refuses anything outside the
    storage root.
    """

    def __init__(self, location=None):
        # a fresh uuid4 name never collides; if it did, the new upload wins
        self.storage = FileSystemStorage(
            location=location or settings.FILE_UPLOAD_DIR, allow_overwrite=True,
        )

    @property
    def location(self):
        return self.storage.location

    def store(self, stream, original_name):
        name = f"{uuid.uuid4()}{file_extension(original_name)}"
        logger.debug("Storing file %s (original: %s)", name, original_name)
        try:
            # FileSystemStorage creates the directory on demand
            name = self.storage.save(name, File(stream, name=name))
        except (OSError, ValueError) as e:
            # ValueError: names the OS refuses outright, e.g. an embedded NUL
            logger.error("Error storing file %s: %s", name, e)
            raise StorageIOError("store", name, e) from e
        logger.info("Stored file %s (original: %s)", name, original_name)
        return name

    def load(self, name):
        path = self._resolve(name)
        if path is None or not os.path.isfile(path) or not os.access(path, os.R_OK):
            logger.error("File not found: %s", name)
            raise NotFoundError("File", "name", name)
        try:
            handle = self.storage.open(name, "rb")
        except OSError as e:
            logger.error("Error loading file %s: %s", name, e)
            raise StorageIOError("load", name, e) from e
        logger.info("Loaded file %s", name)
        return handle

    def delete(self, name):
        """True when a file was removed, False otherwise.

        Removal errors are logged and reported as False rather than raised,
        so callers cannot tell "nothing there" from "could not remove".
        """
        path = self._resolve(name)
        if path is None or not os.path.isfile(path):
            logger.warning("File not found for deletion: %s", name)
            return False
        try:
            self.storage.delete(name)
        except OSError as e:
            logger.error("Error deleting file %s: %s", name, e)
            return False
        logger.info("Deleted file %s", name)
        return True

    def _resolve(self, name):
        if not name:
            return None
        try:
            return self.storage.path(name)
        except (SuspiciousFileOperation, ValueError) as e:
            logger.warning("Rejected file name %r: %s", name, e)
            return None
