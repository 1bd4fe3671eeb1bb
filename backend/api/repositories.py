# backend/api/repositories.py
"""Persistence port used by the services, plus its Django ORM adapter.

The services only talk to a ``Repository``; tests swap in an in-memory
implementation. Identity and audit timestamps belong to the store
(auto primary key, ``auto_now_add`` / ``auto_now``), never to the caller.
"""
import logging
from typing import Protocol

from django.db import IntegrityError, transaction

from .exceptions import DuplicateKeyError

logger = logging.getLogger(__name__)


class Repository(Protocol):
    label: str

    def find_all(self) -> list: ...
    def find_by_id(self, pk): ...
    def find_by(self, **key): ...
    def exists_by(self, **key) -> bool: ...
    def exists_by_id(self, pk) -> bool: ...
    def search(self, field: str, text: str) -> list: ...
    def save(self, entity): ...
    def delete_by_id(self, pk) -> None: ...


class ModelRepository:
    """Repository backed by a Django model's default manager."""

    def __init__(self, model, label=None):
        self.model = model
        self.label = label or model.__name__

    @property
    def objects(self):
        return self.model._default_manager

    def find_all(self):
        return list(self.objects.all())

    def find_by_id(self, pk):
        return self.objects.filter(pk=pk).first()

    def find_by(self, **key):
        return self.objects.filter(**key).first()

    def exists_by(self, **key):
        return self.objects.filter(**key).exists()

    def exists_by_id(self, pk):
        return self.objects.filter(pk=pk).exists()

    def search(self, field, text):
        return list(self.objects.filter(**{f"{field}__icontains": text}))

    def save(self, entity):
        # A concurrent writer can win the race between the services' existence
        # check and this save; the DB unique constraint then rejects the row.
        try:
            with transaction.atomic():
                entity.save()
        except IntegrityError as e:
            logger.error("%s rejected by store constraint: %s", self.label, e)
            raise DuplicateKeyError(self.label, "unique key") from e
        return entity

    def delete_by_id(self, pk):
        self.objects.filter(pk=pk).delete()
