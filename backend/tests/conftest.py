"""Shared fixtures: an in-memory persistence port and isolated upload dirs."""

import pytest
from django.utils import timezone
from rest_framework.test import APIClient


class InMemoryRepository:
    """Dict-backed stand-in for ModelRepository.

    Assigns ids and timestamps on save like the database does, and records
    every existence check / save / delete so tests can assert what the
    services did (and did not) call.
    """

    def __init__(self, label):
        self.label = label
        self.rows = {}
        self.calls = []
        self._next_id = 1

    def find_all(self):
        return list(self.rows.values())

    def find_by_id(self, pk):
        return self.rows.get(pk)

    def find_by(self, **key):
        for entity in self.rows.values():
            if all(getattr(entity, f) == v for f, v in key.items()):
                return entity
        return None

    def exists_by(self, **key):
        self.calls.append(("exists_by", key))
        return self.find_by(**key) is not None

    def exists_by_id(self, pk):
        self.calls.append(("exists_by_id", pk))
        return pk in self.rows

    def search(self, field, text):
        return [
            e for e in self.rows.values()
            if text.lower() in (getattr(e, field) or "").lower()
        ]

    def save(self, entity):
        self.calls.append(("save", entity))
        now = timezone.now()
        if entity.pk is None:
            entity.pk = self._next_id
            self._next_id += 1
            entity.created_at = now
        entity.updated_at = now
        self.rows[entity.pk] = entity
        return entity

    def delete_by_id(self, pk):
        self.calls.append(("delete_by_id", pk))
        self.rows.pop(pk, None)

    def called(self, name):
        return [args for call, args in self.calls if call == name]


@pytest.fixture
def make_repo():
    return InMemoryRepository


@pytest.fixture
def upload_dir(tmp_path, settings):
    """Point FILE_UPLOAD_DIR at a per-test directory (not created yet)."""
    path = tmp_path / "uploads"
    settings.FILE_UPLOAD_DIR = path
    return path


@pytest.fixture
def api_client():
    return APIClient()
