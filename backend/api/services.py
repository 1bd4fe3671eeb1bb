# backend/api/services.py
"""Uniqueness-validated upsert services.

Each entity kind declares its unique keys once, as ``UniqueKey`` entries.
``create`` rejects a candidate whose key is already taken; ``update`` does the
same only for keys whose value actually changes, so an entity never collides
with itself. Keys are checked in declaration order and the first failure stops
the remaining checks and the save.

The existence check and the save are two separate statements. Two concurrent
writers can both pass the check; the unique constraints in the database are
what keeps the data correct, and ``ModelRepository.save`` reports such a
rejection as ``DuplicateKeyError`` as well.
"""
import logging

from .exceptions import DuplicateKeyError, NotFoundError
from .models import Category, Ingredient, Recipe, User
from .repositories import ModelRepository, Repository

logger = logging.getLogger(__name__)


class UniqueKey:
    def __init__(self, *fields, label=None):
        self.fields = fields
        self.label = label or " and ".join(fields)

    def of(self, entity):
        return {f: getattr(entity, f) for f in self.fields}

    def changed(self, current, detail):
        return self.of(current) != self.of(detail)


class EntityService:
    unique_keys = ()
    mutable_fields = ()
    search_field = "name"

    def __init__(self, repository: Repository):
        self.repository = repository

    @property
    def label(self):
        return self.repository.label

    def list(self):
        logger.debug("Getting all %s", self.label)
        entities = self.repository.find_all()
        logger.debug("Found %d %s", len(entities), self.label)
        return entities

    def get_by_id(self, pk):
        logger.debug("Getting %s with id: %s", self.label, pk)
        entity = self.repository.find_by_id(pk)
        if entity is None:
            logger.error("%s not found with id: %s", self.label, pk)
            raise NotFoundError(self.label, "id", pk)
        return entity

    def get_by_unique_key(self, **key):
        logger.debug("Getting %s by %s", self.label, key)
        return self.repository.find_by(**key)

    def search(self, text):
        logger.debug("Searching %s with %s containing: %s", self.label, self.search_field, text)
        return self.repository.search(self.search_field, text)

    def create(self, candidate):
        logger.debug("Creating %s", self.label)
        for key in self.unique_keys:
            self._ensure_free(key, candidate)
        saved = self.repository.save(candidate)
        logger.debug("%s created with id: %s", self.label, saved.pk)
        return saved

    def update(self, pk, detail):
        logger.debug("Updating %s with id: %s", self.label, pk)
        entity = self.get_by_id(pk)
        for key in self.unique_keys:
            if key.changed(entity, detail):
                self._ensure_free(key, detail)
        for field in self.mutable_fields:
            setattr(entity, field, getattr(detail, field))
        return self.repository.save(entity)

    def delete(self, pk):
        logger.debug("Deleting %s with id: %s", self.label, pk)
        if not self.repository.exists_by_id(pk):
            logger.error("%s not found with id: %s", self.label, pk)
            raise NotFoundError(self.label, "id", pk)
        self.repository.delete_by_id(pk)

    def _ensure_free(self, key, entity):
        values = key.of(entity)
        if self.repository.exists_by(**values):
            logger.error("%s %s already exists: %s", self.label, key.label, values)
            raise DuplicateKeyError(self.label, key.label)


class CategoryService(EntityService):
    unique_keys = (UniqueKey("name"),)
    mutable_fields = ("name", "description")

    def __init__(self, repository=None):
        super().__init__(repository or ModelRepository(Category))

    def get_by_name(self, name):
        return self.get_by_unique_key(name=name)


class IngredientService(EntityService):
    unique_keys = (UniqueKey("name", "unit"),)
    mutable_fields = ("name", "unit", "description")

    def __init__(self, repository=None):
        super().__init__(repository or ModelRepository(Ingredient))

    def get_by_name_and_unit(self, name, unit):
        return self.get_by_unique_key(name=name, unit=unit)


class UserService(EntityService):
    # two independent constraints, not one compound key
    unique_keys = (UniqueKey("username"), UniqueKey("email"))
    mutable_fields = ("username", "email", "password", "first_name", "last_name", "bio")
    search_field = "username"

    def __init__(self, repository=None):
        super().__init__(repository or ModelRepository(User))

    def get_by_username(self, username):
        return self.get_by_unique_key(username=username)

    def get_by_email(self, email):
        return self.get_by_unique_key(email=email)


class RecipeService(EntityService):
    mutable_fields = (
        "title", "description", "instructions",
        "preparation_time_minutes", "cooking_time_minutes", "servings",
    )
    search_field = "title"

    def __init__(self, repository=None):
        super().__init__(repository or ModelRepository(Recipe))
