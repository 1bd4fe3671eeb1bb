"""ModelRepository against the real database."""

import pytest

from api.exceptions import DuplicateKeyError
from api.models import Category, Ingredient, User
from api.repositories import ModelRepository
from api.services import CategoryService, IngredientService, UserService

pytestmark = pytest.mark.django_db


class LostRaceRepository(ModelRepository):
    """Existence checks answer as if a concurrent writer had not committed yet."""

    def exists_by(self, **key):
        return False


def test_save_assigns_id_and_timestamps():
    repo = ModelRepository(Category)

    category = repo.save(Category(name="Soups"))

    assert category.pk is not None
    assert category.created_at is not None
    assert category.updated_at >= category.created_at
    assert repo.exists_by_id(category.pk)
    assert repo.find_by(name="Soups") == category


def test_find_by_id_missing_returns_none():
    assert ModelRepository(Category).find_by_id(12345) is None


def test_search_uses_icontains():
    repo = ModelRepository(Category)
    repo.save(Category(name="Desserts"))
    repo.save(Category(name="Soups"))

    assert [c.name for c in repo.search("name", "DESSER")] == ["Desserts"]


def test_store_rejects_duplicate_name_as_duplicate_key():
    repo = ModelRepository(Category)
    repo.save(Category(name="Desserts"))

    with pytest.raises(DuplicateKeyError):
        repo.save(Category(name="Desserts"))

    assert Category.objects.filter(name="Desserts").count() == 1


def test_lost_race_on_create_surfaces_as_duplicate_key():
    CategoryService().create(Category(name="Desserts"))
    racing = CategoryService(LostRaceRepository(Category))

    with pytest.raises(DuplicateKeyError):
        racing.create(Category(name="Desserts"))

    assert Category.objects.count() == 1


def test_lost_race_on_compound_key():
    IngredientService().create(Ingredient(name="Flour", unit="cups"))
    racing = IngredientService(LostRaceRepository(Ingredient))

    with pytest.raises(DuplicateKeyError):
        racing.create(Ingredient(name="Flour", unit="cups"))

    racing.create(Ingredient(name="Flour", unit="grams"))
    assert Ingredient.objects.count() == 2


def test_lost_race_on_user_email():
    UserService().create(User(username="chef", email="chef@example.com", password="x"))
    racing = UserService(LostRaceRepository(User))

    with pytest.raises(DuplicateKeyError):
        racing.create(User(username="baker", email="chef@example.com", password="x"))

    assert User.objects.count() == 1


def test_update_through_database_keeps_created_at():
    service = CategoryService()
    category = service.create(Category(name="Soups", description="old"))
    created_at = category.created_at

    service.update(category.pk, Category(name="Soups", description="new"))

    stored = Category.objects.get(pk=category.pk)
    assert stored.description == "new"
    assert stored.created_at == created_at
    assert stored.updated_at >= created_at


def test_delete_by_id():
    repo = ModelRepository(Category)
    category = repo.save(Category(name="Soups"))

    repo.delete_by_id(category.pk)

    assert not repo.exists_by_id(category.pk)
    assert repo.find_all() == []
