from django.core.management.base import BaseCommand
from api.models import Category, Ingredient, Recipe
from api.services import CategoryService, IngredientService, RecipeService

CATEGORIES = [
    ("Ukrainian Cuisine", "Traditional dishes from Ukraine"),
    ("Soups", "Warm and hearty soups for any occasion"),
    ("Main Dishes", "Substantial dishes that form the centerpiece of a meal"),
]

INGREDIENTS = [
    ("Beets", "pieces", "Red root vegetable, essential for borsch"),
    ("Potatoes", "pieces", "Starchy tubers used in many Ukrainian dishes"),
    ("Cabbage", "grams", "Leafy green or purple vegetable"),
    ("Carrots", "pieces", "Orange root vegetable"),
    ("Onions", "pieces", "Pungent bulb vegetable"),
    ("Chicken Breast", "pieces", "Boneless, skinless chicken breast"),
    ("Butter", "grams", "Dairy product made from milk fat"),
    ("Breadcrumbs", "grams", "Dried, ground bread used for coating"),
    ("Fresh Herbs", "grams", "Mix of parsley, dill, and other herbs"),
]

RECIPES = [
    {
        "title": "Ukrainian Borsch",
        "description": "Traditional Ukrainian beet soup with a rich and hearty flavor. Perfect for cold winter days!",
        "instructions": "\n".join([
            "1. In a large pot, sauté onions and carrots until soft.",
            "2. Add beets and cook for 5 minutes.",
            "3. Add potatoes, cabbage, and tomato paste, then pour in beef broth.",
            "4. Simmer for 25-30 minutes until vegetables are tender.",
            "5. Season with salt, pepper, and dill.",
            "6. Serve hot with a dollop of sour cream and fresh bread.",
        ]),
        "preparation_time_minutes": 20,
        "cooking_time_minutes": 40,
        "servings": 6,
    },
    {
        "title": "Chicken Kyiv",
        "description": "Classic Ukrainian dish of chicken breast pounded and rolled around herb butter, then breaded and fried.",
        "instructions": "\n".join([
            "1. Mix softened butter with chopped herbs, garlic, salt, and pepper.",
            "2. Form into small logs and freeze for 30 minutes.",
            "3. Pound chicken breasts until thin.",
            "4. Place a butter log in the center of each breast and roll tightly.",
            "5. Dip each roll in flour, then beaten egg, then breadcrumbs.",
            "6. Fry in hot oil until golden brown and cooked through, about 8-10 minutes.",
            "7. Serve hot with mashed potatoes and vegetables.",
        ]),
        "preparation_time_minutes": 45,
        "cooking_time_minutes": 15,
        "servings": 4,
    },
]

class Command(BaseCommand):
    help = "Creates sample categories, ingredients and recipes"

    def handle(self, *args, **opts):
        categories = CategoryService()
        ingredients = IngredientService()
        recipes = RecipeService()

        has_categories = bool(categories.list())
        has_ingredients = bool(ingredients.list())
        if recipes.list() and has_categories and has_ingredients:
            self.stdout.write("Data already present, nothing to do.")
            return

        if not has_categories:
            for name, desc in CATEGORIES:
                obj = categories.create(Category(name=name, description=desc))
                self.stdout.write(f"[OK] Category {obj.name}")

        if not has_ingredients:
            for name, unit, desc in INGREDIENTS:
                obj = ingredients.create(Ingredient(name=name, unit=unit, description=desc))
                self.stdout.write(f"[OK] Ingredient {obj}")

        for data in RECIPES:
            obj = recipes.create(Recipe(**data))
            self.stdout.write(f"[OK] Recipe {obj.title}")
        self.stdout.write("Sample data initialized.")
