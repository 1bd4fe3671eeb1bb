from django.contrib.auth.hashers import make_password
from django.contrib.auth.validators import UnicodeUsernameValidator
from rest_framework import serializers
from .models import Category, Ingredient, Recipe, User

# Uniqueness is decided by the services, not here: the model-derived
# UniqueValidator / UniqueTogetherValidator are switched off below.

class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id","name","description","created_at","updated_at"]
        read_only_fields = ["created_at","updated_at"]
        extra_kwargs = {"name": {"validators": []}}

class IngredientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Ingredient
        fields = ["id","name","unit","description","created_at","updated_at"]
        read_only_fields = ["created_at","updated_at"]
        validators = []

class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id","username","email","password","first_name","last_name","bio","created_at","updated_at"]
        read_only_fields = ["created_at","updated_at"]
        extra_kwargs = {
            "username": {"min_length": 3, "validators": [UnicodeUsernameValidator()]},
            "email": {"required": True, "allow_blank": False, "validators": []},
            "password": {"write_only": True, "min_length": 6},
        }

    def validate_password(self, value):
        # stored hashed; nothing in this API ever checks it
        return make_password(value)

class RecipeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Recipe
        fields = ["id","title","description","instructions",
                  "preparation_time_minutes","cooking_time_minutes","servings",
                  "created_at","updated_at"]
        read_only_fields = ["created_at","updated_at"]
        extra_kwargs = {
            "title": {"min_length": 3, "max_length": 255},
            "preparation_time_minutes": {"min_value": 0},
            "cooking_time_minutes": {"min_value": 0},
            "servings": {"min_value": 1},
        }
