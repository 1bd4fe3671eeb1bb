# backend/api/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    CategoryViewSet, FileViewSet, IngredientViewSet, RecipeViewSet, UserViewSet, healthz,
)

app_name = "api"

# trailing slash optional; no format suffixes, since file names carry their
# own extension (".png" must not be read as a renderer format)
router = DefaultRouter()
router.trailing_slash = "/?"
router.include_format_suffixes = False
router.register(r"categories",  CategoryViewSet,   basename="category")
router.register(r"ingredients", IngredientViewSet, basename="ingredient")
router.register(r"users",       UserViewSet,       basename="user")
router.register(r"recipes",     RecipeViewSet,     basename="recipe")
router.register(r"files",       FileViewSet,       basename="file")

urlpatterns = [
    # no 'api/' prefix here: the project urls add it
    path("", include(router.urls)),

    # health endpoint for probes
    path("healthz/", healthz, name="api-healthz"),
]
