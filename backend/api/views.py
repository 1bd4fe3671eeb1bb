from django.http import FileResponse, JsonResponse
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response

from .serializers import CategorySerializer, IngredientSerializer, RecipeSerializer, UserSerializer
from .services import CategoryService, IngredientService, RecipeService, UserService
from .storage import FileStorageService


class ServiceViewSet(viewsets.ViewSet):
    """CRUD + search endpoints delegating to an EntityService."""
    service_class = None
    serializer_class = None
    search_param = "name"
    lookup_value_regex = "[0-9]+"

    def get_service(self):
        return self.service_class()

    @property
    def model(self):
        return self.serializer_class.Meta.model

    def list(self, request):
        entities = self.get_service().list()
        return Response(self.serializer_class(entities, many=True).data)

    def retrieve(self, request, pk=None):
        entity = self.get_service().get_by_id(int(pk))
        return Response(self.serializer_class(entity).data)

    @action(detail=False, methods=["get"])
    def search(self, request):
        text = request.query_params.get(self.search_param)
        if text is None:
            raise ValidationError({self.search_param: ["This query parameter is required."]})
        entities = self.get_service().search(text)
        return Response(self.serializer_class(entities, many=True).data)

    def create(self, request):
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        entity = self.get_service().create(self.model(**serializer.validated_data))
        return Response(self.serializer_class(entity).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None):
        # fields missing from the body, or sent as null, keep their stored
        # value; the service itself always receives a complete detail object
        service = self.get_service()
        existing = service.get_by_id(int(pk))
        serializer = self.serializer_class(existing, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        detail = self.model(**{f: getattr(existing, f) for f in service.mutable_fields})
        for field, value in serializer.validated_data.items():
            if value is not None:
                setattr(detail, field, value)
        entity = service.update(existing.pk, detail)
        return Response(self.serializer_class(entity).data)

    partial_update = update

    def destroy(self, request, pk=None):
        self.get_service().delete(int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)


class CategoryViewSet(ServiceViewSet):
    service_class = CategoryService
    serializer_class = CategorySerializer

class IngredientViewSet(ServiceViewSet):
    service_class = IngredientService
    serializer_class = IngredientSerializer

class UserViewSet(ServiceViewSet):
    service_class = UserService
    serializer_class = UserSerializer
    search_param = "username"

class RecipeViewSet(ServiceViewSet):
    service_class = RecipeService
    serializer_class = RecipeSerializer
    search_param = "title"


class FileViewSet(viewsets.ViewSet):
    parser_classes = [MultiPartParser, FormParser]
    lookup_value_regex = "[^/]+"

    def get_service(self):
        return FileStorageService()

    def create(self, request):
        upload = request.FILES.get("file")
        if upload is None:
            raise ValidationError({"file": ["No file was submitted."]})
        name = self.get_service().store(upload, upload.name)
        return Response({"fileName": name, "originalName": upload.name}, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        handle = self.get_service().load(pk)
        return FileResponse(handle, filename=pk)

    def destroy(self, request, pk=None):
        if not self.get_service().delete(pk):
            raise NotFound(f"File not found with name: {pk}")
        return Response(status=status.HTTP_204_NO_CONTENT)


def healthz(_request):
    return JsonResponse({"status": "ok"})
