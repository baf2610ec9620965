"""
License API views.

These endpoints let clients:
- List, read, add, update and delete licenses
- Query the license table by filter, search and sort
- Read per-filter license counts
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.licenses.serializers import (
    LicenseCountsSerializer,
    LicenseFieldsSerializer,
    LicenseSerializer,
    UpdateLicenseRequestSerializer,
)
from api.schema import ERROR_RESPONSES
from core.domain.value_objects import LicenseFilter, LicenseQuery, SortColumn, SortDirection
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.update_license import UpdateLicenseCommand
from licenses.application.handlers.license_query_handlers import (
    GetLicenseCountsHandler,
    GetLicenseHandler,
    ListLicensesHandler,
    QueryLicensesHandler,
)
from licenses.application.handlers.license_write_handlers import (
    CreateLicenseHandler,
    DeleteLicenseHandler,
    UpdateLicenseHandler,
)
from licenses.application.queries.get_license import GetLicenseQuery
from licenses.application.queries.query_licenses import QueryLicensesQuery
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)


class LicenseCollectionView(APIView):
    """View for listing and adding licenses."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="Return every license with its application and assigned users.",
        tags=["Licenses"],
        responses={200: LicenseSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        """List licenses."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_licenses") as span:
            licenses = await ListLicensesHandler(_license_repo).handle()
            span.set_attribute("licenses.count", len(licenses))
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(licenses, many=True).data)

    @extend_schema(
        operation_id="create_license",
        summary="Create License",
        description=(
            "Add a license. The referenced application's license count is "
            "incremented and the listed users are assigned in the same transaction."
        ),
        tags=["Licenses"],
        request=LicenseFieldsSerializer,
        responses={201: LicenseSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Create a license."""
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        """Async handler for create license."""
        with tracer.start_as_current_span("create_license") as span:
            serializer = LicenseFieldsSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            command = CreateLicenseCommand(
                attributes=LicenseFieldsSerializer.to_attributes(data),
                user_ids=LicenseFieldsSerializer.to_user_ids(data) or [],
            )
            span.set_attribute("application.id", str(command.attributes.application_id))
            span.set_attribute("users.count", len(command.user_ids))

            license = await CreateLicenseHandler(_license_repo).handle(command)

            span.set_attribute("license.id", str(license.id))
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(license).data, status=status.HTTP_201_CREATED)


class LicenseDetailView(APIView):
    """View for reading, updating and deleting a single license."""

    @extend_schema(
        operation_id="get_license",
        summary="Get License",
        description="Return a license with its application and assigned users.",
        tags=["Licenses"],
        responses={200: LicenseSerializer, 404: ERROR_RESPONSES[404]},
    )
    def get(self, request: Request, license_id: uuid.UUID) -> Response:
        """Get a license."""
        return async_to_sync(self._handle_get)(request, license_id)

    async def _handle_get(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("get_license") as span:
            span.set_attribute("license.id", str(license_id))
            license = await GetLicenseHandler(_license_repo).handle(
                GetLicenseQuery(license_id=license_id)
            )
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(license).data)

    @extend_schema(
        operation_id="update_license",
        summary="Update License",
        description=(
            "Update a license. updatedLicense.updatedAt must match the stored value, "
            "otherwise the update is rejected with 409. When users is sent the "
            "assignments are reconciled; moving the license to another application "
            "moves one count from the old application to the new one."
        ),
        tags=["Licenses"],
        request=UpdateLicenseRequestSerializer,
        responses={204: None, **ERROR_RESPONSES},
    )
    def put(self, request: Request, license_id: uuid.UUID) -> Response:
        """Update a license."""
        return async_to_sync(self._handle_update)(request, license_id)

    async def _handle_update(self, request: Request, license_id: uuid.UUID) -> Response:
        """Async handler for update license."""
        with tracer.start_as_current_span("update_license") as span:
            span.set_attribute("license.id", str(license_id))

            serializer = UpdateLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data["updatedLicense"]

            command = UpdateLicenseCommand(
                license_id=license_id,
                attributes=LicenseFieldsSerializer.to_attributes(data),
                expected_updated_at=data["updatedAt"],
                user_ids=LicenseFieldsSerializer.to_user_ids(data),
            )
            await UpdateLicenseHandler(_license_repo).handle(command)

            span.set_status(Status(StatusCode.OK))
            return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="delete_license",
        summary="Delete License",
        description=(
            "Delete a license, decrementing its application's license count and "
            "removing its user assignments."
        ),
        tags=["Licenses"],
        responses={204: None, 404: ERROR_RESPONSES[404], 500: ERROR_RESPONSES[500]},
    )
    def delete(self, request: Request, license_id: uuid.UUID) -> Response:
        """Delete a license."""
        return async_to_sync(self._handle_delete)(request, license_id)

    async def _handle_delete(self, request: Request, license_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_license") as span:
            span.set_attribute("license.id", str(license_id))
            await DeleteLicenseHandler(_license_repo).handle(
                DeleteLicenseCommand(license_id=license_id)
            )
            span.set_status(Status(StatusCode.OK))
            return Response(status=status.HTTP_204_NO_CONTENT)


class LicenseQueryView(APIView):
    """View for the filtered, searched and sorted license table."""

    @extend_schema(
        operation_id="query_licenses",
        summary="Query Licenses",
        description=(
            "Filter licenses by a named filter or a free-text search, optionally "
            "sorted by one column."
        ),
        tags=["Licenses"],
        parameters=[
            OpenApiParameter(
                name="filter",
                type=OpenApiTypes.STR,
                enum=[item.value for item in LicenseFilter],
                required=False,
            ),
            OpenApiParameter(
                name="search",
                type=OpenApiTypes.STR,
                required=False,
                description=(
                    "Case-insensitive match on application name, contact person, "
                    "category, status, comment or user name"
                ),
            ),
            OpenApiParameter(
                name="sortBy",
                type=OpenApiTypes.STR,
                enum=[item.value for item in SortColumn],
                required=False,
            ),
            OpenApiParameter(
                name="sortDirection",
                type=OpenApiTypes.STR,
                enum=[item.value for item in SortDirection],
                required=False,
            ),
        ],
        responses={200: LicenseSerializer(many=True), 400: ERROR_RESPONSES[400]},
    )
    def get(self, request: Request) -> Response:
        """Query licenses."""
        return async_to_sync(self._handle_query)(request)

    async def _handle_query(self, request: Request) -> Response:
        with tracer.start_as_current_span("query_licenses") as span:
            query = LicenseQuery.from_params(
                filter_name=request.query_params.get("filter"),
                search=request.query_params.get("search"),
                sort_by=request.query_params.get("sortBy"),
                sort_direction=request.query_params.get("sortDirection"),
            )
            span.set_attribute("query.filter", str(query.filter))
            if query.is_sorted:
                span.set_attribute("query.sort_by", str(query.sort_by))

            licenses = await QueryLicensesHandler(_license_repo).handle(
                QueryLicensesQuery(query=query)
            )
            span.set_attribute("licenses.count", len(licenses))
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseSerializer(licenses, many=True).data)


class LicenseCountsView(APIView):
    """View for per-filter license counts."""

    @extend_schema(
        operation_id="license_counts",
        summary="License Counts",
        description="Number of licenses matching each named filter.",
        tags=["Licenses"],
        responses={200: LicenseCountsSerializer},
    )
    def get(self, request: Request) -> Response:
        """Get license counts."""
        return async_to_sync(self._handle_counts)(request)

    async def _handle_counts(self, request: Request) -> Response:
        with tracer.start_as_current_span("license_counts") as span:
            counts = await GetLicenseCountsHandler(_license_repo).handle()
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseCountsSerializer(counts).data)
