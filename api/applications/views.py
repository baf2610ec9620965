"""
Application API views.

These endpoints let clients:
- List and add applications
- Rename applications guarded by their last-read timestamp
- Delete applications no license references
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.applications.serializers import (
    ApplicationSerializer,
    CreateApplicationRequestSerializer,
    UpdateApplicationRequestSerializer,
)
from api.schema import ERROR_RESPONSES
from applications.application.commands.create_application import CreateApplicationCommand
from applications.application.commands.delete_application import DeleteApplicationCommand
from applications.application.commands.update_application import UpdateApplicationCommand
from applications.application.handlers.application_handlers import (
    CreateApplicationHandler,
    DeleteApplicationHandler,
    ListApplicationsHandler,
    UpdateApplicationHandler,
)
from applications.infrastructure.repositories.django_application_repository import (
    DjangoApplicationRepository,
)
from core.instrumentation import Status, StatusCode, get_tracer

# Initialize repositories (in production, use DI container)
_application_repo = DjangoApplicationRepository()

tracer = get_tracer(__name__)


class ApplicationCollectionView(APIView):
    """View for listing and adding applications."""

    @extend_schema(
        operation_id="list_applications",
        summary="List Applications",
        description="Return every application, newest first.",
        tags=["Applications"],
        responses={200: ApplicationSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        """List applications."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_applications") as span:
            applications = await ListApplicationsHandler(_application_repo).handle()
            span.set_attribute("applications.count", len(applications))
            span.set_status(Status(StatusCode.OK))
            return Response(ApplicationSerializer(applications, many=True).data)

    @extend_schema(
        operation_id="create_application",
        summary="Create Application",
        description="Add an application. It starts with no license associations.",
        tags=["Applications"],
        request=CreateApplicationRequestSerializer,
        responses={201: ApplicationSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Create an application."""
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        """Async handler for create application."""
        with tracer.start_as_current_span("create_application") as span:
            serializer = CreateApplicationRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            command = CreateApplicationCommand(
                name=serializer.validated_data["name"],
                link=serializer.validated_data.get("link", ""),
            )
            application = await CreateApplicationHandler(_application_repo).handle(command)

            span.set_attribute("application.id", str(application.id))
            span.set_status(Status(StatusCode.OK))
            return Response(
                ApplicationSerializer(application).data, status=status.HTTP_201_CREATED
            )


class ApplicationDetailView(APIView):
    """View for updating and deleting a single application."""

    @extend_schema(
        operation_id="update_application",
        summary="Update Application",
        description=(
            "Update an application's name and link. The request must carry the "
            "updatedAt value last read; a mismatch is rejected with 409."
        ),
        tags=["Applications"],
        request=UpdateApplicationRequestSerializer,
        responses={204: None, **ERROR_RESPONSES},
    )
    def put(self, request: Request, application_id: uuid.UUID) -> Response:
        """Update an application."""
        return async_to_sync(self._handle_update)(request, application_id)

    async def _handle_update(self, request: Request, application_id: uuid.UUID) -> Response:
        """Async handler for update application."""
        with tracer.start_as_current_span("update_application") as span:
            span.set_attribute("application.id", str(application_id))

            serializer = UpdateApplicationRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            command = UpdateApplicationCommand(
                application_id=application_id,
                name=serializer.validated_data["name"],
                link=serializer.validated_data.get("link", ""),
                expected_updated_at=serializer.validated_data["updatedAt"],
            )
            await UpdateApplicationHandler(_application_repo).handle(command)

            span.set_status(Status(StatusCode.OK))
            return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="delete_application",
        summary="Delete Application",
        description="Delete an application. Applications referenced by licenses are kept (409).",
        tags=["Applications"],
        responses={204: None, **ERROR_RESPONSES},
    )
    def delete(self, request: Request, application_id: uuid.UUID) -> Response:
        """Delete an application."""
        return async_to_sync(self._handle_delete)(request, application_id)

    async def _handle_delete(self, request: Request, application_id: uuid.UUID) -> Response:
        """Async handler for delete application."""
        with tracer.start_as_current_span("delete_application") as span:
            span.set_attribute("application.id", str(application_id))
            await DeleteApplicationHandler(_application_repo).handle(
                DeleteApplicationCommand(application_id=application_id)
            )
            span.set_status(Status(StatusCode.OK))
            return Response(status=status.HTTP_204_NO_CONTENT)
