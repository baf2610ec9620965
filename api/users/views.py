"""
User API views.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.schema import ERROR_RESPONSES
from api.users.serializers import (
    FindOrCreateUserRequestSerializer,
    FindOrCreateUserResponseSerializer,
    UserSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from users.application.commands.delete_user import DeleteUserCommand
from users.application.commands.find_or_create_user import FindOrCreateUserCommand
from users.application.handlers.user_handlers import (
    DeleteUserHandler,
    FindOrCreateUserHandler,
    ListUsersHandler,
)
from users.infrastructure.repositories.django_user_repository import DjangoUserRepository

# Initialize repositories (in production, use DI container)
_user_repo = DjangoUserRepository()

tracer = get_tracer(__name__)


class UserCollectionView(APIView):
    """View for listing users."""

    @extend_schema(
        operation_id="list_users",
        summary="List Users",
        tags=["Users"],
        responses={200: UserSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        """List users."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_users") as span:
            users = await ListUsersHandler(_user_repo).handle()
            span.set_attribute("users.count", len(users))
            span.set_status(Status(StatusCode.OK))
            return Response(UserSerializer(users, many=True).data)


class FindOrCreateUserView(APIView):
    """View resolving a user by name."""

    @extend_schema(
        operation_id="find_or_create_user",
        summary="Find or Create User",
        description=(
            "Return the user with the given name, creating it when it does not exist. "
            "created tells whether a new user was added."
        ),
        tags=["Users"],
        request=FindOrCreateUserRequestSerializer,
        responses={
            200: FindOrCreateUserResponseSerializer,
            201: FindOrCreateUserResponseSerializer,
            400: ERROR_RESPONSES[400],
        },
    )
    def post(self, request: Request) -> Response:
        """Find or create a user."""
        return async_to_sync(self._handle_find_or_create)(request)

    async def _handle_find_or_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("find_or_create_user") as span:
            serializer = FindOrCreateUserRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            user, created = await FindOrCreateUserHandler(_user_repo).handle(
                FindOrCreateUserCommand(name=serializer.validated_data["name"])
            )

            span.set_attribute("user.id", str(user.id))
            span.set_attribute("user.created", created)
            span.set_status(Status(StatusCode.OK))
            return Response(
                FindOrCreateUserResponseSerializer({"user": user, "created": created}).data,
                status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
            )


class DeleteUserView(APIView):
    """View for deleting a user and its license assignments."""

    @extend_schema(
        operation_id="delete_user",
        summary="Delete User",
        tags=["Users"],
        responses={204: None, 404: ERROR_RESPONSES[404]},
    )
    def delete(self, request: Request, user_id: uuid.UUID) -> Response:
        """Delete a user."""
        return async_to_sync(self._handle_delete)(request, user_id)

    async def _handle_delete(self, request: Request, user_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_user") as span:
            span.set_attribute("user.id", str(user_id))
            await DeleteUserHandler(_user_repo).handle(DeleteUserCommand(user_id=user_id))
            span.set_status(Status(StatusCode.OK))
            return Response(status=status.HTTP_204_NO_CONTENT)
