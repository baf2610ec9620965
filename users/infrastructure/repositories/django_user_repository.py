"""
Django implementation of UserRepository port.
"""

import uuid
from typing import List, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import UserNotFoundError
from users.domain.user import User
from users.infrastructure.models import User as UserModel
from users.ports.user_repository import UserRepository


class DjangoUserRepository(UserRepository):
    """Django ORM implementation of UserRepository."""

    @staticmethod
    def to_domain(model: UserModel) -> User:
        """Convert Django model to domain entity."""
        return User(id=model.id, name=model.name)

    @sync_to_async
    def list_all(self) -> List[User]:
        # pylint: disable=no-member
        return [self.to_domain(model) for model in UserModel.objects.all()]

    @sync_to_async
    def find_or_create(self, name: str) -> Tuple[User, bool]:
        name = User.create(name).name
        try:
            with transaction.atomic():
                # pylint: disable=no-member
                model, created = UserModel.objects.get_or_create(name=name)
        except IntegrityError:
            # Lost a race with a concurrent insert of the same name
            model, created = UserModel.objects.get(name=name), False  # pylint: disable=no-member
        return self.to_domain(model), created

    @sync_to_async
    def delete(self, user_id: uuid.UUID) -> None:
        with transaction.atomic():
            # pylint: disable=no-member
            deleted, _ = UserModel.objects.filter(id=user_id).delete()
            if deleted == 0:
                raise UserNotFoundError()
