"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
Multi-step writes run as one synchronous function inside a single
transaction so a failing step rolls every step back.
"""
import uuid
from datetime import date, datetime
from typing import Iterable, List, Optional

from asgiref.sync import sync_to_async
from django.conf import settings
from django.db.models import Count, Q, QuerySet
from django.utils import timezone

from applications.infrastructure.repositories.django_application_repository import (
    DjangoApplicationRepository,
)
from core.domain.exceptions import LicenseNotFoundError, UpdateConflictError
from core.domain.value_objects import LicenseFilter, LicenseQuery, SortColumn, SortDirection
from core.infrastructure.database import run_atomic_async
from licenses.domain.license import License, LicenseAttributes, LicenseCounts
from licenses.domain.services import ExpirationWindow
from licenses.infrastructure.association_reconciler import DjangoAssociationReconciler
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.models import LicenseUser
from licenses.ports.license_repository import LicenseRepository
from users.infrastructure.repositories.django_user_repository import DjangoUserRepository

SORT_FIELDS = {
    SortColumn.APPLICATION: "application__name",
    SortColumn.CONTACT_PERSON: "contact_person",
    SortColumn.USERS: "user_count",
    SortColumn.EXPIRATION_DATE: "renewal_date",
}

SEARCH_FIELDS = (
    "application__name",
    "contact_person",
    "category",
    "status",
    "comment",
)


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    Association bookkeeping is delegated to the reconciler, which can be
    replaced to exercise rollback behaviour.
    """

    def __init__(self, reconciler: Optional[DjangoAssociationReconciler] = None):
        self.reconciler = reconciler or DjangoAssociationReconciler()

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model with application and users loaded

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            attributes=LicenseAttributes(
                application_id=model.application_id,
                renewal_date=model.renewal_date,
                auto_renewal=model.auto_renewal,
                cost=model.cost,
                renewal_interval=model.renewal_interval,
                category=model.category,
                status=model.status,
                contact_person=model.contact_person,
                additional_contact_info=model.additional_contact_info,
                comment=model.comment,
            ),
            created_at=model.created_at,
            updated_at=model.updated_at,
            application=DjangoApplicationRepository.to_domain(model.application),
            users=tuple(DjangoUserRepository.to_domain(user) for user in model.users.all()),
        )

    def _base_queryset(self) -> QuerySet:
        # pylint: disable=no-member
        return (
            LicenseModel.objects.select_related("application")
            .prefetch_related("users")
            .annotate(user_count=Count("license_users", distinct=True))
        )

    def _apply_filter(self, queryset: QuerySet, license_filter: LicenseFilter, today: date):
        if license_filter == LicenseFilter.ASSIGNED:
            return queryset.filter(user_count__gt=0)
        if license_filter == LicenseFilter.UNASSIGNED:
            return queryset.filter(user_count=0)
        if license_filter == LicenseFilter.NEAR_EXPIRATION:
            start, end = ExpirationWindow.near_expiration(
                today, settings.LICENSE_NEAR_EXPIRATION_DAYS
            )
            return queryset.filter(renewal_date__gte=start, renewal_date__lte=end)
        if license_filter == LicenseFilter.EXPIRED:
            return queryset.filter(renewal_date__lt=today)
        return queryset

    def _apply_search(self, queryset: QuerySet, search: str) -> QuerySet:
        if not search:
            return queryset
        condition = Q()
        for field in SEARCH_FIELDS:
            condition |= Q(**{f"{field}__icontains": search})
        # pylint: disable=no-member
        matching_users = LicenseUser.objects.filter(user__name__icontains=search).values(
            "license_id"
        )
        return queryset.filter(condition | Q(id__in=matching_users))

    def _apply_sort(self, queryset: QuerySet, query: LicenseQuery) -> QuerySet:
        if not query.is_sorted:
            return queryset.order_by("-created_at")
        field = SORT_FIELDS[query.sort_by]
        if query.sort_direction == SortDirection.DESC:
            field = f"-{field}"
        return queryset.order_by(field, "-created_at")

    def _get(self, license_id: uuid.UUID) -> Optional[License]:
        model = self._base_queryset().filter(id=license_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def list_all(self) -> List[License]:
        return [self._to_domain(model) for model in self._base_queryset().order_by("-created_at")]

    @sync_to_async
    def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        return self._get(license_id)

    @sync_to_async
    def query(self, query: LicenseQuery, today: date) -> List[License]:
        queryset = self._apply_filter(self._base_queryset(), query.filter, today)
        queryset = self._apply_search(queryset, query.search)
        queryset = self._apply_sort(queryset, query)
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    def counts(self, today: date) -> LicenseCounts:
        # pylint: disable=no-member
        total = LicenseModel.objects.count()
        assigned = LicenseModel.objects.filter(license_users__isnull=False).distinct().count()
        start, end = ExpirationWindow.near_expiration(today, settings.LICENSE_NEAR_EXPIRATION_DAYS)
        return LicenseCounts(
            all=total,
            assigned=assigned,
            unassigned=total - assigned,
            near_expiration=LicenseModel.objects.filter(
                renewal_date__gte=start, renewal_date__lte=end
            ).count(),
            expired=LicenseModel.objects.filter(renewal_date__lt=today).count(),
        )

    def _create(self, license: License, user_ids: List[uuid.UUID]) -> None:
        self.reconciler.assign_application(None, license.application_id)
        # pylint: disable=no-member
        LicenseModel.objects.create(id=license.id, **license.attributes.as_dict())
        if user_ids:
            self.reconciler.reconcile_users(license.id, user_ids)

    async def create(
        self, license: License, user_ids: Optional[Iterable[uuid.UUID]] = None
    ) -> License:
        await run_atomic_async(self._create, license, list(user_ids or []))
        return await self.find_by_id(license.id)

    def _update(
        self,
        license_id: uuid.UUID,
        attributes: LicenseAttributes,
        expected_updated_at: datetime,
        user_ids: Optional[List[uuid.UUID]],
    ) -> None:
        # pylint: disable=no-member
        stored = (
            LicenseModel.objects.select_for_update()
            .filter(id=license_id)
            .values("application_id")
            .first()
        )
        if stored is None:
            raise LicenseNotFoundError()

        affected = LicenseModel.objects.filter(
            id=license_id,
            updated_at=expected_updated_at,
        ).update(**attributes.as_dict(), updated_at=timezone.now())
        if affected == 0:
            raise UpdateConflictError("license")

        if user_ids is not None:
            self.reconciler.reconcile_users(license_id, user_ids)
        self.reconciler.assign_application(stored["application_id"], attributes.application_id)

    async def update(
        self,
        license_id: uuid.UUID,
        attributes: LicenseAttributes,
        expected_updated_at: datetime,
        user_ids: Optional[Iterable[uuid.UUID]] = None,
    ) -> License:
        await run_atomic_async(
            self._update,
            license_id,
            attributes,
            expected_updated_at,
            None if user_ids is None else list(user_ids),
        )
        return await self.find_by_id(license_id)

    def _delete(self, license_id: uuid.UUID) -> None:
        # pylint: disable=no-member
        model = LicenseModel.objects.select_for_update().filter(id=license_id).first()
        if model is None:
            raise LicenseNotFoundError()
        self.reconciler.release(model)
        model.delete()

    async def delete(self, license_id: uuid.UUID) -> None:
        await run_atomic_async(self._delete, license_id)
