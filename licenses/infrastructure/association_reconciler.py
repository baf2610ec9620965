"""
Association reconciler.

Keeps the denormalized application license counts and the license/user
assignment rows in agreement with license writes. Every method is
synchronous and expects to run inside the caller's transaction.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

from django.db.models import Count, F, Q

from applications.infrastructure.models import Application as ApplicationModel
from core.domain.exceptions import ApplicationNotFoundError, UserNotFoundError
from core.metrics import association_drift_total
from licenses.domain.services import AssociationPlanner
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.models import LicenseUser
from users.infrastructure.models import User as UserModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssociationDrift:
    """An application whose stored count disagrees with its license rows."""

    application_id: uuid.UUID
    name: str
    stored: int
    actual: int


class DjangoAssociationReconciler:
    """Django ORM implementation of association bookkeeping."""

    def assign_application(
        self, previous_id: Optional[uuid.UUID], new_id: Optional[uuid.UUID]
    ) -> None:
        """
        Move one license count from previous_id to new_id.

        Raises:
            ApplicationNotFoundError: If new_id does not exist
        """
        decrement, increment = AssociationPlanner.application_changes(previous_id, new_id)
        if decrement is not None:
            self._adjust(decrement, -1)
        if increment is not None:
            self._adjust(increment, 1)

    def _adjust(self, application_id: uuid.UUID, delta: int) -> None:
        # queryset.update() leaves updated_at alone, so counter moves never
        # invalidate a client's concurrency token for the application
        # pylint: disable=no-member
        if delta > 0:
            affected = ApplicationModel.objects.filter(id=application_id).update(
                license_associations=F("license_associations") + delta
            )
            if affected == 0:
                raise ApplicationNotFoundError()
            return

        affected = ApplicationModel.objects.filter(
            id=application_id,
            license_associations__gte=-delta,
        ).update(license_associations=F("license_associations") + delta)
        if affected == 0:
            association_drift_total.inc()
            logger.warning(
                "Skipped license count decrement for application %s",
                application_id,
                extra={"application_id": str(application_id), "delta": delta},
            )

    def reconcile_users(
        self, license_id: uuid.UUID, user_ids: Iterable[uuid.UUID]
    ) -> Tuple[Set[uuid.UUID], Set[uuid.UUID]]:
        """
        Bring a license's assignment rows in line with user_ids.

        Only the rows in the symmetric difference are inserted or deleted.

        Returns:
            Tuple of (added user IDs, removed user IDs)

        Raises:
            UserNotFoundError: If any submitted user does not exist
        """
        submitted = set(user_ids)
        # pylint: disable=no-member
        known = set(UserModel.objects.filter(id__in=submitted).values_list("id", flat=True))
        missing = submitted - known
        if missing:
            raise UserNotFoundError(
                details=(
                    f"Unknown user IDs: {', '.join(sorted(str(user_id) for user_id in missing))}. "
                    "The users might have been deleted. Please refresh and try again."
                )
            )

        current = LicenseUser.objects.filter(license_id=license_id).values_list(
            "user_id", flat=True
        )
        to_add, to_remove = AssociationPlanner.diff_users(current, submitted)
        if to_remove:
            LicenseUser.objects.filter(license_id=license_id, user_id__in=to_remove).delete()
        if to_add:
            LicenseUser.objects.bulk_create(
                [LicenseUser(license_id=license_id, user_id=user_id) for user_id in to_add]
            )
        logger.debug(
            "Reconciled users for license %s: +%d -%d", license_id, len(to_add), len(to_remove)
        )
        return to_add, to_remove

    def release(self, license_model: LicenseModel) -> None:
        """Drop a license's application count and all of its assignment rows."""
        self._adjust(license_model.application_id, -1)
        # pylint: disable=no-member
        LicenseUser.objects.filter(license_id=license_model.id).delete()

    def find_drift(self) -> List[AssociationDrift]:
        """
        Recompute counts from license rows.

        Returns:
            Applications whose stored count differs from the actual one
        """
        # pylint: disable=no-member
        drifted = (
            ApplicationModel.objects.annotate(actual=Count("licenses"))
            .filter(~Q(license_associations=F("actual")))
            .order_by("name")
        )
        return [
            AssociationDrift(
                application_id=model.id,
                name=model.name,
                stored=model.license_associations,
                actual=model.actual,
            )
            for model in drifted
        ]

    def repair(self, drift: Iterable[AssociationDrift]) -> int:
        """
        Overwrite drifted counts with the recomputed values.

        Returns:
            Number of applications repaired
        """
        repaired = 0
        for item in drift:
            # pylint: disable=no-member
            repaired += ApplicationModel.objects.filter(id=item.application_id).update(
                license_associations=item.actual
            )
            logger.info(
                "Repaired license count for application %s: %d -> %d",
                item.application_id,
                item.stored,
                item.actual,
            )
        return repaired
