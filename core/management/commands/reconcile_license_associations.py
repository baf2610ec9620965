"""
Django management command to audit application license counts.

Recomputes every application's license count from the license rows and
reports the applications whose stored count has drifted. With --fix the
stored counts are overwritten in one transaction.
"""

import logging

from django.core.management.base import BaseCommand

from core.infrastructure.database import run_atomic
from core.metrics import association_drift_total
from licenses.infrastructure.association_reconciler import DjangoAssociationReconciler

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to audit and repair application license counts."""

    help = "Report (and optionally repair) drifted application license counts"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--fix",
            action="store_true",
            help="Overwrite drifted counts with the recomputed values",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        reconciler = DjangoAssociationReconciler()

        drift = reconciler.find_drift()
        self.stdout.write(f"Found {len(drift)} application(s) with drifted license counts")
        for item in drift:
            self.stdout.write(
                f"  - {item.name} ({item.application_id}): stored {item.stored}, "
                f"actual {item.actual}"
            )

        if not drift:
            # pylint: disable=no-member
            self.stdout.write(self.style.SUCCESS("All license counts are consistent"))
            return

        association_drift_total.inc(len(drift))

        if not options["fix"]:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("Run with --fix to repair the counts"))
            return

        repaired = run_atomic(reconciler.repair, drift)
        logger.info("Repaired %d application license count(s)", repaired)
        self.stdout.write(
            # pylint: disable=no-member
            self.style.SUCCESS(f"Successfully repaired {repaired} application(s)")
        )
