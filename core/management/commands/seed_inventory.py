"""
Django management command to create sample data for development.

Creates:
- A superuser (admin/admin)
- A handful of applications
- A handful of users
- Licenses spread across the named filters (assigned, unassigned,
  near expiration, expired)
"""

import logging
from datetime import timedelta
from decimal import Decimal

from asgiref.sync import async_to_sync
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from applications.domain.application import Application
from applications.infrastructure.repositories.django_application_repository import (
    DjangoApplicationRepository,
)
from licenses.domain.license import License, LicenseAttributes
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from users.infrastructure.repositories.django_user_repository import DjangoUserRepository

logger = logging.getLogger(__name__)
AuthUser = get_user_model()

SAMPLE_APPLICATIONS = [
    ("Figma", "https://figma.com"),
    ("Slack", "https://slack.com"),
    ("JetBrains", "https://www.jetbrains.com"),
    ("Adobe Creative Cloud", "https://www.adobe.com/creativecloud.html"),
]

SAMPLE_USERS = ["Alice Johnson", "Bob Smith", "Carol White", "Dan Brown"]


class Command(BaseCommand):
    """Command to seed the inventory."""

    help = "Create sample data (superuser, applications, users, licenses)"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--skip-superuser",
            action="store_true",
            help="Skip creating superuser",
        )
        parser.add_argument(
            "--skip-licenses",
            action="store_true",
            help="Skip creating licenses",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        if not options["skip_superuser"]:
            self._create_superuser()

        summary = async_to_sync(self._seed)(with_licenses=not options["skip_licenses"])

        self.stdout.write(
            # pylint: disable=no-member
            self.style.SUCCESS(
                f"Seeded {summary['applications']} application(s), {summary['users']} "
                f"user(s) and {summary['licenses']} license(s)"
            )
        )

    def _create_superuser(self):
        if AuthUser.objects.filter(username="admin").exists():
            self.stdout.write("Superuser 'admin' already exists")
            return
        AuthUser.objects.create_superuser("admin", "admin@example.com", "admin")
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS("Created superuser admin/admin"))

    async def _seed(self, with_licenses: bool) -> dict:
        application_repo = DjangoApplicationRepository()
        user_repo = DjangoUserRepository()
        license_repo = DjangoLicenseRepository()

        applications = []
        for name, link in SAMPLE_APPLICATIONS:
            applications.append(await application_repo.add(Application.create(name, link)))

        users = []
        for name in SAMPLE_USERS:
            user, _ = await user_repo.find_or_create(name)
            users.append(user)

        created_licenses = 0
        if with_licenses:
            today = timezone.localdate()
            plans = [
                (applications[0], today + timedelta(days=10), Decimal("144.00"), users[:2]),
                (applications[1], today + timedelta(days=200), Decimal("96.00"), users[1:]),
                (applications[2], today - timedelta(days=5), Decimal("249.00"), []),
                (applications[3], None, None, users[:1]),
            ]
            for application, renewal_date, cost, assigned in plans:
                attributes = LicenseAttributes(
                    application_id=application.id,
                    renewal_date=renewal_date,
                    auto_renewal=renewal_date is not None,
                    cost=cost,
                    renewal_interval="yearly",
                    category="Software",
                    status="Active",
                    contact_person="IT Department",
                )
                await license_repo.create(
                    License.create(attributes), [user.id for user in assigned]
                )
                created_licenses += 1
                logger.info("Seeded license for %s", application.name)

        return {
            "applications": len(applications),
            "users": len(users),
            "licenses": created_licenses,
        }
