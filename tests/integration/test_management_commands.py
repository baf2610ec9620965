"""
Integration tests for management commands.
"""

from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from applications.infrastructure.models import Application as ApplicationModel
from licenses.infrastructure.models import License as LicenseModel
from users.infrastructure.models import User as UserModel


def run(*args):
    out = StringIO()
    call_command(*args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
@pytest.mark.integration
class TestReconcileLicenseAssociations:
    """Tests for the reconcile_license_associations command."""

    def test_consistent(self, db_license):
        output = run("reconcile_license_associations")
        assert "Found 0 application(s)" in output
        assert "All license counts are consistent" in output

    def test_reports_without_fixing(self, db_license, db_application):
        """Test drift is only reported without --fix."""
        ApplicationModel.objects.filter(id=db_application.id).update(license_associations=3)

        output = run("reconcile_license_associations")

        assert "Figma" in output
        assert "stored 3, actual 1" in output
        assert "Run with --fix" in output
        db_application.refresh_from_db()
        assert db_application.license_associations == 3

    def test_fix(self, db_license, db_application):
        ApplicationModel.objects.filter(id=db_application.id).update(license_associations=3)

        output = run("reconcile_license_associations", "--fix")

        assert "Successfully repaired 1 application(s)" in output
        db_application.refresh_from_db()
        assert db_application.license_associations == 1


@pytest.mark.django_db
@pytest.mark.integration
class TestSeedInventory:
    """Tests for the seed_inventory command."""

    def test_seeds_consistent_data(self):
        """Test seeding creates data whose counts need no repair."""
        output = run("seed_inventory")

        assert "Seeded 4 application(s), 4 user(s) and 4 license(s)" in output
        assert get_user_model().objects.filter(username="admin", is_superuser=True).exists()
        assert ApplicationModel.objects.count() == 4
        assert UserModel.objects.count() == 4
        assert LicenseModel.objects.count() == 4
        assert "All license counts are consistent" in run("reconcile_license_associations")

    def test_skip_flags(self):
        output = run("seed_inventory", "--skip-superuser", "--skip-licenses")

        assert "0 license(s)" in output
        assert not get_user_model().objects.filter(username="admin").exists()
        assert LicenseModel.objects.count() == 0
