"""
Unit tests for Application entity.
"""

import pytest

from applications.domain.application import Application


class TestApplication:
    """Tests for Application entity."""

    def test_create(self):
        """Test creating an application starts with no licenses."""
        application = Application.create(name=" Figma ", link="https://figma.com")
        assert application.id is not None
        assert application.name == "Figma"
        assert application.link == "https://figma.com"
        assert application.license_associations == 0
        assert application.can_be_deleted

    def test_create_without_link(self):
        """Test link defaults to empty."""
        assert Application.create(name="Slack").link == ""

    def test_empty_name_rejected(self):
        """Test empty names are rejected."""
        with pytest.raises(ValueError, match="cannot be empty"):
            Application.create(name="   ")

    def test_rename_keeps_identity_and_count(self):
        """Test renaming returns a new instance with the same id and count."""
        application = Application.create(name="Figma")
        renamed = application.rename("Figma Pro", "https://figma.com/pro")
        assert renamed.id == application.id
        assert renamed.name == "Figma Pro"
        assert renamed.license_associations == application.license_associations
        assert application.name == "Figma"

    def test_referenced_application_cannot_be_deleted(self):
        """Test applications with licenses are not deletable."""
        application = Application.create(name="Figma")
        referenced = Application(
            id=application.id,
            name=application.name,
            link=application.link,
            license_associations=2,
            created_at=application.created_at,
            updated_at=application.updated_at,
        )
        assert not referenced.can_be_deleted

    def test_negative_count_rejected(self):
        """Test license associations cannot be negative."""
        application = Application.create(name="Figma")
        with pytest.raises(ValueError):
            Application(
                id=application.id,
                name="Figma",
                link="",
                license_associations=-1,
                created_at=application.created_at,
                updated_at=application.updated_at,
            )
