"""
Unit tests for license domain services.
"""

import uuid
from datetime import date

import pytest

from licenses.domain.services import AssociationPlanner, ExpirationWindow


class TestAssociationPlanner:
    """Tests for AssociationPlanner."""

    def test_diff_users(self):
        """Test only the symmetric difference is touched."""
        kept, removed, added = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
        to_add, to_remove = AssociationPlanner.diff_users([kept, removed], [kept, added])
        assert to_add == {added}
        assert to_remove == {removed}

    def test_diff_users_unchanged(self):
        """Test identical sets produce no changes."""
        user = uuid.uuid4()
        assert AssociationPlanner.diff_users([user], [user]) == (set(), set())

    def test_diff_users_clear(self):
        """Test an empty submission removes everyone."""
        users = {uuid.uuid4(), uuid.uuid4()}
        to_add, to_remove = AssociationPlanner.diff_users(users, [])
        assert to_add == set()
        assert to_remove == users

    def test_application_changes(self):
        """Test a move decrements the old and increments the new application."""
        old, new = uuid.uuid4(), uuid.uuid4()
        assert AssociationPlanner.application_changes(old, new) == (old, new)
        assert AssociationPlanner.application_changes(None, new) == (None, new)
        assert AssociationPlanner.application_changes(old, old) == (None, None)


class TestExpirationWindow:
    """Tests for ExpirationWindow."""

    def test_near_expiration(self):
        """Test the window is inclusive on both ends."""
        start, end = ExpirationWindow.near_expiration(date(2024, 1, 31), 30)
        assert start == date(2024, 1, 31)
        assert end == date(2024, 3, 1)

    def test_negative_window_rejected(self):
        """Test negative windows are rejected."""
        with pytest.raises(ValueError):
            ExpirationWindow.near_expiration(date(2024, 1, 1), -1)
