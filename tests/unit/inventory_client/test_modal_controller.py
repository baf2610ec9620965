"""
Unit tests for the modal controller.
"""

import asyncio
import uuid

import pytest
from payloads import application_json, license_json

from inventory_client.models import ApplicationRecord, LicenseRecord
from inventory_client.stores.modal import (
    ApplicationModalMode,
    LicenseModalMode,
    is_uuid_v4,
)
from inventory_client.stores.request_state import RequestKey


@pytest.fixture
def stored_license(state):
    record = LicenseRecord.model_validate(license_json())
    state.licenses.set([record])
    return record


def test_is_uuid_v4():
    """Test only lowercase version-4 UUIDs are accepted."""
    assert is_uuid_v4(str(uuid.uuid4()))
    assert not is_uuid_v4(str(uuid.uuid1()))
    assert not is_uuid_v4("not-a-uuid")
    assert not is_uuid_v4("")


class TestHandleNavigation:
    """Tests for URL driven modal state."""

    @pytest.mark.asyncio
    async def test_add(self, state, navigator):
        """Test ?modal=add opens the add form."""
        navigator.url = "http://inventory.local/?modal=add"
        await state.modal.handle_navigation()
        assert state.modal.license_mode.get() == LicenseModalMode.ADD
        assert navigator.visited == []

    @pytest.mark.asyncio
    async def test_view_loads_deep_copy(self, state, navigator, stored_license):
        """Test ?modal=view&id=<uuid> loads a copy of the record."""
        navigator.url = f"http://inventory.local/?modal=view&id={stored_license.id}"
        await state.modal.handle_navigation()

        assert state.modal.license_mode.get() == LicenseModalMode.VIEW
        current = state.licenses.current.get()
        assert current == stored_license
        assert current is not stored_license

        current.comment = "edited"
        assert state.licenses.get()[0].comment == ""

    @pytest.mark.asyncio
    async def test_view_missing_record_records_not_found(self, state, navigator):
        """Test viewing a record missing from the collection records NotFound."""
        navigator.url = f"http://inventory.local/?modal=view&id={uuid.uuid4()}"
        await state.modal.handle_navigation()

        assert state.modal.license_mode.get() == LicenseModalMode.VIEW
        assert state.requests.get(RequestKey.LICENSE_FETCH).error.type == "NotFound"

    @pytest.mark.asyncio
    async def test_invalid_id_redirects(self, state, navigator):
        """Test ?modal=view&id=not-a-uuid redirects to the root with no modal."""
        navigator.url = "http://inventory.local/?modal=view&id=not-a-uuid"
        await state.modal.handle_navigation()

        assert navigator.visited == ["/"]
        assert state.modal.license_mode.get() == LicenseModalMode.CLOSED

    @pytest.mark.asyncio
    async def test_add_with_id_redirects(self, state, navigator):
        """Test add mode with an id is not a valid route."""
        navigator.url = f"http://inventory.local/?modal=add&id={uuid.uuid4()}"
        await state.modal.handle_navigation()
        assert navigator.visited == ["/"]

    @pytest.mark.asyncio
    async def test_no_params_closes_and_resets(self, state, navigator, stored_license):
        """Test the bare URL closes modals and resets the in-progress record."""
        state.licenses.current.set(stored_license)
        state.modal.show_assigned_users.set(True)
        state.modal.application_mode.set(ApplicationModalMode.EDIT)

        await state.modal.handle_navigation()

        assert state.modal.license_mode.get() == LicenseModalMode.CLOSED
        assert state.modal.application_mode.get() == ApplicationModalMode.CLOSED
        assert state.modal.show_assigned_users.get() is False
        assert state.licenses.current.get().id != stored_license.id


class TestModalActions:
    """Tests for explicit modal actions."""

    @pytest.mark.asyncio
    async def test_open_view_license(self, state, navigator, stored_license):
        """Test opening a license navigates and loads it."""
        await state.modal.open_view_license(str(stored_license.id))
        assert navigator.visited == [f"?modal=view&id={stored_license.id}"]
        assert state.modal.license_mode.get() == LicenseModalMode.VIEW
        assert state.licenses.current.get().id == stored_license.id

    @pytest.mark.asyncio
    async def test_open_view_license_invalid(self, state, navigator):
        """Test opening an invalid id goes back to the root."""
        await state.modal.open_view_license("42")
        assert navigator.visited == ["/"]
        assert state.modal.license_mode.get() == LicenseModalMode.CLOSED

    @pytest.mark.asyncio
    async def test_open_add_license_clears_fetch_error(self, state, navigator):
        """Test opening the add form clears a previous fetch error."""
        state.licenses.load(uuid.uuid4())
        await state.modal.open_add_license()

        assert navigator.visited == ["?modal=add"]
        assert state.modal.license_mode.get() == LicenseModalMode.ADD
        assert state.requests.get(RequestKey.LICENSE_FETCH).error is None

    @pytest.mark.asyncio
    async def test_close_license(self, state, navigator, stored_license):
        """Test closing the license modal resets once the transition completes."""
        state.licenses.load(stored_license.id)
        transition = await state.modal.close_license()

        assert navigator.visited == ["/"]
        assert state.licenses.current.get().id == stored_license.id
        transition.complete()
        assert state.licenses.current.get().id != stored_license.id

    @pytest.mark.asyncio
    async def test_reopen_before_close_fallback_keeps_new_license(self, state, navigator):
        """Test reopening a license right after closing one is not blanked by the old close."""
        first = LicenseRecord.model_validate(license_json())
        second = LicenseRecord.model_validate(license_json(comment="second"))
        state.licenses.set([first, second])

        await state.modal.open_view_license(str(first.id))
        transition = await state.modal.close_license()
        await state.modal.open_view_license(str(second.id))
        await asyncio.sleep(0.2)

        assert state.licenses.current.get() == second
        assert transition.done is True

    @pytest.mark.asyncio
    async def test_close_twice_resets_once(self, state, navigator, stored_license):
        """Test closing again replaces the pending close transition."""
        state.licenses.load(stored_license.id)
        first = await state.modal.close_license()
        second = await state.modal.close_license()

        assert first.done is True
        assert state.licenses.current.get().id == stored_license.id
        second.complete()
        assert state.licenses.current.get().id != stored_license.id

    def test_assigned_users_modal(self, state):
        """Test the assigned users flag toggles."""
        state.modal.open_assigned_users()
        assert state.modal.show_assigned_users.get() is True
        state.modal.close_assigned_users()
        assert state.modal.show_assigned_users.get() is False

    def test_application_modal(self, state):
        """Test application modal modes."""
        state.modal.open_add_application()
        assert state.modal.application_mode.get() == ApplicationModalMode.ADD
        transition = state.modal.close_application()
        assert state.modal.application_mode.get() == ApplicationModalMode.CLOSED
        transition.complete()
        assert state.applications.current.get().name == ""

    @pytest.mark.asyncio
    async def test_edit_application_after_close_keeps_record(self, state):
        """Test editing an application right after closing the modal keeps it."""
        application = ApplicationRecord.model_validate(application_json(name="Linear"))
        state.modal.open_edit_application(application)
        state.modal.close_application()
        state.modal.open_edit_application(application)
        await asyncio.sleep(0.2)

        assert state.applications.current.get().name == "Linear"
