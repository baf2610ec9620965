"""
Unit tests for the application, license and user stores.
"""

import json
import uuid

import pytest
from payloads import application_json, counts_json, error_json, license_json, user_json

from inventory_client.models import ApplicationRecord, LicenseRecord
from inventory_client.stores.request_state import RequestKey, RequestStatus


class TestApplicationStore:
    """Tests for ApplicationStore."""

    @pytest.mark.asyncio
    async def test_fetch_all(self, state, router):
        """Test fetching replaces the collection."""
        router.add("GET", "/api/applications", body=[application_json(), application_json()])

        assert await state.applications.fetch_all() is True

        assert len(state.applications.get()) == 2
        assert state.requests.get(RequestKey.APPLICATION_FETCH).status == RequestStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_add_prepends_and_notifies(self, state, router, clock):
        """Test a created application is prepended and announced."""
        existing = ApplicationRecord.model_validate(application_json(name="Slack"))
        state.applications.set([existing])
        created = application_json(name="Figma")
        router.add("POST", "/api/applications", status=201, body=created)

        added = await state.applications.add(ApplicationRecord(name="Figma", link="https://figma.com"))

        assert added is True
        assert router.last_body() == {"name": "Figma", "link": "https://figma.com"}
        assert [item.name for item in state.applications.get()] == ["Figma", "Slack"]
        assert state.notifications.get()[-1].message == "Application added successfully"
        assert state.requests.buttons_disabled.get() is False
        assert clock.sleeps == [pytest.approx(1.0)]

    @pytest.mark.asyncio
    async def test_add_failure_keeps_collection(self, state, router):
        """Test a rejected add records the error and leaves the collection."""
        router.add(
            "POST",
            "/api/applications",
            status=400,
            body=error_json(400, "ValidationError", "The submitted data is invalid."),
        )

        added = await state.applications.add(ApplicationRecord(name="Figma"))

        assert added is False
        assert state.applications.get() == []
        request_state = state.requests.get(RequestKey.APPLICATION_POST)
        assert request_state.status == RequestStatus.ERROR
        assert request_state.error.message == "The submitted data is invalid."
        notification = state.notifications.get()[-1]
        assert notification.type == "alert"

    @pytest.mark.asyncio
    async def test_update_sends_token_and_refetches(self, state, router):
        """Test an update sends updatedAt and reloads the collection."""
        data = application_json(name="Figma")
        record = ApplicationRecord.model_validate(data)
        renamed = record.model_copy(update={"name": "Figma Pro"})
        router.add("PUT", f"/api/applications/{record.id}", status=204)
        router.add("GET", "/api/applications", body=[{**data, "name": "Figma Pro"}])

        assert await state.applications.update(renamed) is True

        assert router.requests[0].method == "PUT"
        body = json.loads(router.requests[0].content)
        assert body["name"] == "Figma Pro"
        assert body["updatedAt"].startswith("2024-01-01T10:00:00")
        assert [item.name for item in state.applications.get()] == ["Figma Pro"]

    @pytest.mark.asyncio
    async def test_update_conflict(self, state, router):
        """Test a stale token surfaces the conflict."""
        record = ApplicationRecord.model_validate(application_json())
        router.add(
            "PUT",
            f"/api/applications/{record.id}",
            status=409,
            body=error_json(409, "UpdateConflict", "The application was modified by another user."),
        )

        assert await state.applications.update(record) is False

        assert state.requests.get(RequestKey.APPLICATION_POST).error.type == "UpdateConflict"

    @pytest.mark.asyncio
    async def test_delete_removes_locally(self, state, router):
        """Test a deleted application leaves the collection."""
        keep = ApplicationRecord.model_validate(application_json(name="Slack"))
        gone = ApplicationRecord.model_validate(application_json(name="Figma"))
        state.applications.set([keep, gone])
        router.add("DELETE", f"/api/applications/{gone.id}", status=204)

        assert await state.applications.delete(str(gone.id)) is True

        assert state.applications.get() == [keep]

    @pytest.mark.asyncio
    async def test_delete_in_use(self, state, router):
        """Test a referenced application stays put."""
        record = ApplicationRecord.model_validate(application_json(licenseAssociations=2))
        state.applications.set([record])
        router.add(
            "DELETE",
            f"/api/applications/{record.id}",
            status=409,
            body=error_json(409, "DataDeletionError", "Cannot delete application."),
        )

        assert await state.applications.delete(record.id) is False

        assert state.applications.get() == [record]
        assert state.requests.get(RequestKey.APPLICATION_DELETE).error.type == "DataDeletionError"

    @pytest.mark.asyncio
    async def test_transport_failure_is_sticky_alert(self, state, router):
        """Test a network failure raises an alert that does not time out."""
        router.fail("GET", "/api/applications")

        assert await state.applications.fetch_all() is False

        error = state.requests.get(RequestKey.APPLICATION_FETCH).error
        assert error.type == "InternalServerError"
        assert error.status == 500
        notification = state.notifications.get()[-1]
        assert notification.type == "alert"
        assert notification.timeout_ms is None

    @pytest.mark.asyncio
    async def test_fetch_unreadable_body_keeps_collection(self, state, router):
        """Test a successful status with an HTML body is an internal error."""
        existing = ApplicationRecord.model_validate(application_json())
        state.applications.set([existing])
        router.add("GET", "/api/applications", text="<html>oops</html>")

        assert await state.applications.fetch_all() is False

        assert state.applications.get() == [existing]
        request_state = state.requests.get(RequestKey.APPLICATION_FETCH)
        assert request_state.status == RequestStatus.ERROR
        assert request_state.error.type == "InternalServerError"
        assert state.notifications.get()[-1].type == "alert"

    @pytest.mark.asyncio
    async def test_add_wrong_shape_keeps_collection(self, state, router):
        """Test a created record that does not validate is not prepended."""
        router.add("POST", "/api/applications", status=201, body={"id": "nope"})

        assert await state.applications.add(ApplicationRecord(name="Figma")) is False

        assert state.applications.get() == []
        assert state.requests.get(RequestKey.APPLICATION_POST).error.type == "InternalServerError"
        assert state.requests.buttons_disabled.get() is False


class TestLicenseStore:
    """Tests for LicenseStore."""

    @pytest.mark.asyncio
    async def test_add_refreshes_counts(self, state, router):
        """Test adding a license prepends it and reloads the counts."""
        created = license_json()
        router.add("POST", "/api/licenses", status=201, body=created)
        router.add("GET", "/api/licenses/counts", body=counts_json(all=1, unassigned=1))
        draft = LicenseRecord.model_validate({**created, "id": str(uuid.uuid4())})

        assert await state.licenses.add(draft) is True

        post_body = json.loads(router.requests[0].content)
        assert "id" not in post_body
        assert post_body["applicationId"] == created["applicationId"]
        assert post_body["users"] == []
        assert [str(item.id) for item in state.licenses.get()] == [created["id"]]
        assert state.licenses.counts.get().unassigned == 1

    @pytest.mark.asyncio
    async def test_update_patches_in_place(self, state, router):
        """Test an update re-reads the license and patches the collection in place."""
        first, second = license_json(), license_json()
        state.licenses.set([LicenseRecord.model_validate(item) for item in (first, second)])
        edited = state.licenses.find(second["id"]).model_copy(update={"comment": "renewed"})
        refreshed = {**second, "comment": "renewed", "updatedAt": "2024-02-01T10:00:00Z"}
        router.add("PUT", f"/api/licenses/{second['id']}", status=204)
        router.add("GET", f"/api/licenses/{second['id']}", body=refreshed)
        router.add("GET", "/api/licenses/counts", body=counts_json(all=2))

        assert await state.licenses.update(edited) is True

        body = json.loads(router.requests[0].content)
        assert body["currentLicense"] == {
            "id": second["id"],
            "applicationId": second["applicationId"],
        }
        assert body["updatedLicense"]["comment"] == "renewed"
        assert body["updatedLicense"]["updatedAt"].startswith("2024-01-01T10:00:00")
        licenses = state.licenses.get()
        assert [str(item.id) for item in licenses] == [first["id"], second["id"]]
        assert licenses[1].comment == "renewed"
        assert state.licenses.current.get().comment == "renewed"
        assert state.notifications.get()[0].message == "License was updated successfully"

    @pytest.mark.asyncio
    async def test_update_conflict_leaves_collection(self, state, router):
        """Test a conflicting update changes nothing locally."""
        data = license_json()
        state.licenses.set([LicenseRecord.model_validate(data)])
        router.add(
            "PUT",
            f"/api/licenses/{data['id']}",
            status=409,
            body=error_json(409, "UpdateConflict", "The license was modified by another user."),
        )

        edited = state.licenses.find(data["id"]).model_copy(update={"comment": "x"})
        assert await state.licenses.update(edited) is False

        assert state.licenses.get()[0].comment == ""
        assert router.targets() == [f"PUT /api/licenses/{data['id']}"]

    @pytest.mark.asyncio
    async def test_delete(self, state, router):
        """Test deleting removes the license and reloads the counts."""
        data = license_json()
        state.licenses.set([LicenseRecord.model_validate(data)])
        router.add("DELETE", f"/api/licenses/{data['id']}", status=204)
        router.add("GET", "/api/licenses/counts", body=counts_json())

        assert await state.licenses.delete(data["id"]) is True

        assert state.licenses.get() == []
        assert router.targets()[-1] == "GET /api/licenses/counts"

    @pytest.mark.asyncio
    async def test_fetch_wrong_shape_keeps_collection(self, state, router):
        """Test records that do not validate leave the collection as it was."""
        existing = LicenseRecord.model_validate(license_json())
        state.licenses.set([existing])
        router.add("GET", "/api/licenses", body=[{"id": "nope"}])

        assert await state.licenses.fetch_all() is False

        assert state.licenses.get() == [existing]
        request_state = state.requests.get(RequestKey.LICENSE_FETCH)
        assert request_state.status == RequestStatus.ERROR
        assert request_state.error.type == "InternalServerError"

    @pytest.mark.asyncio
    async def test_update_unreadable_refresh_keeps_record(self, state, router):
        """Test a saved update whose re-read is not JSON leaves the local record."""
        data = license_json()
        state.licenses.set([LicenseRecord.model_validate(data)])
        router.add("PUT", f"/api/licenses/{data['id']}", status=204)
        router.add("GET", f"/api/licenses/{data['id']}", text="<html>oops</html>")
        router.add("GET", "/api/licenses/counts", body=counts_json(all=1))

        edited = state.licenses.find(data["id"]).model_copy(update={"comment": "x"})
        assert await state.licenses.update(edited) is True

        assert state.licenses.get()[0].comment == ""
        assert state.notifications.get()[-1].type == "alert"
        assert state.licenses.counts.get().all == 1

    def test_load_unknown_records_not_found(self, state):
        """Test loading a license missing from the collection."""
        assert state.licenses.load(uuid.uuid4()) is False
        error = state.requests.get(RequestKey.LICENSE_FETCH).error
        assert error.type == "NotFound"
        assert error.status == 404


class TestUserStore:
    """Tests for UserStore."""

    @pytest.mark.asyncio
    async def test_find_or_create_new_user(self, state, router):
        """Test a created user is prepended."""
        user = user_json("Carol White")
        router.add("POST", "/api/user/find-or-create", status=201, body={"user": user, "created": True})

        found = await state.users.find_or_create("Carol White")

        assert str(found.id) == user["id"]
        assert [item.name for item in state.users.get()] == ["Carol White"]

    @pytest.mark.asyncio
    async def test_find_or_create_existing_user(self, state, router):
        """Test an existing user is returned without changing the collection."""
        user = user_json()
        router.add("POST", "/api/user/find-or-create", body={"user": user, "created": False})

        found = await state.users.find_or_create("Alice Johnson")

        assert found.name == "Alice Johnson"
        assert state.users.get() == []

    @pytest.mark.asyncio
    async def test_delete_missing_user(self, state, router):
        """Test deleting an unknown user records NotFound."""
        user_id = uuid.uuid4()
        router.add(
            "DELETE",
            f"/api/user/delete/{user_id}",
            status=404,
            body=error_json(404, "NotFound", "User could not be found."),
        )

        assert await state.users.delete(user_id) is False

        assert state.requests.get(RequestKey.USER_DELETE).error.type == "NotFound"

    @pytest.mark.asyncio
    async def test_find_or_create_wrong_shape(self, state, router):
        """Test a response without a valid user resolves to None."""
        router.add(
            "POST", "/api/user/find-or-create", body={"user": {"id": "nope"}, "created": True}
        )

        assert await state.users.find_or_create("Carol White") is None

        assert state.users.get() == []
        assert state.requests.get(RequestKey.USER_POST).error.type == "InternalServerError"

    @pytest.mark.asyncio
    async def test_fetch_unreadable_body(self, state, router):
        """Test an HTML body on the user list is an internal error."""
        router.add("GET", "/api/user", text="<html>oops</html>")

        assert await state.users.fetch_all() is False

        assert state.requests.get(RequestKey.USER_FETCH).status == RequestStatus.ERROR
