"""
Initial data load.

Fetches licenses, applications, users and license counts concurrently
and fills the stores in one go.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List

from pydantic import ValidationError

from inventory_client.errors import AppLoadError, internal_error, parse_error
from inventory_client.http import json_or_none
from inventory_client.models import ApplicationRecord, LicenseCounts, LicenseRecord, UserRecord
from inventory_client.stores.resources.license_store import parse_licenses

logger = logging.getLogger(__name__)


@dataclass
class LoadedData:
    licenses: List[LicenseRecord]
    applications: List[ApplicationRecord]
    users: List[UserRecord]
    counts: LicenseCounts


async def fetch_all_data(state) -> LoadedData:
    """
    Load every collection the front end starts with.

    Args:
        state: ClientState whose stores are filled

    Raises:
        AppLoadError: If any of the requests fails; no store is changed
    """
    api = state.api
    responses = await asyncio.gather(
        api.get("/api/licenses"),
        api.get("/api/applications"),
        api.get("/api/user"),
        api.get("/api/licenses/counts"),
        return_exceptions=True,
    )

    for response in responses:
        if isinstance(response, Exception):
            logger.error("Failed to load data: %s", response)
            raise AppLoadError(internal_error("Failed to load data.")) from response
        if not response.is_success:
            error = parse_error(
                json_or_none(response), response.status_code, "Failed to load data."
            )
            logger.error("Failed to load data: %s %s", response.request.url, error.message)
            raise AppLoadError(error)

    license_response, application_response, user_response, counts_response = responses
    try:
        data = LoadedData(
            licenses=parse_licenses(license_response.json()),
            applications=[
                ApplicationRecord.model_validate(item) for item in application_response.json()
            ],
            users=[UserRecord.model_validate(item) for item in user_response.json()],
            counts=LicenseCounts.model_validate(counts_response.json()),
        )
    except (ValueError, TypeError, ValidationError) as e:
        logger.error("Failed to load data: unreadable response: %s", e)
        raise AppLoadError(internal_error("Failed to load data.")) from e

    state.licenses.set(data.licenses)
    state.applications.set(data.applications)
    state.users.set(data.users)
    state.licenses.counts.set(data.counts)
    logger.info(
        "Loaded %d licenses, %d applications and %d users",
        len(data.licenses),
        len(data.applications),
        len(data.users),
    )
    return data
