# This file implements the profile half of authentication: reading and writing a user's profile row.
# Credential checks and sessions belong to the identity provider; this service only sees user ids.
# Missing ids are reported as AUTH_USER_NOT_FOUND so routes can tell "no user" from "no row".

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fairway.resources.errors import ErrorCode, ServiceError
from fairway.resources.key_case import to_app_case
from fairway.resources.resource_service import Record, ResourceService
from fairway.resources.response_envelope import (
    ServiceResponse,
    create_error_response,
    create_success_response,
)


class AuthService:
    """User profiles keyed by the identity provider's user id."""

    def __init__(self, resources: ResourceService, *, profiles_table: str = "profiles") -> None:
        self.resources = resources
        self.profiles = resources.table(profiles_table)

    def get_user_profile(self, user_id: Any) -> ServiceResponse[Record]:
        if user_id in (None, ""):
            return self._no_user()
        return self.profiles.fetch_by_id(user_id)

    def create_user_profile(self, user_id: Any, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        if user_id in (None, ""):
            return self._no_user()
        payload = to_app_case(dict(data))
        payload["id"] = user_id
        return self.profiles.insert_record(payload)

    def update_profile(self, user_id: Any, data: Mapping[str, Any]) -> ServiceResponse[Record]:
        """Update profile fields. The ``id`` column is never written."""

        if user_id in (None, ""):
            return self._no_user()
        payload = to_app_case(dict(data))
        payload.pop("id", None)
        return self.profiles.update_record(user_id, payload)

    def is_user_admin(self, user_id: Any) -> ServiceResponse[bool]:
        profile = self.get_user_profile(user_id)
        if not profile.ok:
            return create_error_response(profile.error)
        return create_success_response(bool(profile.data.get("isAdmin")))

    def _no_user(self) -> ServiceResponse[Any]:
        error = ServiceError("No user id was provided", ErrorCode.AUTH_USER_NOT_FOUND)
        self.resources.log(logging.WARNING, error.message, {"code": error.code.value})
        return create_error_response(error)
