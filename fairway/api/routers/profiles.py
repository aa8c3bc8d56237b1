# This file defines profile endpoints keyed by the identity provider's user id.
# The id in the path is authoritative; bodies cannot change it.

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from fairway.api.dependencies import ConfigDep, get_auth_service
from fairway.api.reads import read_with_retry
from fairway.api.response_envelope import build_success_body
from fairway.api.schemas.common import ERROR_RESPONSES
from fairway.api.schemas.profile_schemas import ProfileCreate, ProfileUpdate
from fairway.services.auth_service import AuthService

router = APIRouter(prefix="/profiles", tags=["profiles"], responses=ERROR_RESPONSES)
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


@router.get("/{user_id}")
def get_profile(user_id: str, service: AuthServiceDep, config: ConfigDep) -> dict[str, Any]:
    return build_success_body(
        read_with_retry(service.resources, config, lambda: service.get_user_profile(user_id))
    )


@router.get("/{user_id}/admin")
def get_admin_flag(user_id: str, service: AuthServiceDep, config: ConfigDep) -> dict[str, Any]:
    return build_success_body(
        read_with_retry(service.resources, config, lambda: service.is_user_admin(user_id))
    )


@router.post("/{user_id}", status_code=201)
def create_profile(user_id: str, body: ProfileCreate, service: AuthServiceDep) -> dict[str, Any]:
    return build_success_body(service.create_user_profile(user_id, body.to_payload()))


@router.patch("/{user_id}")
def update_profile(user_id: str, body: ProfileUpdate, service: AuthServiceDep) -> dict[str, Any]:
    return build_success_body(service.update_profile(user_id, body.to_payload()))
