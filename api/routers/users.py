"""
Users router.

Account provisioning, profile reads and updates, soft delete/restore and the
public username/email availability checks.
"""

import logging
import random
import time

from fastapi import APIRouter, Depends, Query, status

from api.deps import (
    get_current_principal,
    get_user_service,
    rate_limit,
    require_permissions,
)
from api.schemas import (
    ExistenceCheckResponse,
    PagedResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)
from api.schemas.common import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from application.authorization import DELETE_USERS, READ_USERS, Principal
from application.use_cases import UserService
from backend.rate_limit import ACCOUNT_CREATION, ACCOUNT_DELETION, EXISTENCE_CHECK

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/users",
    tags=["Users"],
)

# Seconds; blurs response timing on the public existence checks
_CHECK_DELAY_RANGE = (0.05, 0.15)


def _jitter() -> None:
    time.sleep(random.uniform(*_CHECK_DELAY_RANGE))


# =============================================================================
# Public existence checks
# =============================================================================


@router.get(
    "/check-username",
    response_model=ExistenceCheckResponse,
    dependencies=[Depends(rate_limit(EXISTENCE_CHECK))],
)
def check_username(
    username: str = Query(..., min_length=1, max_length=50),
    service: UserService = Depends(get_user_service),
):
    """Whether any account, deleted ones included, holds ``username``."""
    exists = service.username_exists(username)
    _jitter()
    return ExistenceCheckResponse(exists=exists)


@router.get(
    "/check-email",
    response_model=ExistenceCheckResponse,
    dependencies=[Depends(rate_limit(EXISTENCE_CHECK))],
)
def check_email(
    email: str = Query(..., min_length=1, max_length=255),
    service: UserService = Depends(get_user_service),
):
    """Whether any account, deleted ones included, holds ``email``."""
    exists = service.email_exists(email)
    _jitter()
    return ExistenceCheckResponse(exists=exists)


# =============================================================================
# Current user
# =============================================================================


@router.get("/me", response_model=UserResponse)
def get_me(
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    """The caller's own account, created on first sign-in."""
    return service.get_current_user(principal)


# =============================================================================
# Administration
# =============================================================================


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limit(ACCOUNT_CREATION))],
)
def create_user(
    request: UserCreateRequest,
    principal: Principal = Depends(require_permissions(READ_USERS)),
    service: UserService = Depends(get_user_service),
):
    """Provision an account for an identity-provider subject."""
    user = service.create_user(request.model_dump())
    logger.info(f"User {user.id} provisioned by {principal.subject}")
    return user


@router.get("", response_model=PagedResponse[UserResponse])
def list_users(
    page: int = Query(0, ge=0),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    principal: Principal = Depends(require_permissions(READ_USERS)),
    service: UserService = Depends(get_user_service),
):
    result = service.list_users(page, size)
    return PagedResponse.from_page(
        result, [UserResponse.model_validate(user) for user in result.items]
    )


@router.get("/search", response_model=list[UserResponse])
def search_users(
    first_name: str = Query(..., min_length=1, max_length=50),
    principal: Principal = Depends(require_permissions(READ_USERS)),
    service: UserService = Depends(get_user_service),
):
    """Case-insensitive substring match on first name."""
    return service.search_by_first_name(first_name)


# =============================================================================
# Single user
# =============================================================================


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    return service.get_user(user_id, principal)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    request: UserUpdateRequest,
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    """Update the caller's own profile; ``version`` guards lost updates."""
    return service.update_user(user_id, request.model_dump(exclude_unset=True), principal)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(rate_limit(ACCOUNT_DELETION))],
)
def delete_user(
    user_id: int,
    principal: Principal = Depends(require_permissions(DELETE_USERS)),
    service: UserService = Depends(get_user_service),
):
    service.delete_user(user_id)


@router.post("/{user_id}/restore", response_model=UserResponse)
def restore_user(
    user_id: int,
    principal: Principal = Depends(require_permissions(DELETE_USERS)),
    service: UserService = Depends(get_user_service),
):
    return service.restore_user(user_id)
