"""
qa_user.api.routers.users

User account endpoints.

Responsibilities:
- Public: login and registration.
- Protected: password change and user lookups.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED

from qa_user.api.deps import account_service, session_issuer
from qa_user.api.errors import unwrap
from qa_user.api.schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UpdatePasswordRequest,
    UpdatePasswordResponse,
    UserResponse,
)
from qa_user.auth.deps import require_principal
from qa_user.auth.models import Principal
from qa_user.services.account_service import AccountService, UserProfile
from qa_user.services.session_issuer import SessionIssuer

router = APIRouter(prefix="/api/user", tags=["users"])


def _user_response(profile: UserProfile) -> UserResponse:
    return UserResponse(
        user_id=profile.user_id,
        username=profile.username,
        nickname=profile.nickname,
        register_time=profile.register_time,
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    issuer: SessionIssuer = Depends(session_issuer),
) -> LoginResponse:
    result = unwrap(await issuer.login(username=body.username, password=body.password))
    return LoginResponse(
        token=result.token,
        user_id=result.user_id,
        username=result.username,
        nickname=result.nickname,
        email=result.email,
        login_time=result.login_time,
    )


@router.post("/register", response_model=RegisterResponse, status_code=HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    accounts: AccountService = Depends(account_service),
) -> RegisterResponse:
    profile = unwrap(
        await accounts.register(
            username=body.username,
            password=body.password,
            confirm_password=body.confirm_password,
            nickname=body.nickname,
            email=body.email,
        )
    )
    return RegisterResponse(
        user_id=profile.user_id,
        username=profile.username,
        nickname=profile.nickname,
        email=profile.email,
        register_time=profile.register_time,
    )


@router.post("/updatePassword", response_model=UpdatePasswordResponse)
async def update_password(
    body: UpdatePasswordRequest,
    principal: Principal = Depends(require_principal),
    accounts: AccountService = Depends(account_service),
) -> UpdatePasswordResponse:
    changed = unwrap(
        await accounts.change_password(
            principal=principal,
            username=body.username,
            old_password=body.old_password,
            new_password=body.new_password,
            confirm_new_password=body.confirm_new_password,
        )
    )
    return UpdatePasswordResponse(
        user_id=changed.user_id,
        username=changed.username,
        update_time=changed.update_time,
    )


@router.get(
    "/username/{username}",
    response_model=UserResponse,
    dependencies=[Depends(require_principal)],
)
async def get_user_by_username(
    username: str,
    accounts: AccountService = Depends(account_service),
) -> UserResponse:
    return _user_response(unwrap(await accounts.get_by_username(username)))


@router.get("/{user_id}", response_model=UserResponse, dependencies=[Depends(require_principal)])
async def get_user_by_id(
    user_id: int,
    accounts: AccountService = Depends(account_service),
) -> UserResponse:
    return _user_response(unwrap(await accounts.get_by_id(user_id)))


# --- Module Notes -----------------------------------------------------------
# Login and register rely only on the app-wide `bind_principal`, which never rejects.
