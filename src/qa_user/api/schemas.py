"""
qa_user.api.schemas

Request/response bodies of the user API.

Field names are camelCase on the wire (`confirmPassword`, `userId`, `loginTime`) to stay
compatible with the gateway and the web client.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from qa_user.auth.passwords import MAX_PASSWORD_BYTES, password_byte_length


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _check_new_password(value: str) -> str:
    if password_byte_length(value) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes in UTF-8")
    return value


class LoginRequest(_CamelModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=256)


class RegisterRequest(_CamelModel):
    username: str = Field(min_length=1, max_length=64)
    nickname: str | None = Field(default=None, max_length=128)
    email: str | None = Field(default=None, max_length=255)
    password: str = Field(min_length=1, max_length=256)
    confirm_password: str = Field(min_length=1, max_length=256)

    @field_validator("password", "confirm_password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_new_password(v)


class UpdatePasswordRequest(_CamelModel):
    username: str = Field(min_length=1, max_length=64)
    old_password: str = Field(min_length=1, max_length=256)
    new_password: str = Field(min_length=1, max_length=256)
    confirm_new_password: str = Field(min_length=1, max_length=256)

    @field_validator("new_password", "confirm_new_password")
    @classmethod
    def validate_new_password(cls, v: str) -> str:
        return _check_new_password(v)


class BaseResponse(_CamelModel):
    success: bool = True
    message: str = "OK"
    error_code: int = 200


class LoginResponse(BaseResponse):
    token: str
    user_id: int
    username: str
    nickname: str | None = None
    email: str | None = None
    login_time: datetime


class RegisterResponse(BaseResponse):
    message: str = "Created"
    error_code: int = 201
    user_id: int
    username: str
    nickname: str | None = None
    email: str | None = None
    register_time: datetime


class UpdatePasswordResponse(BaseResponse):
    message: str = "Password updated"
    user_id: int
    username: str
    update_time: datetime


class UserResponse(BaseResponse):
    user_id: int
    username: str
    nickname: str | None = None
    register_time: datetime
