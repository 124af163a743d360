"""IAM認証モデル."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field

from learnflow.services.base import RequestModel, WireModel


class CredentialsRequest(RequestModel):
    """サインイン・サインアップのボディ."""

    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=1)


class SignInResponse(WireModel):
    id: str
    email: str
    token: str
    refresh_token: str | None = None


class SignUpResponse(WireModel):
    id: str
    email: str


class RefreshTokenResponse(WireModel):
    access_token: str
    refresh_token: str | None = None
    message: str | None = None


@dataclass
class AuthenticatedUser:
    """サインイン済みユーザー."""

    id: str
    email: str
    token: str
    refresh_token: str | None = None
