"""IAMサービス（認証）."""

from learnflow.services.iam.actions import AuthActions
from learnflow.services.iam.controller import AuthController, require_role
from learnflow.services.iam.models import AuthenticatedUser, CredentialsRequest


__all__ = [
    "AuthActions",
    "AuthController",
    "AuthenticatedUser",
    "CredentialsRequest",
    "require_role",
]
