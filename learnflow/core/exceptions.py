"""Custom exceptions for LearnFlow."""

from __future__ import annotations

from typing import Any


class LearnFlowError(Exception):
    """Base exception for all LearnFlow errors."""


class ConfigurationError(LearnFlowError):
    """Raised when configuration is invalid."""


class ControllerError(LearnFlowError):
    """Raised by a controller when a service call returns a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        failure: Any = None,
    ) -> None:
        """Initialize ControllerError.

        Args:
            message: Human readable message from the service.
            status_code: HTTP status reported by the action.
            failure: Failure result returned by the action.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.failure = failure

    def __str__(self) -> str:
        return f"{self.message} (status {self.status_code})"


class AuthenticationError(ControllerError):
    """Raised when sign-in, sign-up or token validation fails."""


class TopicError(ControllerError):
    """Raised for failed topic operations."""


class GuideError(ControllerError):
    """Raised for failed guide or guide page operations."""


class CourseError(ControllerError):
    """Raised for failed course operations."""


class ChallengeError(ControllerError):
    """Raised for failed challenge operations."""


class CodeVersionError(ControllerError):
    """Raised for failed code version operations."""


class VersionTestError(ControllerError):
    """Raised for failed version test operations."""


class SolutionError(ControllerError):
    """Raised for failed solution operations."""


class CommunityError(ControllerError):
    """Raised for failed community, post, reaction or subscription operations."""


class ProfileError(ControllerError):
    """Raised for failed profile operations."""


class LeaderboardError(ControllerError):
    """Raised for failed leaderboard or ranking operations."""


class AssemblerValidationError(LearnFlowError):
    """Raised when a service payload does not match the expected shape."""

    def __init__(self, entity: str, errors: list[dict[str, Any]]) -> None:
        """Initialize AssemblerValidationError.

        Args:
            entity: Name of the entity being assembled.
            errors: Validation errors reported by pydantic.
        """
        fields = ", ".join(".".join(str(p) for p in e.get("loc", ())) for e in errors)
        super().__init__(f"Invalid {entity} payload: {fields or 'unknown field'}")
        self.entity = entity
        self.errors = errors


class AccessDeniedError(LearnFlowError):
    """Raised when the current user lacks the role required for a view."""

    def __init__(self, required: list[str], actual: list[str]) -> None:
        """Initialize AccessDeniedError.

        Args:
            required: Roles that grant access.
            actual: Roles of the current user.
        """
        super().__init__(f"Access denied: requires one of {required}")
        self.required = required
        self.actual = actual
