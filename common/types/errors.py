"""Error types shared by the auth flow, the Slides connector and the tool surfaces."""

from enum import Enum
from typing import Any, Optional


class SlidesErrorType(str, Enum):
    """Kinds of failure that can reach a tool or CLI boundary."""

    CONFIG_MISSING = "config_missing"
    AUTH_FAILED = "auth_failed"
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    REMOTE_CALL_FAILED = "remote_call_failed"


SLIDES_ERROR_MESSAGES = {
    SlidesErrorType.CONFIG_MISSING: "Could not read OAuth client credentials from {path}: {reason}",
    SlidesErrorType.AUTH_FAILED: "Google authentication failed: {reason}",
    SlidesErrorType.NOT_FOUND: "Could not find {what}",
    SlidesErrorType.INVALID_STATE: "{reason}",
    SlidesErrorType.REMOTE_CALL_FAILED: "Slides API call '{operation}' failed: {reason}",
}


class SlidesWriterError(Exception):
    """Failure tagged with a SlidesErrorType and the fields used to describe it.

    The text form is only built on demand, so callers can branch on
    ``error_type`` and ``details`` and leave formatting to the boundary.
    """

    def __init__(
        self,
        error_type: SlidesErrorType,
        cause: Optional[BaseException] = None,
        **details: Any,
    ):
        self.error_type = error_type
        self.details = details
        self.cause = cause
        super().__init__(self.message)

    @property
    def message(self) -> str:
        template = SLIDES_ERROR_MESSAGES[self.error_type]
        try:
            return template.format(**self.details)
        except KeyError:
            return f"{self.error_type.value}: {self.details}"

    def to_dict(self) -> dict[str, Any]:
        return {"error_type": self.error_type.value, "message": self.message, **self.details}


def config_missing(
    path: Any, reason: str, cause: Optional[BaseException] = None
) -> SlidesWriterError:
    return SlidesWriterError(SlidesErrorType.CONFIG_MISSING, cause, path=str(path), reason=reason)


def auth_failed(reason: str, cause: Optional[BaseException] = None) -> SlidesWriterError:
    return SlidesWriterError(SlidesErrorType.AUTH_FAILED, cause, reason=reason)


def not_found(what: str, **details: Any) -> SlidesWriterError:
    return SlidesWriterError(SlidesErrorType.NOT_FOUND, what=what, **details)


def invalid_state(reason: str, **details: Any) -> SlidesWriterError:
    return SlidesWriterError(SlidesErrorType.INVALID_STATE, reason=reason, **details)


def remote_call_failed(operation: str, cause: BaseException) -> SlidesWriterError:
    return SlidesWriterError(
        SlidesErrorType.REMOTE_CALL_FAILED, cause, operation=operation, reason=str(cause)
    )
