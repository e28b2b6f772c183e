"""
Stytch Auth SDK Error Classes

Every failure raised by the client is one of three disjoint kinds, tagged
by ``kind`` so callers can branch on the tag:

    try:
        client.passwords.authenticate(...)
    except StytchAuthError as e:
        if e.kind is ErrorKind.SERVICE_ERROR:
            ...
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .types import RequestConfig


class ErrorKind(str, Enum):
    """Discriminant for the closed set of SDK errors."""
    REQUEST_FAILURE = "REQUEST_FAILURE"
    SERVICE_ERROR = "SERVICE_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class StytchAuthError(Exception):
    """Root of the SDK error set. Never raised directly."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.timestamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value!r}, message={self.message!r})"


class RequestFailure(StytchAuthError):
    """The call could not complete: network failure or undecodable body."""

    kind = ErrorKind.REQUEST_FAILURE

    def __init__(self, message: str, request: "RequestConfig") -> None:
        super().__init__(message)
        self.request = request

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["request"] = {
            "method": self.request.method,
            "url": self.request.url,
            "params": self.request.params,
        }
        return result


class ServiceError(StytchAuthError):
    """The service answered with status >= 400 and a structured error body."""

    kind = ErrorKind.SERVICE_ERROR

    def __init__(
        self,
        status_code: int,
        request_id: str,
        error_type: str,
        error_message: str,
        error_url: str,
        raw: Any = None,
    ) -> None:
        self.status_code = status_code
        self.request_id = request_id
        self.error_type = error_type
        self.error_message = error_message
        self.error_url = error_url
        self.raw = raw
        super().__init__(json.dumps(self.to_json()))

    @classmethod
    def from_json(cls, data: Any, status_code: int) -> "ServiceError":
        """
        Reinterpret a decoded error body.

        Missing fields are not an error of their own; they fall back to
        the HTTP status and empty strings.
        """
        body = data if isinstance(data, dict) else {}
        return cls(
            status_code=body.get("status_code", status_code),
            request_id=body.get("request_id", ""),
            error_type=body.get("error_type", ""),
            error_message=body.get("error_message", ""),
            error_url=body.get("error_url", ""),
            raw=data,
        )

    def to_json(self) -> Dict[str, Any]:
        """Wire shape of the error body."""
        return {
            "status_code": self.status_code,
            "request_id": self.request_id,
            "error_type": self.error_type,
            "error_message": self.error_message,
            "error_url": self.error_url,
        }

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update(self.to_json())
        return result

    def __repr__(self) -> str:
        return (
            f"ServiceError(status_code={self.status_code!r}, "
            f"error_type={self.error_type!r}, request_id={self.request_id!r})"
        )


class ConfigurationError(StytchAuthError):
    """The client itself was misconfigured at construction time."""

    kind = ErrorKind.CONFIGURATION_ERROR

    def __init__(self, code: str, message: str, cause: Optional[BaseException] = None) -> None:
        text = f"{code}: {message}"
        if cause is not None:
            text += f": {cause}"
        super().__init__(text)
        self.code = code
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["code"] = self.code
        result["cause"] = str(self.cause) if self.cause is not None else None
        return result


def is_stytch_auth_error(error: Any) -> bool:
    """Check if error is raised by this SDK."""
    return isinstance(error, StytchAuthError)
