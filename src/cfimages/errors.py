"""Error hierarchy for the cfimages SDK.

Every public error class inherits from CFImagesError. Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

:class:`UploadFailedError` wraps whatever went wrong during an upload round
trip.  The wrapped exception stays reachable through ``cause`` (and
``__cause__``), so callers can branch on its type rather than parsing the
message text.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the SDK can raise."""

    CONFIGURATION_SECURITY = "CONFIGURATION_SECURITY"
    INVALID_INPUT = "INVALID_INPUT"
    REMOTE_API_ERROR = "REMOTE_API_ERROR"
    UPLOAD_FAILED = "UPLOAD_FAILED"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class CFImagesError(Exception):
    """Base exception for all cfimages errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys and expected types are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationSecurityError(CFImagesError):
    """The client configuration is unsafe or incomplete.

    Raised while constructing the client: missing credentials, or a
    browser-like runtime while ``prevent_browser_usage`` is enabled.

    Context keys: ``reason`` (``"browser_environment"`` or
    ``"missing_credentials"``).
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.CONFIGURATION_SECURITY,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Request errors
# ---------------------------------------------------------------------------

class InvalidInputError(CFImagesError):
    """The caller supplied a request that violates its shape rules.

    Always raised before any network I/O.

    Context keys: ``field``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INVALID_INPUT,
            message=message,
            context=context,
            cause=cause,
        )


class RemoteAPIError(CFImagesError):
    """Cloudflare answered with a non-2xx status.

    Context keys: ``status_code``, ``errors`` (the raw ``errors`` list from
    the response body, empty if the body was not JSON).
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.REMOTE_API_ERROR,
            message=message,
            context=context,
            cause=cause,
        )

    @property
    def status_code(self) -> int | None:
        return self.context.get("status_code")


class UploadFailedError(CFImagesError):
    """An upload round trip failed.

    Wraps network errors, undecodable responses and :class:`RemoteAPIError`.

    Context keys: ``cause_type`` (class name of the wrapped exception).
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.UPLOAD_FAILED,
            message=message,
            context=context,
            cause=cause,
        )
