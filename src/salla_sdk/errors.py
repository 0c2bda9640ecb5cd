"""Exception hierarchy shared by the API client, OAuth flow and webhook path."""

import json

import httpx


class SallaError(Exception):
    """Base class for every error raised by this package."""


class CredentialExhaustedError(SallaError):
    """No refresh token is available; interactive authorization must be re-run."""

    def __init__(self, message: str = "no refresh token available") -> None:
        super().__init__(message)


class TokenExchangeError(SallaError):
    """Raised when the token endpoint rejects a code or refresh grant."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Token request failed with status {status_code}: {body}")


class TransportError(SallaError):
    """Network-level failure (connection error, timeout) talking to the platform."""


class SchemaMismatchError(SallaError):
    """A payload parsed as JSON but does not fit the expected model."""

    def __init__(self, target: str, detail: str):
        self.target = target
        self.detail = detail
        super().__init__(f"Payload does not match {target}: {detail}")


class MalformedPayloadError(SallaError):
    """The webhook body is not a valid event envelope."""


class SignatureInvalidError(SallaError):
    """The webhook signature does not match the body."""


class HandlerExecutionError(SallaError):
    """A registered webhook handler raised."""

    def __init__(self, event_type: str, cause: BaseException):
        self.event_type = event_type
        self.cause = cause
        super().__init__(f"Handler for {event_type} failed: {cause}")


class DuplicateHandlerError(SallaError):
    """A second handler was registered for an event type under the REJECT policy."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(f"A handler is already registered for {event_type}")


class RemoteAPIError(SallaError):
    """Non-2xx response from the Salla admin API."""

    def __init__(
        self,
        status_code: int,
        message: str = "",
        field_errors: dict | None = None,
    ):
        self.status_code = status_code
        self.message = message
        self.field_errors = field_errors or {}
        if message:
            super().__init__(f"salla api error (status {status_code}): {message}")
        else:
            super().__init__(f"salla api error (status {status_code})")

    @classmethod
    def from_response(cls, resp: httpx.Response) -> "RemoteAPIError":
        """Build an error from the platform's ``{success, code, message, data}`` body."""
        try:
            body = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return cls(resp.status_code, resp.text)

        if not isinstance(body, dict):
            return cls(resp.status_code, resp.text)

        # Errors arrive either as {message, data} or as {error: {message, fields}}
        error = body.get("error") if isinstance(body.get("error"), dict) else {}
        data = body.get("data") if isinstance(body.get("data"), dict) else None

        message = body.get("message") or error.get("message") or ""
        if isinstance(error.get("fields"), dict):
            field_errors = error["fields"]
        elif data is not None and isinstance(data.get("fields"), dict):
            field_errors = data["fields"]
        else:
            field_errors = data
        return cls(resp.status_code, message, field_errors)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429


def is_not_found_error(exc: BaseException) -> bool:
    return isinstance(exc, RemoteAPIError) and exc.is_not_found


def is_unauthorized_error(exc: BaseException) -> bool:
    return isinstance(exc, RemoteAPIError) and exc.is_unauthorized


def is_rate_limit_error(exc: BaseException) -> bool:
    return isinstance(exc, RemoteAPIError) and exc.is_rate_limited
