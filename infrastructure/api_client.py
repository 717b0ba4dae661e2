"""HTTP gateway to the hostel REST API.

Every request goes through ``ApiGateway.send``. It attaches the bearer
token, unwraps the ``{success, message, data, timestamp}`` envelope and
turns every failure into one of the ``ApiError`` subclasses below. It
never retries: a call resolves once or fails once.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Tuple

import requests

log = logging.getLogger(__name__)

ResponseType = Literal["json", "binary"]


class ApiError(Exception):
    """Base class for every failure surfaced by the gateway."""

    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransportError(ApiError):
    """No response was received (connection refused, DNS, timeout)."""


class UnauthorizedError(ApiError):
    """The server rejected or expired the bearer token."""


class ForbiddenError(ApiError):
    """Authenticated, but the role or capability is insufficient."""


class ValidationError(ApiError):
    """4xx response carrying field-level messages."""

    def __init__(self, message: str = "", status_code: Optional[int] = None,
                 field_errors: Optional[Dict[str, str]] = None):
        super().__init__(message, status_code)
        self.field_errors = dict(field_errors or {})


class ServerError(ApiError):
    """5xx, an unexpected 4xx, or a 2xx envelope with ``success: false``."""


@dataclass(frozen=True)
class ApiResponse:
    success: bool
    message: Optional[str] = None
    data: Any = None
    timestamp: Optional[str] = None


@dataclass(frozen=True)
class RequestDescriptor:
    """One fully parameterized call. Built from an ``Endpoint``; never mutated."""

    method: str
    path: str
    path_params: Tuple[Tuple[str, Any], ...] = ()
    params: Tuple[Tuple[str, Any], ...] = ()
    json: Any = None
    form: Tuple[Tuple[str, str], ...] = ()
    files: Tuple[Tuple[str, Tuple[str, bytes, str]], ...] = ()
    response_type: ResponseType = "json"

    @property
    def url_path(self) -> str:
        return self.path.format(**dict(self.path_params))


@dataclass(frozen=True)
class Endpoint:
    """Method + path template of one REST operation, defined once per module."""

    method: str
    path: str
    response_type: ResponseType = "json"

    def bind(
        self,
        path_params: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        form: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Tuple[str, bytes, str]]] = None,
    ) -> RequestDescriptor:
        # Unset query params are not sent at all.
        clean_params = tuple((k, v) for k, v in (params or {}).items() if v is not None)
        clean_form = tuple((k, str(v)) for k, v in (form or {}).items() if v is not None)
        return RequestDescriptor(
            method=self.method,
            path=self.path,
            path_params=tuple((path_params or {}).items()),
            params=clean_params,
            json=json,
            form=clean_form,
            files=tuple((files or {}).items()),
            response_type=self.response_type,
        )


def _extract_field_errors(payload: Any) -> Dict[str, str]:
    if not isinstance(payload, dict):
        return {}
    for candidate in (payload.get("errors"), payload.get("data")):
        if isinstance(candidate, dict) and candidate:
            return {str(k): str(v) for k, v in candidate.items()}
        if isinstance(candidate, list) and candidate:
            errors = {}
            for item in candidate:
                if isinstance(item, dict) and item.get("field"):
                    errors[str(item["field"])] = str(item.get("message") or item.get("defaultMessage") or "")
            if errors:
                return errors
    return {}


def _extract_message(payload: Any, response: requests.Response) -> str:
    if isinstance(payload, dict):
        for key in ("message", "error", "details"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return response.reason or ""


class ApiGateway:
    """Single configured HTTP client for the hostel API."""

    def __init__(
        self,
        base_url: str,
        token_provider: Callable[[], Optional[str]] = lambda: None,
        timeout: float = 15.0,
        http: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.timeout = timeout
        self.http = http or requests.Session()
        self._unauthorized_listeners: List[Callable[[UnauthorizedError], None]] = []

    def add_unauthorized_listener(self, listener: Callable[[UnauthorizedError], None]) -> None:
        self._unauthorized_listeners.append(listener)

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def send(self, descriptor: RequestDescriptor) -> Any:
        url = f"{self.base_url}{descriptor.url_path}"
        kwargs: Dict[str, Any] = {
            "headers": self._headers(),
            "params": list(descriptor.params) or None,
            "timeout": self.timeout,
        }
        if descriptor.files:
            kwargs["data"] = dict(descriptor.form)
            kwargs["files"] = dict(descriptor.files)
        elif descriptor.json is not None:
            kwargs["json"] = descriptor.json

        try:
            response = self.http.request(descriptor.method, url, **kwargs)
        except requests.RequestException as e:
            log.warning(f"{descriptor.method} {descriptor.url_path} failed without response: {e}")
            raise TransportError(f"Could not reach the server: {e}") from e

        log.debug(f"{descriptor.method} {descriptor.url_path} -> {response.status_code}")

        if response.ok and descriptor.response_type == "binary":
            return response.content

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not response.ok:
            raise self._error_for(descriptor, response, payload)

        if not isinstance(payload, dict):
            log.warning(f"{descriptor.method} {descriptor.url_path} returned a non-JSON body")
            raise ServerError("Unexpected response from server", response.status_code)

        envelope = ApiResponse(
            success=bool(payload.get("success", True)),
            message=payload.get("message"),
            data=payload.get("data"),
            timestamp=payload.get("timestamp"),
        )
        if not envelope.success:
            log.warning(f"{descriptor.method} {descriptor.url_path} reported failure: {envelope.message}")
            raise ServerError(envelope.message or "", response.status_code)
        return envelope

    def _error_for(self, descriptor: RequestDescriptor, response: requests.Response, payload: Any) -> ApiError:
        status = response.status_code
        message = _extract_message(payload, response)
        log.warning(f"{descriptor.method} {descriptor.url_path} -> HTTP {status}: {message}")

        if status == 401:
            error = UnauthorizedError(message, status)
            for listener in list(self._unauthorized_listeners):
                listener(error)
            return error
        if status == 403:
            return ForbiddenError(message, status)
        if status in (400, 422):
            field_errors = _extract_field_errors(payload)
            if field_errors:
                return ValidationError(message, status, field_errors)
        return ServerError(message, status)
