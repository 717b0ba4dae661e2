"""Field validators for the form pipeline.

A validator takes the field value and returns an error message, or
``None`` when the value is acceptable.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

Validator = Callable[[Any], Optional[str]]

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class FilePayload:
    """An uploaded file, detached from the UI widget that produced it."""

    name: str
    content: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def required(message: str) -> Validator:
    def check(value):
        return message if _is_blank(value) else None
    return check


def email(message: str = "Please enter a valid email address") -> Validator:
    def check(value):
        if _is_blank(value) or not EMAIL_RE.match(str(value).strip()):
            return message
        return None
    return check


def min_length(length: int, message: str) -> Validator:
    def check(value):
        return message if value is None or len(str(value)) < length else None
    return check


def matches(pattern: str, message: str) -> Validator:
    compiled = re.compile(pattern)
    def check(value):
        if value is None or not compiled.fullmatch(str(value).strip()):
            return message
        return None
    return check


def positive_number(message: str) -> Validator:
    def check(value):
        try:
            number = float(value)
        except (TypeError, ValueError):
            return message
        return message if number != number or number <= 0 else None
    return check


def positive_int(message: str) -> Validator:
    def check(value):
        try:
            number = int(value)
        except (TypeError, ValueError):
            return message
        return message if number <= 0 else None
    return check


def one_of(options: Iterable[str], message: str) -> Validator:
    allowed = tuple(options)
    def check(value):
        return None if value in allowed else message
    return check


def file_required(message: str) -> Validator:
    def check(value):
        if not isinstance(value, FilePayload) or value.size == 0:
            return message
        return None
    return check


def file_constraints(max_bytes: Optional[int] = None,
                     content_types: Optional[Iterable[str]] = None,
                     size_message: str = "File is too large",
                     type_message: str = "Unsupported file type") -> Validator:
    """Checks size and type of a present file; absence is left to ``file_required``."""
    allowed_types = tuple(content_types or ())
    def check(value):
        if not isinstance(value, FilePayload):
            return None
        if allowed_types and value.content_type not in allowed_types:
            return type_message
        if max_bytes is not None and value.size > max_bytes:
            return size_message
        return None
    return check
