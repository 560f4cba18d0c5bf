"""
Validation utilities for request input.

A route declares an ordered list of `Rule`s. Each rule names where a field
lives (body, query or path) and a pure check that either returns the cleaned
value or raises ValueError with a user-facing message. `validate_request` runs
every rule, collects all failures, and either raises `RequestValidationFailed`
or returns the typed request model built from the cleaned values.
"""
import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, TypeVar

from pydantic import BaseModel

from .error_handlers import RequestValidationFailed

T = TypeVar("T", bound=BaseModel)

_MISSING = object()

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
ID_PATTERN = re.compile(r"^[1-9][0-9]*$")
# Largest value a signed 64-bit INTEGER column holds.
MAX_RECORD_ID = 2**63 - 1


@dataclass(frozen=True)
class Rule:
    location: str  # body | query | params
    path: str
    check: Callable[[Any], Any]
    required: bool = True
    field: str | None = None  # attribute name on the typed request, defaults to path

    @property
    def target(self) -> str:
        return self.field or self.path


def body(path: str, check: Callable[[Any], Any], *, required: bool = True, field: str | None = None) -> Rule:
    return Rule("body", path, check, required, field)


def query(path: str, check: Callable[[Any], Any], *, required: bool = False, field: str | None = None) -> Rule:
    return Rule("query", path, check, required, field)


def param(path: str, check: Callable[[Any], Any], *, field: str | None = None) -> Rule:
    return Rule("params", path, check, True, field)


def run_rules(rules: Iterable[Rule], sources: dict[str, dict]) -> tuple[dict, list[dict]]:
    """Apply rules in order; return (cleaned values, field errors)."""
    values: dict[str, Any] = {}
    errors: list[dict] = []
    for rule in rules:
        raw = (sources.get(rule.location) or {}).get(rule.path, _MISSING)
        if raw is _MISSING:
            if rule.required:
                try:
                    rule.check(None)
                except ValueError as e:
                    errors.append(_field_error(rule, None, e))
            continue
        try:
            values[rule.target] = rule.check(raw)
        except ValueError as e:
            errors.append(_field_error(rule, raw, e))
    return values, errors


def validate_request(
    rules: Iterable[Rule],
    model: type[T],
    *,
    body: Any = None,
    query: dict | None = None,
    params: dict | None = None,
) -> T:
    if body is not None and not isinstance(body, dict):
        raise RequestValidationFailed(
            [{"location": "body", "path": "", "msg": "Request body must be a JSON object", "value": None}]
        )
    values, errors = run_rules(rules, {"body": body or {}, "query": query or {}, "params": params or {}})
    if errors:
        raise RequestValidationFailed(errors)
    return model(**values)


def _field_error(rule: Rule, raw: Any, error: ValueError) -> dict:
    return {
        "location": rule.location,
        "path": rule.path,
        "msg": str(error) or "Invalid value",
        "value": raw if isinstance(raw, (str, int, float, bool)) or raw is None else None,
    }


# ---------------------------------------------------------------- checks


def not_empty(message: str = "Required", *, strip: bool = True) -> Callable[[Any], str]:
    def check(value: Any) -> str:
        if not isinstance(value, str) or not (value.strip() if strip else value):
            raise ValueError(message)
        return value.strip() if strip else value
    return check


def is_string(message: str = "Must be a string") -> Callable[[Any], str]:
    def check(value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError(message)
        return value
    return check


def validate_email(email: Any) -> str:
    """Validate email format; returns the lowercased address."""
    if not email or not isinstance(email, str):
        raise ValueError("Valid email required")

    email = email.strip().lower()
    if len(email) > 255 or not EMAIL_PATTERN.match(email):
        raise ValueError("Valid email required")

    return email


def validate_password(password: Any) -> str:
    """Validate password length. bcrypt only looks at the first 72 bytes."""
    if not isinstance(password, str) or len(password) < 6:
        raise ValueError("Password min 6 chars")
    if len(password.encode("utf-8")) > 72:
        raise ValueError("Password must be 72 bytes or less")
    return password


def is_numeric(message: str = "Must be numeric", min_value: float | None = None) -> Callable[[Any], int | float]:
    """Accept JSON numbers and numeric strings ("3", "2.5"); reject bools, NaN and infinities."""
    def check(value: Any) -> int | float:
        number = to_number(value)
        if number is None:
            raise ValueError(message)
        if min_value is not None and number < min_value:
            raise ValueError(f"Must be at least {min_value:g}")
        return number
    return check


def to_number(value: Any) -> int | float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        raw = value
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
    else:
        return None
    try:
        number = float(raw)
    except (ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return int(number) if number.is_integer() else number


def is_in(choices: Iterable[str], message: str | None = None) -> Callable[[Any], str]:
    allowed = tuple(choices)

    def check(value: Any) -> str:
        if value not in allowed:
            raise ValueError(message or f"Must be one of: {', '.join(allowed)}")
        return value
    return check


def is_record_id(value: Any) -> int:
    """Record ids are positive integers, given as JSON numbers or decimal strings."""
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    elif isinstance(value, str) and ID_PATTERN.match(value.strip()):
        number = int(value.strip())
    else:
        raise ValueError("Invalid id")
    if not 0 < number <= MAX_RECORD_ID:
        raise ValueError("Invalid id")
    return number


def is_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 date or date-time; naive values are taken as UTC."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Date required")
    raw = value.strip()
    try:
        dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        raise ValueError("Invalid date") from None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
