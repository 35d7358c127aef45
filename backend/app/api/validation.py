"""Declarative request validation for the product routes.

A route declares an ordered list of :class:`Rule` objects. Each rule is a
predicate over one field of the path parameters or the JSON body, paired
with the message reported when the predicate fails. Every rule runs, so a
field with several independent conditions can contribute several errors.
When at least one rule fails the request is rejected with 400 before the
handler is reached.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from fastapi import Request

from app.core.errors import ValidationFailedError

logger = logging.getLogger(__name__)

Location = Literal["params", "body"]

# Sentinel for fields absent from the request
MISSING: Any = object()

_INT_RE = re.compile(r"^[-+]?(?:0|[1-9][0-9]*)$")
_NUMERIC_RE = re.compile(r"^[-+]?(?:[0-9]*\.)?[0-9]+$")
_BOOLEAN_STRINGS = {"true", "false", "1", "0"}

# String forms a loose numeric comparison converts to a number
_DECIMAL_RE = re.compile(
    r"[-+]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?)"
)
_RADIX_RE = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")

JSON_MEDIA_TYPE = "application/json"


def _as_text(value: Any) -> str:
    """String form of a JSON value as the checks below compare it."""
    if value is MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and bool(_INT_RE.match(value))


def is_not_empty(value: Any) -> bool:
    if isinstance(value, (list, dict)):
        return len(value) > 0
    return _as_text(value) != ""


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool) or value is MISSING or value is None:
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    return isinstance(value, str) and bool(_NUMERIC_RE.match(value))


def is_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, (int, str)):
        return _as_text(value) in _BOOLEAN_STRINGS
    return False


def is_positive(value: Any) -> bool:
    """Loose ``value > 0``: numeric strings compare by value."""
    if value is MISSING or value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value > 0
    if isinstance(value, str):
        number = _string_to_number(value)
        return number is not None and number > 0
    return False


def _string_to_number(text: str) -> float | None:
    """Numeric value of ``text``, or None where the string is not a number.

    Blank strings count as 0. Digit separators, ``inf`` and ``nan`` are not
    numbers; ``Infinity`` and 0x/0o/0b literals are.
    """
    text = text.strip()
    if not text:
        return 0.0
    if _RADIX_RE.fullmatch(text):
        try:
            return float(int(text, 0))
        except OverflowError:
            return math.inf
    if _DECIMAL_RE.fullmatch(text):
        return float(text)
    return None


def to_bool(value: Any) -> bool:
    """Coerce a value accepted by :func:`is_boolean` into a bool."""
    if isinstance(value, bool):
        return value
    return _as_text(value) in {"true", "1"}


@dataclass(frozen=True)
class Rule:
    """One predicate over a request field and its failure message."""

    location: Location
    field: str
    check: Callable[[Any], bool]
    message: str

    def evaluate(self, source: dict[str, Any]) -> dict[str, Any] | None:
        """Return the error entry when the predicate fails, else None."""
        value = source.get(self.field, MISSING)
        if self.check(value):
            return None
        return {
            "type": "field",
            "value": None if value is MISSING else value,
            "msg": self.message,
            "path": self.field,
            "location": self.location,
        }


def param(name: str, check: Callable[[Any], bool], message: str) -> Rule:
    return Rule("params", name, check, message)


def body(name: str, check: Callable[[Any], bool], message: str) -> Rule:
    return Rule("body", name, check, message)


def run_rules(
    rules: Sequence[Rule], params: dict[str, Any], payload: dict[str, Any]
) -> list[dict[str, Any]]:
    """Evaluate every rule and collect the failures in declaration order."""
    sources = {"params": params, "body": payload}
    errors = []
    for rule in rules:
        error = rule.evaluate(sources[rule.location])
        if error is not None:
            errors.append(error)
    return errors


async def read_json_body(request: Request) -> dict[str, Any]:
    """Parse an ``application/json`` request body as a JSON object.

    Bodies of any other content type, empty bodies and JSON values that
    are not objects read as ``{}``.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() != JSON_MEDIA_TYPE:
        return {}
    if not (await request.body()).strip():
        return {}
    try:
        payload = await request.json()
    except ValueError as e:
        logger.warning(f"Malformed JSON body on {request.url.path}: {e}")
        raise ValidationFailedError(
            [
                {
                    "type": "field",
                    "value": None,
                    "msg": "JSON no válido",
                    "path": "",
                    "location": "body",
                }
            ]
        ) from e
    return payload if isinstance(payload, dict) else {}


@dataclass
class ValidatedRequest:
    """Path parameters and body that passed a route's rules."""

    params: dict[str, Any]
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def id(self) -> int:
        return int(self.params["id"])


def validate(*rules: Rule) -> Callable[[Request], Any]:
    """Build a FastAPI dependency that gates a route behind ``rules``."""
    reads_body = any(rule.location == "body" for rule in rules)

    async def gate(request: Request) -> ValidatedRequest:
        params = dict(request.path_params)
        payload = await read_json_body(request) if reads_body else {}
        errors = run_rules(rules, params, payload)
        if errors:
            logger.info(
                f"Rejected {request.method} {request.url.path} "
                f"with {len(errors)} validation error(s)"
            )
            raise ValidationFailedError(errors)
        return ValidatedRequest(params=params, body=payload)

    return gate


# Rule chains shared by the product routes
ID_RULES = (param("id", is_int, "ID no válido"),)

NAME_RULES = (body("name", is_not_empty, "El nombre es necesario"),)

PRICE_RULES = (
    body("price", is_not_empty, "El precio es necesario"),
    body("price", is_numeric, "El precio no es válido"),
    body("price", is_positive, "Precio no válido"),
)

AVAILABILITY_RULES = (
    body("availability", is_boolean, "Valor no válido para disponibilidad"),
)
