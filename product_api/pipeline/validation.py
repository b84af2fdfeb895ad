"""
Declarative field validation for request bodies.

A rule set is an ordered tuple of ValidationRule values built once at import
time. `validate` evaluates every rule (no short-circuit) and returns the
failures in rule order.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Tuple

# Decimal numbers as accepted in request bodies: optional sign, optional
# fractional part, no exponent and no surrounding whitespace.
NUMERIC_PATTERN = re.compile(r"^[+-]?([0-9]*[.])?[0-9]+$")

_MISSING = object()


@dataclass(frozen=True)
class FieldError:
    field_name: str
    failure_message: str

    def as_dict(self) -> Dict[str, str]:
        return {"fieldName": self.field_name, "failureMessage": self.failure_message}


@dataclass(frozen=True)
class ValidationRule:
    field_name: str
    predicate: Callable[[Any], bool]
    failure_message: str
    is_optional: bool = False

    def check(self, body: Mapping[str, Any]) -> bool:
        value = body.get(self.field_name, _MISSING)
        if value is _MISSING:
            return self.is_optional
        return self.predicate(value)


ValidationRuleSet = Tuple[ValidationRule, ...]
ValidationResult = Tuple[FieldError, ...]


def is_non_empty(value: Any) -> bool:
    """
    True for strings with visible text and for numbers and booleans, which
    are stored as text. None, blank strings, lists and objects fail.
    """
    if isinstance(value, str):
        return bool(value.strip())
    return isinstance(value, (int, float))


def _is_finite_number(value: Any) -> bool:
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def is_numeric(value: Any) -> bool:
    """
    True for ints, floats and decimal strings that fit a finite float;
    booleans are not numbers.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return _is_finite_number(value)
    if isinstance(value, str):
        return NUMERIC_PATTERN.match(value) is not None and _is_finite_number(value)
    return False


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def required(field_name: str, message: str) -> ValidationRule:
    return ValidationRule(field_name, is_non_empty, message)


def numeric(field_name: str, message: str) -> ValidationRule:
    return ValidationRule(field_name, is_numeric, message)


def optional(rule: ValidationRule) -> ValidationRule:
    return ValidationRule(rule.field_name, rule.predicate, rule.failure_message, is_optional=True)


def validate(body: Any, rule_set: ValidationRuleSet) -> ValidationResult:
    """
    Evaluate every rule of `rule_set` against `body`.

    A body that is not a JSON object is checked as an empty one, so every
    required field is reported missing.

    Returns:
        Failed rules as FieldError values in rule order; empty if the body is acceptable
    """
    if not isinstance(body, Mapping):
        body = {}

    return tuple(
        FieldError(rule.field_name, rule.failure_message)
        for rule in rule_set
        if not rule.check(body)
    )


CREATE_PRODUCT_RULES: ValidationRuleSet = (
    required("name", "Name is required"),
    required("description", "Description is required"),
    numeric("price", "Price is required and must be a number"),
)

UPDATE_PRODUCT_RULES: ValidationRuleSet = (
    optional(required("name", "Name is required")),
    optional(required("description", "Description is required")),
    optional(numeric("price", "Price must be a number")),
    ValidationRule("isVisible", is_boolean, "isVisible must be a boolean", is_optional=True),
)
