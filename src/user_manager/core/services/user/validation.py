"""Field validation and mapping of user payloads to gateway parameters.

Rules are evaluated in a fixed order: required-field checks for every field
in declaration order, then format checks in declaration order. Only the first
violation is reported by :func:`validate`; :func:`iter_violations` yields all
of them (at most one per field) for callers that want to aggregate.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from email_validator import EmailNotValidError, validate_email

from user_manager.core.errors import UserValidationError
from user_manager.core.models.user import UserInput, UserParams

E164_PATTERN = re.compile(r"^\+[1-9]?[0-9]{7,14}$")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50


class RuleTag(str, Enum):
    REQUIRED = "required"
    EMAIL = "email"
    MIN = "min"
    MAX = "max"
    GT = "gt"
    E164 = "e164"


@dataclass(frozen=True)
class FieldViolation:
    """A single failed rule on a single field."""

    field: str
    tag: str
    param: str | None = None

    @property
    def message(self) -> str:
        return format_violation(self)


def format_violation(violation: FieldViolation) -> str:
    """Render a violation as ``"<Field> <reason>"``."""
    field, tag, param = violation.field, violation.tag, violation.param
    if tag == RuleTag.REQUIRED:
        return f"{field} is a required field"
    if tag == RuleTag.EMAIL:
        return f"{field} must be a valid email address"
    if tag == RuleTag.MIN:
        return f"{field} must be at least {param} long"
    if tag == RuleTag.MAX:
        return f"{field} must be at most {param} long"
    if tag == RuleTag.GT:
        return f"{field} must be positive value"
    if tag == RuleTag.E164:
        return f"{field} must be a valid phone number"
    return f"{field} failed validation with tag {tag}"


@dataclass(frozen=True)
class Rule:
    tag: RuleTag
    check: Callable[[Any], bool]
    param: str | None = None


def _is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def max_length(limit: int) -> Rule:
    return Rule(RuleTag.MAX, lambda value: len(value) <= limit, str(limit))


def min_length(limit: int) -> Rule:
    return Rule(RuleTag.MIN, lambda value: len(value) >= limit, str(limit))


EMAIL = Rule(RuleTag.EMAIL, _is_email)
E164 = Rule(RuleTag.E164, lambda value: E164_PATTERN.fullmatch(value) is not None)
POSITIVE = Rule(RuleTag.GT, lambda value: value > 0, "0")


@dataclass(frozen=True)
class FieldRules:
    attr: str
    label: str
    required: bool = False
    rules: tuple[Rule, ...] = ()


# Declaration order is evaluation order.
USER_FIELDS: tuple[FieldRules, ...] = (
    FieldRules(
        "first_name",
        "Firstname",
        required=True,
        rules=(max_length(NAME_MAX_LENGTH), min_length(NAME_MIN_LENGTH)),
    ),
    FieldRules(
        "last_name",
        "Lastname",
        required=True,
        rules=(max_length(NAME_MAX_LENGTH), min_length(NAME_MIN_LENGTH)),
    ),
    FieldRules("email", "Email", required=True, rules=(EMAIL,)),
    FieldRules("phone", "Phone", rules=(E164,)),
    FieldRules("age", "Age", rules=(POSITIVE,)),
    FieldRules("status", "Status"),
)


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def iter_violations(user_input: UserInput) -> Iterator[FieldViolation]:
    """Yield every violation of ``user_input`` in evaluation order."""
    missing = set()
    for field in USER_FIELDS:
        if field.required and _is_missing(getattr(user_input, field.attr)):
            missing.add(field.attr)
            yield FieldViolation(field.label, RuleTag.REQUIRED.value)

    for field in USER_FIELDS:
        value = getattr(user_input, field.attr)
        if field.attr in missing or _is_missing(value):
            continue
        for rule in field.rules:
            if not rule.check(value):
                yield FieldViolation(field.label, rule.tag.value, rule.param)
                break


def _optional(value: str | None) -> str | None:
    return None if _is_missing(value) else value


def validate(user_input: UserInput) -> UserParams:
    """Check ``user_input`` and map it to gateway parameters.

    Raises:
        UserValidationError: carrying the first violation found.
    """
    violation = next(iter_violations(user_input), None)
    if violation is not None:
        raise UserValidationError(violation)

    return UserParams(
        first_name=user_input.first_name,
        last_name=user_input.last_name,
        email=user_input.email,
        phone=_optional(user_input.phone),
        age=user_input.age,
        status=_optional(user_input.status),
    )
