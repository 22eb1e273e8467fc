"""Declarative field rules for request bodies.

A rule set is an ordered sequence of rule variants, each bound to one field.
``collect_violations`` evaluates every rule against the payload without
stopping at the first failure, so a client sees all problems with a
submission at once.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union

from email_validator import EmailNotValidError, validate_email


@dataclass(frozen=True)
class Violation:
    field: str
    rule: str
    message: str


@dataclass(frozen=True)
class Required:
    field: str
    message: str
    rule: str = 'required'

    def check(self, value: Any) -> bool:
        if isinstance(value, str):
            value = value.strip()
        return bool(value)


@dataclass(frozen=True)
class Text:
    """Passes when the value is absent or a string; other JSON types fail."""

    field: str
    message: str
    rule: str = 'text'

    def check(self, value: Any) -> bool:
        return value is None or isinstance(value, str)


@dataclass(frozen=True)
class Email:
    field: str
    message: str
    rule: str = 'email'

    def check(self, value: Any) -> bool:
        if not isinstance(value, str) or not value:
            return False
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True


@dataclass(frozen=True)
class LengthBetween:
    field: str
    min_length: int
    max_length: int
    message: str
    rule: str = 'length_between'

    def check(self, value: Any) -> bool:
        string_value = '' if value is None else str(value)
        return self.min_length <= len(string_value) <= self.max_length


Rule = Union[Required, Text, Email, LengthBetween]


def required(field: str) -> Required:
    return Required(field, f'Please provide a value for "{field}"')


def text(field: str) -> Text:
    return Text(field, f'Please provide a text value for "{field}"')


def collect_violations(rules: Sequence[Rule], payload: Mapping[str, Any]) -> list[Violation]:
    return [
        Violation(field=rule.field, rule=rule.rule, message=rule.message)
        for rule in rules
        if not rule.check(payload.get(rule.field))
    ]


def error_messages(violations: Sequence[Violation]) -> list[str]:
    return [violation.message for violation in violations]


USER_RULES: tuple[Rule, ...] = (
    required('firstName'),
    text('firstName'),
    required('lastName'),
    text('lastName'),
    required('emailAddress'),
    Email('emailAddress', 'Please provide a valid email address for "emailAddress"'),
    required('password'),
    text('password'),
    LengthBetween(
        'password',
        8,
        20,
        'Please provide a value for "password" that is between 8 and 20 characters in length',
    ),
)

COURSE_RULES: tuple[Rule, ...] = (
    required('title'),
    text('title'),
    required('description'),
    text('description'),
    text('estimatedTime'),
    text('materialsNeeded'),
)

# Deleting a course takes no body.
DELETE_COURSE_RULES: tuple[Rule, ...] = ()
