import pytest

from course_api.core.validation import (
    COURSE_RULES,
    DELETE_COURSE_RULES,
    USER_RULES,
    Email,
    LengthBetween,
    Required,
    Text,
    Violation,
    collect_violations,
    error_messages,
)


VALID_USER = {
    'firstName': 'Ada',
    'lastName': 'Lovelace',
    'emailAddress': 'ada@example.com',
    'password': 'password123',
}


def test_valid_user_payload_has_no_violations() -> None:
    assert collect_violations(USER_RULES, VALID_USER) == []


@pytest.mark.parametrize('value', [None, '', '   ', 0, False])
def test_required_rejects_missing_or_blank_values(value) -> None:
    assert Required('title', 'missing').check(value) is False


@pytest.mark.parametrize('value', ['x', ' x ', 1])
def test_required_accepts_present_values(value) -> None:
    assert Required('title', 'missing').check(value) is True


@pytest.mark.parametrize('value', ['a@x.com', 'first.last@example.org'])
def test_email_accepts_well_formed_addresses(value: str) -> None:
    assert Email('emailAddress', 'bad').check(value) is True


@pytest.mark.parametrize('value', [None, '', 'not-an-email', 'a@', '@x.com', 'a b@x.com', 42])
def test_email_rejects_malformed_addresses(value) -> None:
    assert Email('emailAddress', 'bad').check(value) is False


@pytest.mark.parametrize(('value', 'expected'), [
    ('a' * 7, False),
    ('a' * 8, True),
    ('a' * 20, True),
    ('a' * 21, False),
    (None, False),
])
def test_length_between_is_inclusive(value, expected: bool) -> None:
    assert LengthBetween('password', 8, 20, 'length').check(value) is expected


def test_violations_carry_field_rule_and_message() -> None:
    violations = collect_violations(COURSE_RULES, {'description': 'D'})

    assert violations == [Violation(field='title', rule='required', message='Please provide a value for "title"')]


def test_all_rules_are_evaluated_in_declaration_order() -> None:
    messages = error_messages(collect_violations(USER_RULES, {}))

    assert messages == [
        'Please provide a value for "firstName"',
        'Please provide a value for "lastName"',
        'Please provide a value for "emailAddress"',
        'Please provide a valid email address for "emailAddress"',
        'Please provide a value for "password"',
        'Please provide a value for "password" that is between 8 and 20 characters in length',
    ]


def test_rules_for_one_field_do_not_hide_other_fields() -> None:
    payload = dict(VALID_USER, emailAddress='nope', password='short')

    messages = error_messages(collect_violations(USER_RULES, payload))

    assert messages == [
        'Please provide a valid email address for "emailAddress"',
        'Please provide a value for "password" that is between 8 and 20 characters in length',
    ]


def test_delete_rule_set_always_passes() -> None:
    assert collect_violations(DELETE_COURSE_RULES, {}) == []


@pytest.mark.parametrize(('value', 'expected'), [
    (None, True),
    ('', True),
    ('text', True),
    (['text'], False),
    ({'text': 'x'}, False),
    (3, False),
    (True, False),
])
def test_text_accepts_only_strings_or_absent_values(value, expected: bool) -> None:
    assert Text('title', 'wrong type').check(value) is expected


def test_wrong_typed_name_is_reported_as_text_violation() -> None:
    messages = error_messages(collect_violations(USER_RULES, dict(VALID_USER, firstName=['Ada'])))

    assert messages == ['Please provide a text value for "firstName"']
