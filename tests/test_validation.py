"""Registration validation tests."""

import pytest

from src.exceptions import ValidationFailedError
from src.services.auth import create_user
from src.services.validation import (
    REGISTRATION_RULES,
    Constraint,
    Violation,
    check_fields,
    validate_registration,
)


def payload(**overrides):
    data = {
        "name": "Grace Hopper",
        "email": "grace@example.com",
        "password": "cobol-rules",
        "password_confirmation": "cobol-rules",
    }
    data.update(overrides)
    return data


def constraints_for(violations, field):
    return [v.constraint for v in violations if v.field == field]


def test_valid_payload(db):
    assert validate_registration(db, payload()) == []


@pytest.mark.parametrize("blank", [None, "", "   "])
def test_required(db, blank):
    violations = validate_registration(db, payload(name=blank))
    assert violations == [Violation("name", Constraint.REQUIRED, "The name field is required.")]


def test_required_stops_further_checks(db):
    violations = validate_registration(db, payload(password=None))
    assert constraints_for(violations, "password") == [Constraint.REQUIRED]


def test_string(db):
    violations = validate_registration(db, payload(email=123))
    assert constraints_for(violations, "email") == [Constraint.STRING]


@pytest.mark.parametrize("email", ["plainaddress", "missing@", "@example.com", "a b@example.com"])
def test_email_format(db, email):
    violations = validate_registration(db, payload(email=email))
    assert constraints_for(violations, "email") == [Constraint.EMAIL]


def test_unique(db):
    create_user(db, "Existing", "grace@example.com", "whatever1")

    violations = validate_registration(db, payload())
    assert constraints_for(violations, "email") == [Constraint.UNIQUE]


def test_confirmed(db):
    violations = validate_registration(db, payload(password_confirmation="nope-nope"))
    assert constraints_for(violations, "password") == [Constraint.CONFIRMED]


def test_missing_confirmation(db):
    data = payload()
    del data["password_confirmation"]

    violations = validate_registration(db, data)
    assert constraints_for(violations, "password") == [Constraint.CONFIRMED]


def test_min_length(db):
    violations = validate_registration(
        db, payload(password="short", password_confirmation="short"), min_length=8
    )
    assert violations == [
        Violation("password", Constraint.MIN_LENGTH, "The password must be at least 8 characters.")
    ]


def test_multiple_violations_on_one_field(db):
    violations = validate_registration(
        db, payload(password="abc", password_confirmation="xyz"), min_length=6
    )
    assert constraints_for(violations, "password") == [Constraint.CONFIRMED, Constraint.MIN_LENGTH]


def test_max_length(db):
    violations = validate_registration(db, payload(name="x" * 256))
    assert violations == [
        Violation("name", Constraint.MAX_LENGTH, "The name may not be greater than 255 characters.")
    ]


def test_max_length_does_not_hide_other_fields(db):
    violations = validate_registration(db, {"name": "x" * 300})
    assert {v.field for v in violations} == {"name", "email", "password"}


@pytest.mark.parametrize("field", ["name", "password"])
def test_null_bytes(db, field):
    data = payload(**{field: "nul\x00byte-value"})
    if field == "password":
        data["password_confirmation"] = data["password"]

    violations = validate_registration(db, data)
    assert constraints_for(violations, field) == [Constraint.NO_NULL_BYTES]


def test_unique_requires_session():
    with pytest.raises(ValueError):
        check_fields(payload(), REGISTRATION_RULES)


def test_validation_error_groups_by_field():
    error = ValidationFailedError(
        [
            Violation("password", Constraint.CONFIRMED, "The password confirmation does not match."),
            Violation("password", Constraint.MIN_LENGTH, "The password must be at least 6 characters."),
            Violation("name", Constraint.REQUIRED, "The name field is required."),
        ]
    )

    assert error.status_code == 422
    assert error.to_dict() == {
        "status": "error",
        "message": "The given data was invalid.",
        "errors": {
            "password": [
                "The password confirmation does not match.",
                "The password must be at least 6 characters.",
            ],
            "name": ["The name field is required."],
        },
    }
