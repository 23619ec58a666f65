import pytest

from user_api.outcomes import ValidationError
from user_api.validation import REQUIRED_FIELDS_MESSAGE, is_blank, validate_user_fields


def test_valid_fields_pass():
    assert validate_user_fields("Ada", "ada@example.com") is None


@pytest.mark.parametrize(
    "name,email",
    [
        (None, "a@x.com"),
        ("A", None),
        ("", "a@x.com"),
        ("A", ""),
        ("   ", "a@x.com"),
        ("A", "\t\n"),
    ],
)
def test_blank_or_missing_fields_fail(name, email):
    result = validate_user_fields(name, email)
    assert isinstance(result, ValidationError)
    assert result.message == REQUIRED_FIELDS_MESSAGE


def test_is_blank_treats_non_strings_as_blank():
    assert is_blank(None)
    assert is_blank(123)
    assert not is_blank(" x ")
