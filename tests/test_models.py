"""Test token and result models."""
from pydantic import TypeAdapter, ValidationError
import pytest

from keypad_calculator.common.models import (
    BackspaceToken,
    ClearToken,
    DigitToken,
    EvaluateToken,
    MalformedResult,
    OkResult,
    OperatorToken,
    OverflowResult,
    Token,
    iter_keys,
    token_from_key,
)


def test_digit_token_valid() -> None:
    """A single decimal digit builds a DigitToken."""
    token = DigitToken(digit="7")
    assert token.kind == "digit"
    assert token.digit == "7"


@pytest.mark.parametrize("digit", ["", "12", "a", "+"])
def test_digit_token_invalid(digit: str) -> None:
    """Anything other than one decimal digit is rejected."""
    with pytest.raises(ValidationError):
        DigitToken(digit=digit)


@pytest.mark.parametrize("operator", ["/", "^", "++", ""])
def test_operator_token_invalid(operator: str) -> None:
    """Only '+', '-' and '*' are operators."""
    with pytest.raises(ValidationError):
        OperatorToken(operator=operator)


def test_tokens_are_frozen() -> None:
    """Tokens cannot be changed after creation."""
    token = DigitToken(digit="1")
    with pytest.raises(ValidationError):
        token.digit = "2"


def test_token_union_discriminates_on_kind() -> None:
    """The Token union picks the model from the 'kind' field."""
    adapter = TypeAdapter(Token)
    assert adapter.validate_python({"kind": "operator", "operator": "*"}) == OperatorToken(operator="*")
    assert isinstance(adapter.validate_python({"kind": "clear"}), ClearToken)
    with pytest.raises(ValidationError):
        adapter.validate_python({"kind": "square_root"})


@pytest.mark.parametrize("key,expected", [
    ("0", DigitToken(digit="0")),
    ("9", DigitToken(digit="9")),
    ("+", OperatorToken(operator="+")),
    ("-", OperatorToken(operator="-")),
    ("*", OperatorToken(operator="*")),
    ("<-", BackspaceToken()),
    ("AC", ClearToken()),
    ("=", EvaluateToken()),
])
def test_token_from_key(key: str, expected: Token) -> None:
    """Every keypad label maps to its token."""
    assert token_from_key(key) == expected


@pytest.mark.parametrize("key", ["/", "ac", "12", "", "٣"])
def test_token_from_unknown_key(key: str) -> None:
    """Labels that are not on the keypad raise ValueError."""
    with pytest.raises(ValueError):
        token_from_key(key)


def test_iter_keys_expands_digit_runs() -> None:
    """A run of digits stands for one press per digit."""
    assert list(iter_keys("12 + 3\n<- AC =")) == ["1", "2", "+", "3", "<-", "AC", "="]


@pytest.mark.parametrize("result,display", [
    (OkResult(value=46), "46"),
    (OkResult(value=-150), "-150"),
    (OkResult(value=0), "0"),
    (OverflowResult(), "Overflow!"),
    (MalformedResult(), "???"),
])
def test_result_display(result, display: str) -> None:
    """Each result kind renders to its display text."""
    assert result.display == display


def test_ok_result_invalid_value_type() -> None:
    """OkResult only holds integers."""
    with pytest.raises(ValidationError):
        OkResult(value="not an int")
