"""Pydantic models for keypad input tokens and evaluation results."""
import re
from typing import Annotated, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


OVERFLOW_MARKER: str = "Overflow!"
MALFORMED_MARKER: str = "???"

BACKSPACE_KEY: str = "<-"
CLEAR_KEY: str = "AC"
EVALUATE_KEY: str = "="


class DigitToken(BaseModel):
    """A digit key press."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["digit"] = "digit"
    digit: str = Field(..., pattern=r"^[0-9]$", description="Single decimal digit")


class OperatorToken(BaseModel):
    """An operator key press."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["operator"] = "operator"
    operator: str = Field(..., pattern=r"^[+*-]$", description="One of '+', '-' or '*'")


class BackspaceToken(BaseModel):
    """Remove the last character of the equation."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["backspace"] = "backspace"


class ClearToken(BaseModel):
    """Reset the equation to '0'."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["clear"] = "clear"


class EvaluateToken(BaseModel):
    """Evaluate the equation and replace it with the result."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["evaluate"] = "evaluate"


Token = Annotated[
    Union[DigitToken, OperatorToken, BackspaceToken, ClearToken, EvaluateToken],
    Field(discriminator="kind"),
]


class OkResult(BaseModel):
    """Evaluation produced an integer within range."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["ok"] = "ok"
    value: int = Field(..., description="Evaluated integer value")

    @property
    def display(self) -> str:
        return str(self.value)


class OverflowResult(BaseModel):
    """A numeral could not be parsed or an arithmetic step left the integer range."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["overflow"] = "overflow"

    @property
    def display(self) -> str:
        return OVERFLOW_MARKER


class MalformedResult(BaseModel):
    """Internal consistency failure inside the evaluator."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["malformed"] = "malformed"

    @property
    def display(self) -> str:
        return MALFORMED_MARKER


EvalResult = Annotated[
    Union[OkResult, OverflowResult, MalformedResult],
    Field(discriminator="kind"),
]


def token_from_key(key: str) -> Token:
    """
    Map a keypad label to its token.

    Labels are the ones printed on the keypad: '0'-'9', '+', '-', '*',
    '<-' (backspace), 'AC' (clear) and '=' (evaluate).

    :param str key: Keypad label

    :return: Token for the label
    :rtype: Token
    :raises ValueError: If the label is not on the keypad
    """
    if len(key) == 1 and key.isdigit() and key.isascii():
        return DigitToken(digit=key)
    if key in ("+", "-", "*"):
        return OperatorToken(operator=key)
    if key == BACKSPACE_KEY:
        return BackspaceToken()
    if key == CLEAR_KEY:
        return ClearToken()
    if key == EVALUATE_KEY:
        return EvaluateToken()
    raise ValueError(f"Unknown key: {key!r}")


def iter_keys(text: str) -> Iterator[str]:
    """
    Split free text into keypad labels.

    Labels are whitespace separated; a run of digits such as '123' stands for
    one key press per digit.

    :param str text: Whitespace separated labels

    :return: Iterator over single labels
    :rtype: Iterator[str]
    """
    for word in text.split():
        if re.fullmatch(r"[0-9]+", word):
            yield from word
        else:
            yield word

