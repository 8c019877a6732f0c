"""Equation buffer fed by keypad tokens."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from keypad_calculator.common.config import CalculatorConfig
from keypad_calculator.common.logger import logger
from keypad_calculator.common.models import (
    BackspaceToken,
    ClearToken,
    DigitToken,
    EvaluateToken,
    OperatorToken,
    Token,
    token_from_key,
)
from keypad_calculator.engine.evaluator import Evaluator


DEFAULT_EQUATION: str = "0"

TOKEN_ADAPTER: TypeAdapter = TypeAdapter(Token)


class EquationState(BaseModel):
    """Immutable snapshot of the equation shown on the display."""

    model_config = ConfigDict(frozen=True)

    equation: str = Field(default=DEFAULT_EQUATION, min_length=1, description="Current equation text")

    def ends_with_operator(self, config: CalculatorConfig) -> bool:
        return self.equation[-1] in config.operators


def apply_token(
    state: EquationState,
    token: Token,
    config: CalculatorConfig,
    evaluator: Optional[Evaluator] = None,
) -> EquationState:
    """
    Compute the state that follows a key press.

    Invalid edits return the input state unchanged instead of raising, so
    the display always holds something renderable:
        - an operator right after another operator
        - '*' while multiplication is disabled
        - '=' right after an operator
        - backspace on "0"

    :param EquationState state: Current state
    :param Token token: Key press to apply
    :param CalculatorConfig config: Engine configuration
    :param Evaluator evaluator: Evaluator to use for '=', built from config if omitted

    :return: The next state (the same object when the token is rejected)
    :rtype: EquationState
    """
    equation = state.equation

    if isinstance(token, DigitToken):
        # Don't keep the placeholder zero in front of the first digit
        if equation == DEFAULT_EQUATION:
            return EquationState(equation=token.digit)
        return EquationState(equation=equation + token.digit)

    if isinstance(token, OperatorToken):
        if token.operator not in config.operators:
            logger.debug(f"⌨️ Ignored disabled operator {token.operator!r}")
            return state
        if state.ends_with_operator(config):
            logger.debug(f"⌨️ Ignored operator {token.operator!r} after {equation!r}")
            return state
        return EquationState(equation=equation + token.operator)

    if isinstance(token, BackspaceToken):
        if equation == DEFAULT_EQUATION:
            return state
        if len(equation) == 1:
            return EquationState()
        return EquationState(equation=equation[:-1])

    if isinstance(token, ClearToken):
        return EquationState()

    if isinstance(token, EvaluateToken):
        if state.ends_with_operator(config):
            logger.debug(f"⌨️ Ignored '=' on incomplete equation {equation!r}")
            return state
        if evaluator is None:
            evaluator = Evaluator(config=config)
        return EquationState(equation=evaluator.evaluate(equation).display)

    raise TypeError(f"Unsupported token: {token!r}")


class EquationBuffer:
    """
    Session object holding the equation behind a keypad display.

    Each operation returns True when the key press was accepted, which is
    the presentation layer's cue to re-render current_display.
    """

    def __init__(self, config: Optional[CalculatorConfig] = None):
        self.config = config if config is not None else CalculatorConfig()
        self.evaluator = Evaluator(config=self.config)
        self.state = EquationState()

    @property
    def current_display(self) -> str:
        return self.state.equation

    def apply(self, token: Token) -> bool:
        """
        Apply a token and report whether it was accepted.

        :param Token token: Key press, either a token model or its dict form

        :return: True if the state changed or the token was '=' or 'AC'
        :rtype: bool
        """
        token = TOKEN_ADAPTER.validate_python(token)
        next_state = apply_token(self.state, token, self.config, self.evaluator)
        accepted = next_state is not self.state
        self.state = next_state
        return accepted

    def press(self, key: str) -> bool:
        """
        Apply a keypad label such as '7', '*', '<-', 'AC' or '='.

        :raises ValueError: If the label is not on the keypad
        """
        return self.apply(token_from_key(key))

    def apply_digit(self, digit: str) -> bool:
        return self.apply(DigitToken(digit=digit))

    def apply_operator(self, operator: str) -> bool:
        return self.apply(OperatorToken(operator=operator))

    def backspace(self) -> bool:
        return self.apply(BackspaceToken())

    def clear(self) -> bool:
        return self.apply(ClearToken())

    def evaluate(self) -> bool:
        return self.apply(EvaluateToken())
