"""Pydantic settings for the equation engine."""
from pydantic import BaseModel, ConfigDict, Field


class CalculatorConfig(BaseModel):
    """
    Engine configuration shared by the buffer and the evaluator.

    The same engine covers both keypad variants: with multiplication
    disabled, '*' is refused at input time and the evaluator skips its
    multiplication pass.
    """

    # Configuration must not change while a session is running
    model_config = ConfigDict(frozen=True)

    multiplication_enabled: bool = Field(default=True, description="Accept '*' and evaluate it before '+' and '-'")
    integer_bits: int = Field(default=64, ge=8, le=128, description="Width of the signed integer used for arithmetic")

    @property
    def max_int(self) -> int:
        """Largest representable value."""
        return 2 ** (self.integer_bits - 1) - 1

    @property
    def min_int(self) -> int:
        """Smallest representable value."""
        return -(2 ** (self.integer_bits - 1))

    @property
    def operators(self) -> str:
        """Operator characters the keypad accepts."""
        return "+-*" if self.multiplication_enabled else "+-"
