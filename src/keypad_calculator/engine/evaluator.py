"""Evaluate keypad equations over bounded signed integers."""
import re
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from keypad_calculator.common.config import CalculatorConfig
from keypad_calculator.common.logger import logger
from keypad_calculator.common.models import EvalResult, MalformedResult, OkResult, OverflowResult


# Every operator the keypad can ever produce, whatever the configuration
OPERATOR_PATTERN = re.compile(r"([+*-])")
NUMERAL_PATTERN = re.compile(r"[0-9]+")


class _OperandOverflow(ArithmeticError):
    """A numeral is unparsable or an arithmetic step leaves the integer range."""


class _MalformedEquation(ValueError):
    """The equation reached a state the input gating should have prevented."""


class Evaluator(BaseModel):
    """
    Evaluate a finished equation such as "-12+3*4-5".

    Algorithm:
        1. Tokenize into (operator, operand) pairs. The first pair carries the
           sign of the first operand: "+" normally, "-" when the equation
           starts with a minus sign.
        2. Parse every operand, with an explicit success check instead of a
           zero sentinel, so a literal "0" is always a valid operand.
        3. Collapse each run of '*'-joined operands into its product
           (only when multiplication is enabled).
        4. Fold the remaining terms left to right with '+' and '-'.

    Every range check happens before the operation it guards, so results
    never wrap around. evaluate() never raises: failures come back as
    OverflowResult or MalformedResult.

    Examples:
        - "6*7+2" -> [("+", "6"), ("*", "7"), ("+", "2")] -> [("+", 42), ("+", 2)] -> 44
        - "-5+3"  -> [("-", "5"), ("+", "3")] -> -2
    """

    model_config = ConfigDict(frozen=True)

    config: CalculatorConfig = Field(default_factory=CalculatorConfig, description="Engine configuration")

    @staticmethod
    def tokenize(equation: str) -> List[Tuple[str, str]]:
        """
        Split an equation into (operator, operand text) pairs.

        A single leading '-' becomes the operator of the first pair; otherwise
        the first pair gets '+'. Operand texts are returned unparsed, and may
        be empty when the equation breaks the keypad's input rules.

        :param str equation: Equation text

        :return: List of (operator, operand) pairs
        :rtype: List[Tuple[str, str]]
        """
        sign = "+"
        body = equation
        if body.startswith("-"):
            sign = "-"
            body = body[1:]

        parts: List[str] = OPERATOR_PATTERN.split(body)
        operands: List[str] = parts[0::2]
        operators: List[str] = [sign] + parts[1::2]
        return list(zip(operators, operands))

    def _parse_operand(self, text: str) -> int:
        """
        Parse a numeral within the configured integer range.

        :param str text: Operand text

        :return: Non-negative operand value
        :rtype: int
        :raises _OperandOverflow: If the text is not a numeral or exceeds max_int
        """
        if not NUMERAL_PATTERN.fullmatch(text):
            raise _OperandOverflow(f"Not a numeral: {text!r}")
        # Longer numerals cannot fit, and int() refuses very long strings
        digits = text.lstrip("0") or "0"
        if len(digits) > len(str(self.config.max_int)):
            raise _OperandOverflow(f"Numeral too long: {len(digits)} digits")
        value = int(digits)
        if value > self.config.max_int:
            raise _OperandOverflow(f"Numeral out of range: {text}")
        return value

    def _multiply(self, left: int, right: int) -> int:
        # Operands are magnitudes here; the sign stays on the term's operator
        if right != 0 and left > self.config.max_int // right:
            raise _OperandOverflow(f"Product out of range: {left} * {right}")
        return left * right

    def collapse_products(self, pairs: List[Tuple[str, str]]) -> List[Tuple[str, int]]:
        """
        Parse operands and replace each '*' run with its product.

        With multiplication disabled the '*' pairs are kept as they are and
        the additive pass reports them.

        :param List[Tuple[str, str]] pairs: Output of tokenize()

        :return: List of (operator, value) terms
        :rtype: List[Tuple[str, int]]
        :raises _OperandOverflow: On an unparsable operand or an out-of-range product
        """
        terms: List[Tuple[str, int]] = []
        for op, text in pairs:
            value = self._parse_operand(text)
            if op == "*" and self.config.multiplication_enabled and terms:
                prev_op, prev_value = terms[-1]
                terms[-1] = (prev_op, self._multiply(prev_value, value))
            else:
                terms.append((op, value))
        return terms

    def fold(self, terms: List[Tuple[str, int]]) -> int:
        """
        Add and subtract terms left to right.

        :param List[Tuple[str, int]] terms: Output of collapse_products()

        :return: Final value
        :rtype: int
        :raises _OperandOverflow: If a step would leave the integer range
        :raises _MalformedEquation: On any operator other than '+' or '-'
        """
        if not terms:
            raise _MalformedEquation("No terms to fold")

        sign, total = terms[0]
        if sign == "-":
            total = -total
        elif sign != "+":
            raise _MalformedEquation(f"Unexpected leading operator: {sign!r}")

        max_int = self.config.max_int
        min_int = self.config.min_int
        for op, operand in terms[1:]:
            if op == "+":
                if max_int - operand < total:
                    raise _OperandOverflow(f"Sum out of range: {total} + {operand}")
                total += operand
            elif op == "-":
                if min_int + operand > total:
                    raise _OperandOverflow(f"Difference out of range: {total} - {operand}")
                total -= operand
            else:
                raise _MalformedEquation(f"Unexpected operator: {op!r}")
        return total

    def evaluate(self, equation: str) -> EvalResult:
        """
        Evaluate an equation built on the keypad.

        :param str equation: Non-empty equation without adjacent or trailing operators

        :return: OkResult, OverflowResult or MalformedResult
        :rtype: EvalResult
        """
        try:
            pairs = self.tokenize(equation)
            logger.debug(f"🔎 Tokenized {equation!r}: {pairs}")
            result: EvalResult = OkResult(value=self.fold(self.collapse_products(pairs)))
        except _OperandOverflow as exc:
            logger.info(f"🧮❌ Overflow while evaluating {equation!r}: {exc}")
            return OverflowResult()
        except _MalformedEquation as exc:
            logger.error(f"🧮❌ Malformed equation {equation!r}: {exc}")
            return MalformedResult()

        logger.info(f"🧮✅ {equation} = {result.display}")
        return result
