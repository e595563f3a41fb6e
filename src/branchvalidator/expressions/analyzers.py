"""Syntax analyzers for branch validation expressions.

Each analyzer checks one structural aspect of an expression and returns a
ValidationOutcome. ``validate_syntax`` runs them in a fixed order and stops
at the first failure:

1. ParenAnalyzer: at least one function, balanced and ordered parentheses
2. QuoteAnalyzer: one quote style, paired, only inside argument lists
3. OperatorAnalyzer: ``&&`` / ``||`` well formed and between every call
4. NegativeNumberAnalyzer: no ``-`` in unquoted arguments
"""

import logging
import re
from typing import Protocol

from branchvalidator.expressions.extractor import (
    AND_OPERATOR,
    LEFT_PAREN,
    OR_OPERATOR,
    RIGHT_PAREN,
    iter_arg_spans,
    split_args,
)
from branchvalidator.expressions.types import ValidationOutcome

logger = logging.getLogger(__name__)

SINGLE_QUOTE = "'"
DOUBLE_QUOTE = '"'
AND_CHAR = "&"
OR_CHAR = "|"

_OPERATOR_RUN = re.compile(r"[&|]+")


class Analyzer(Protocol):
    """Protocol that all syntax analyzers implement.

    Analyzers are stateless; the same instance may be shared freely.
    """

    def analyze(self, expression: str | None) -> ValidationOutcome:
        ...


class ParenAnalyzer:
    """Checks that the expression holds at least one well-formed argument list."""

    def analyze(self, expression: str | None) -> ValidationOutcome:
        if not expression or (
            LEFT_PAREN not in expression and RIGHT_PAREN not in expression
        ):
            return ValidationOutcome.fail(
                "The expression must have at least one function."
            )

        if expression.startswith((LEFT_PAREN, RIGHT_PAREN)):
            return ValidationOutcome.fail(
                f"The expression cannot start with a '{LEFT_PAREN}' or "
                f"'{RIGHT_PAREN}' parenthesis."
            )

        if expression.endswith(LEFT_PAREN):
            return ValidationOutcome.fail(
                f"The expression cannot end with a '{LEFT_PAREN}'."
            )

        total_left = expression.count(LEFT_PAREN)
        total_right = expression.count(RIGHT_PAREN)
        if total_left != total_right:
            missing = LEFT_PAREN if total_left < total_right else RIGHT_PAREN
            return ValidationOutcome.fail(f"The expression is missing a '{missing}'.")

        if expression.index(RIGHT_PAREN) < expression.index(LEFT_PAREN):
            return ValidationOutcome.fail(
                f"A function parameter list cannot start with a '{RIGHT_PAREN}'."
            )

        return ValidationOutcome.ok()


class QuoteAnalyzer:
    """Checks quote usage: a single quote style, paired, inside argument lists."""

    def analyze(self, expression: str | None) -> ValidationOutcome:
        if not expression:
            return ValidationOutcome.ok()

        has_single = SINGLE_QUOTE in expression
        has_double = DOUBLE_QUOTE in expression
        if not has_single and not has_double:
            return ValidationOutcome.ok()

        if has_single and has_double:
            return ValidationOutcome.fail(
                "Cannot use both single and double quotes in an expression."
            )

        quote = SINGLE_QUOTE if has_single else DOUBLE_QUOTE
        if expression.count(quote) % 2 != 0:
            kind = "single" if quote == SINGLE_QUOTE else "double"
            return ValidationOutcome.fail(f"Expression missing a {kind} quote.")

        depth = 0
        for char in expression:
            if char == LEFT_PAREN:
                depth += 1
            elif char == RIGHT_PAREN:
                depth -= 1
            elif char == quote and depth <= 0:
                return ValidationOutcome.fail(
                    "Single and double quotes must only exist inside of a "
                    "function argument list."
                )

        return ValidationOutcome.ok()


class OperatorAnalyzer:
    """Checks that calls are joined by two-character ``&&`` / ``||`` operators."""

    def analyze(self, expression: str | None) -> ValidationOutcome:
        if not expression:
            return ValidationOutcome.ok()

        expression = expression.strip()
        has_op_chars = AND_CHAR in expression or OR_CHAR in expression
        has_many_functions = (
            expression.count(LEFT_PAREN) >= 2 and expression.count(RIGHT_PAREN) >= 2
        )

        if not has_op_chars:
            if has_many_functions:
                return self._missing_operator()
            return ValidationOutcome.ok()

        if expression.startswith(AND_CHAR) or expression.endswith(AND_CHAR):
            return ValidationOutcome.fail(
                f"Cannot start or end an expression with an '{AND_OPERATOR}' "
                f"operator or '{AND_CHAR}' character."
            )

        if expression.startswith(OR_CHAR) or expression.endswith(OR_CHAR):
            return ValidationOutcome.fail(
                f"Cannot start or end an expression with an '{OR_OPERATOR}' "
                f"operator or '{OR_CHAR}' character."
            )

        if expression.count(OR_CHAR) % 2 != 0:
            return ValidationOutcome.fail(
                f"Expression is missing an '{OR_CHAR}' operator."
            )

        if expression.count(AND_CHAR) % 2 != 0:
            return ValidationOutcome.fail(
                f"Expression is missing an '{AND_CHAR}' operator."
            )

        for match in _OPERATOR_RUN.finditer(expression):
            run = match.group()
            if run in (AND_OPERATOR, OR_OPERATOR):
                continue
            if set(run) == {OR_CHAR}:
                return ValidationOutcome.fail(
                    f"OR operators must be 2 consecutive '{OR_CHAR}' symbols."
                )
            if set(run) == {AND_CHAR}:
                return ValidationOutcome.fail(
                    f"AND operators must be 2 consecutive '{AND_CHAR}' symbols."
                )
            return ValidationOutcome.fail(
                f"Operators must be either '{AND_OPERATOR}' or '{OR_OPERATOR}'. "
                f"Found '{run}'."
            )

        return self._analyze_between_functions(expression)

    def _analyze_between_functions(self, expression: str) -> ValidationOutcome:
        """Every ``)`` followed later by a ``(`` must have an operator between them."""
        start = expression.find(RIGHT_PAREN)
        while start != -1:
            end = expression.find(LEFT_PAREN, start)
            if end == -1:
                break

            between = expression[start + 1:end]
            if AND_OPERATOR not in between and OR_OPERATOR not in between:
                return self._missing_operator()

            start = expression.find(RIGHT_PAREN, end)

        return ValidationOutcome.ok()

    @staticmethod
    def _missing_operator() -> ValidationOutcome:
        return ValidationOutcome.fail(
            f"Expression functions must be separated by '{AND_OPERATOR}' or "
            f"'{OR_OPERATOR}' operators."
        )


class NegativeNumberAnalyzer:
    """Rejects unquoted arguments containing a ``-``."""

    def analyze(self, expression: str | None) -> ValidationOutcome:
        if not expression:
            return ValidationOutcome.ok()

        for open_index, close_index in iter_arg_spans(expression):
            for arg in split_args(expression[open_index + 1:close_index]):
                if arg.startswith((SINGLE_QUOTE, DOUBLE_QUOTE)):
                    continue
                if "-" in arg:
                    return ValidationOutcome.fail(
                        "Negative number argument values are not allowed."
                    )

        return ValidationOutcome.ok()


# Order matters: later analyzers assume the earlier checks passed
SYNTAX_ANALYZERS: tuple[Analyzer, ...] = (
    ParenAnalyzer(),
    QuoteAnalyzer(),
    OperatorAnalyzer(),
    NegativeNumberAnalyzer(),
)


def validate_syntax(
    expression: str | None,
    analyzers: tuple[Analyzer, ...] = SYNTAX_ANALYZERS,
) -> ValidationOutcome:
    """Run the syntax analyzers in order and return the first failure.

    Args:
        expression: The raw expression; leading/trailing whitespace is ignored
        analyzers: Analyzers to run, in order

    Returns:
        The first failing outcome, or a valid outcome with an empty message
    """
    expression = expression.strip() if expression else ""

    for analyzer in analyzers:
        outcome = analyzer.analyze(expression)
        if not outcome.valid:
            logger.debug(
                "%s rejected expression %r: %s",
                type(analyzer).__name__,
                expression,
                outcome.message,
            )
            return outcome

    return ValidationOutcome.ok()
