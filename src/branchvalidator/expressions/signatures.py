"""Function signature analysis for extracted calls.

Checks every call against the function registry:
1. The call must end in an argument list, e.g. ``allUpperCase()``
2. The name must be registered
3. Some overload must take as many parameters as the call has arguments
4. Some overload of that arity must accept the argument types at every position

The first overload (registration order) passing all checks is the one
dispatched by the evaluator.
"""

import logging

from branchvalidator.expressions.extractor import LEFT_PAREN, RIGHT_PAREN
from branchvalidator.expressions.functions import FunctionDefinition, FunctionRegistry
from branchvalidator.expressions.types import (
    FunctionCall,
    NumberLiteral,
    ValidationOutcome,
)

logger = logging.getLogger(__name__)


class SignatureAnalyzer:
    """Resolves calls to registered function overloads.

    Usage:
        analyzer = SignatureAnalyzer(default_registry())
        outcome, definition = analyzer.resolve(parse_call("isCharNum(8)"))
    """

    def __init__(self, registry: FunctionRegistry):
        self.registry = registry

    def analyze(self, call: FunctionCall) -> ValidationOutcome:
        """Validate a call's name, argument count and argument types."""
        outcome, _ = self.resolve(call)
        return outcome

    def resolve(
        self, call: FunctionCall
    ) -> tuple[ValidationOutcome, FunctionDefinition | None]:
        """Find the overload to dispatch for a call.

        Returns:
            (outcome, definition). definition is None when outcome is invalid.
        """
        text = str(call)
        if LEFT_PAREN not in text or not text.endswith(RIGHT_PAREN):
            return (
                ValidationOutcome.fail(
                    f"The expression function '{text}' is not a usable function."
                ),
                None,
            )

        overloads = self.registry.definitions(call.name)
        if not overloads:
            return (
                ValidationOutcome.fail(
                    f"The expression function '{call.name}' is not a usable function."
                ),
                None,
            )

        arg_count = len(call.args)
        same_arity = [d for d in overloads if d.signature.arity == arg_count]
        if not same_arity:
            return self._arity_error(call, overloads), None

        closest_position = 0
        for definition in same_arity:
            mismatch = self._first_mismatch(call, definition)
            if mismatch is None:
                logger.debug("Resolved %s to %s", call, definition.signature)
                return ValidationOutcome.ok(), definition
            closest_position = max(closest_position, mismatch)

        return (
            ValidationOutcome.fail(
                f"The value at argument position '{closest_position}' for the "
                f"expression function '{call.name}' has an incorrect data type."
            ),
            None,
        )

    @staticmethod
    def _first_mismatch(call: FunctionCall, definition: FunctionDefinition) -> int | None:
        """Return the 1-indexed position of the first unacceptable argument."""
        for position, (arg, param) in enumerate(
            zip(call.args, definition.parameters), start=1
        ):
            if arg.data_type != param.type:
                return position
            if isinstance(arg, NumberLiteral) and arg.value is None:
                return position
        return None

    @staticmethod
    def _arity_error(
        call: FunctionCall, overloads: tuple[FunctionDefinition, ...]
    ) -> ValidationOutcome:
        arities = sorted({d.signature.arity for d in overloads})
        if len(call.args) < arities[0]:
            return ValidationOutcome.fail(
                f"The expression function '{call.name}' is missing an argument."
            )

        expected = " or ".join(str(a) for a in arities)
        return ValidationOutcome.fail(
            f"Incorrect number of function arguments. The function '{call.name}' "
            f"has '{len(call.args)}' argument(s) but is expecting '{expected}'."
        )
