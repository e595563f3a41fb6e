"""Evaluator for branch validation expressions.

Runs the full pipeline for an expression and a branch name:

    validate_syntax -> extract_segments -> SignatureAnalyzer -> dispatch

The result is the OR of every AND-segment. Every call is dispatched and
traced, even when the verdict is already decided, so the trace always holds
every function's answer in left-to-right order.
"""

import logging

from branchvalidator.expressions.analyzers import SYNTAX_ANALYZERS, Analyzer, validate_syntax
from branchvalidator.expressions.builtins import default_registry
from branchvalidator.expressions.extractor import extract_segments
from branchvalidator.expressions.functions import FunctionDefinition, FunctionRegistry
from branchvalidator.expressions.signatures import SignatureAnalyzer
from branchvalidator.expressions.types import (
    EvaluationOutcome,
    FunctionCall,
    Segment,
    TraceEntry,
    ValidationOutcome,
)

logger = logging.getLogger(__name__)

# A segment resolved for dispatch: each call paired with its overload
ResolvedSegment = tuple[tuple[FunctionCall, FunctionDefinition], ...]


class EvaluationError(Exception):
    """A built-in function failed while being dispatched."""
    pass


class Evaluator:
    """Validates and evaluates expressions against branch names.

    Holds no per-call state; one instance can serve concurrent callers.

    Usage:
        evaluator = Evaluator()
        outcome = evaluator.execute("startsWith('feature/')", "feature/123-branch")
        outcome.result        # True
        outcome.trace_lines() # ["startsWith(string) -> true"]
    """

    def __init__(
        self,
        registry: FunctionRegistry | None = None,
        analyzers: tuple[Analyzer, ...] = SYNTAX_ANALYZERS,
    ):
        self.registry = registry if registry is not None else default_registry()
        self.analyzers = analyzers
        self.signature_analyzer = SignatureAnalyzer(self.registry)

    def validate_syntax(self, expression: str | None) -> ValidationOutcome:
        """Run only the structural analyzers."""
        return validate_syntax(expression, self.analyzers)

    def validate(self, expression: str | None) -> ValidationOutcome:
        """Run the structural analyzers and check every call's signature."""
        outcome, _ = self._prepare(expression)
        return outcome

    def execute(self, expression: str | None, branch_name: str | None) -> EvaluationOutcome:
        """Validate the expression and evaluate it against the branch name.

        Args:
            expression: The validation expression
            branch_name: The branch name to check

        Returns:
            EvaluationOutcome. If validation fails, the result is False, the
            trace is empty and the outcome carries the validation failure.
        """
        outcome, plan = self._prepare(expression)
        if not outcome.valid:
            return EvaluationOutcome(result=False, validation=outcome)

        branch = branch_name or ""
        trace: list[TraceEntry] = []
        segment_results: list[bool] = []

        for segment in plan:
            results = [
                self._dispatch(call, definition, branch, trace)
                for call, definition in segment
            ]
            segment_results.append(all(results))

        result = any(segment_results)
        logger.debug(
            "Expression %r against branch %r evaluated to %s",
            expression,
            branch,
            result,
        )
        return EvaluationOutcome(result=result, trace=tuple(trace))

    def _prepare(
        self, expression: str | None
    ) -> tuple[ValidationOutcome, tuple[ResolvedSegment, ...]]:
        """Validate an expression and resolve every call to an overload."""
        outcome = self.validate_syntax(expression)
        if not outcome.valid:
            return outcome, ()

        plan: list[ResolvedSegment] = []
        for segment in extract_segments(expression):
            resolved, outcome = self._resolve_segment(segment)
            if not outcome.valid:
                return outcome, ()
            plan.append(resolved)

        return ValidationOutcome.ok(), tuple(plan)

    def _resolve_segment(self, segment: Segment) -> tuple[ResolvedSegment, ValidationOutcome]:
        resolved: list[tuple[FunctionCall, FunctionDefinition]] = []
        for call in segment.calls:
            outcome, definition = self.signature_analyzer.resolve(call)
            if definition is None:
                logger.debug("Call %s rejected: %s", call, outcome.message)
                return (), outcome
            resolved.append((call, definition))
        return tuple(resolved), ValidationOutcome.ok()

    def _dispatch(
        self,
        call: FunctionCall,
        definition: FunctionDefinition,
        branch: str,
        trace: list[TraceEntry],
    ) -> bool:
        """Call the overload's implementation and record the result."""
        args = [arg.value for arg in call.args]

        try:
            result = bool(definition.implementation(branch, *args))
        except Exception as e:
            raise EvaluationError(f"Error calling {call.name}: {e}") from e

        trace.append(
            TraceEntry(signature=definition.signature.text, result=result, call_text=str(call))
        )
        return result


# -----------------------------------------------------------------------------
# Convenience functions
# -----------------------------------------------------------------------------


def execute(expression: str | None, branch_name: str | None) -> EvaluationOutcome:
    """Validate and evaluate an expression with the built-in functions.

    This is the main entry point for branch validation.

    Example:
        outcome = execute(
            "contains('-') && isSectionNum(8, '-')",
            "feature/123-test-branch",
        )
        # outcome.result = True
    """
    return Evaluator().execute(expression, branch_name)


def evaluate_bool(expression: str | None, branch_name: str | None) -> bool:
    """Return only the verdict; an invalid expression is False."""
    return execute(expression, branch_name).result
