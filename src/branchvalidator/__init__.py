"""Branch name validation against a small boolean expression DSL.

Usage:
    from branchvalidator import execute, validate_syntax

    validate_syntax("equalTo('main')").valid      # True

    outcome = execute("startsWith('feature/') || equalTo('develop')", "feature/12-login")
    outcome.result         # True
    outcome.trace_lines()  # ["startsWith(string) -> true", "equalTo(string) -> false"]
"""

from branchvalidator.expressions import (
    EvaluationOutcome,
    Evaluator,
    FunctionRegistry,
    TraceEntry,
    ValidationOutcome,
    default_registry,
    execute,
    validate_syntax,
)

__version__ = "1.0.0"

__all__ = [
    "EvaluationOutcome",
    "Evaluator",
    "FunctionRegistry",
    "TraceEntry",
    "ValidationOutcome",
    "default_registry",
    "execute",
    "validate_syntax",
    "__version__",
]
