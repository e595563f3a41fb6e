"""Expression DSL for branch name validation.

This module provides:
- Syntax analyzers: Reject malformed expressions before extraction
- Extractor: Splits expressions into OR-segments of AND-joined calls
- FunctionRegistry: Immutable registry of built-in functions and overloads
- SignatureAnalyzer: Checks calls against the registry
- Evaluator: Dispatches calls and combines results into a verdict and trace
"""

from branchvalidator.expressions.analyzers import (
    SYNTAX_ANALYZERS,
    Analyzer,
    NegativeNumberAnalyzer,
    OperatorAnalyzer,
    ParenAnalyzer,
    QuoteAnalyzer,
    validate_syntax,
)
from branchvalidator.expressions.builtins import (
    build_default_registry,
    builtin_definitions,
    default_registry,
)
from branchvalidator.expressions.evaluator import (
    EvaluationError,
    Evaluator,
    evaluate_bool,
    execute,
)
from branchvalidator.expressions.extractor import (
    extract_calls,
    extract_names,
    extract_segments,
    join_segments,
    parse_call,
)
from branchvalidator.expressions.functions import (
    FunctionCategory,
    FunctionDefinition,
    FunctionParameter,
    FunctionRegistry,
    FunctionRegistryError,
    FunctionSignature,
)
from branchvalidator.expressions.signatures import SignatureAnalyzer
from branchvalidator.expressions.types import (
    ArgValue,
    DataType,
    EvaluationOutcome,
    FunctionCall,
    NumberLiteral,
    Segment,
    StringLiteral,
    TraceEntry,
    ValidationOutcome,
)

__all__ = [
    # Analyzers
    "SYNTAX_ANALYZERS",
    "Analyzer",
    "NegativeNumberAnalyzer",
    "OperatorAnalyzer",
    "ParenAnalyzer",
    "QuoteAnalyzer",
    "validate_syntax",
    # Builtins
    "build_default_registry",
    "builtin_definitions",
    "default_registry",
    # Evaluator
    "EvaluationError",
    "Evaluator",
    "evaluate_bool",
    "execute",
    # Extractor
    "extract_calls",
    "extract_names",
    "extract_segments",
    "join_segments",
    "parse_call",
    # Functions
    "FunctionCategory",
    "FunctionDefinition",
    "FunctionParameter",
    "FunctionRegistry",
    "FunctionRegistryError",
    "FunctionSignature",
    "SignatureAnalyzer",
    # Types
    "ArgValue",
    "DataType",
    "EvaluationOutcome",
    "FunctionCall",
    "NumberLiteral",
    "Segment",
    "StringLiteral",
    "TraceEntry",
    "ValidationOutcome",
]
