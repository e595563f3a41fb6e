"""Core types for the branch validation expression pipeline.

This module defines the value objects that flow between the pipeline stages:
- Syntax analyzers produce ValidationOutcome
- The extractor produces Segment and FunctionCall (with ArgValue arguments)
- The evaluator produces EvaluationOutcome carrying an ordered trace
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Largest value accepted for a number literal (unsigned 32-bit)
MAX_NUMBER = 2**32 - 1


class DataType(Enum):
    """Parameter and argument data types."""

    STRING = "string"
    NUMBER = "number"


@dataclass(frozen=True)
class StringLiteral:
    """A quoted string argument with its quotes stripped."""

    value: str

    @property
    def data_type(self) -> DataType:
        return DataType.STRING

    def __str__(self) -> str:
        return f"'{self.value}'"


@dataclass(frozen=True)
class NumberLiteral:
    """An unquoted argument, expected to be an unsigned integer.

    The source text is kept as written. A text that is not a valid unsigned
    32-bit integer has a ``value`` of None; that is reported as a data type
    error by the signature analyzer, not at extraction time.
    """

    text: str

    @property
    def data_type(self) -> DataType:
        return DataType.NUMBER

    @property
    def value(self) -> int | None:
        if not self.text.isascii() or not self.text.isdigit():
            return None
        number = int(self.text)
        if number > MAX_NUMBER:
            return None
        return number

    def __str__(self) -> str:
        return self.text


ArgValue = StringLiteral | NumberLiteral


@dataclass(frozen=True)
class FunctionCall:
    """A single function call extracted from an expression.

    Attributes:
        name: Function name as written in the expression (e.g. "equalTo")
        args: Arguments in call order
        text: The call's source text, trimmed
    """

    name: str
    args: tuple[ArgValue, ...] = ()
    text: str = ""

    @property
    def arg_types(self) -> tuple[DataType, ...]:
        return tuple(arg.data_type for arg in self.args)

    def __str__(self) -> str:
        return self.text or f"{self.name}({', '.join(str(a) for a in self.args)})"


@dataclass(frozen=True)
class Segment:
    """A maximal run of function calls joined solely by ``&&``.

    Segments are themselves joined by ``||``.
    """

    calls: tuple[FunctionCall, ...]

    def __str__(self) -> str:
        return " && ".join(str(call) for call in self.calls)


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of an analyzer or of the aggregate validator.

    ``valid=True`` always carries an empty message.
    """

    valid: bool
    message: str = ""

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return cls(valid=True)

    @classmethod
    def fail(cls, message: str) -> "ValidationOutcome":
        return cls(valid=False, message=message)

    def __bool__(self) -> bool:
        return self.valid

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "message": self.message}


@dataclass(frozen=True)
class TraceEntry:
    """One dispatched function call and its boolean result.

    Attributes:
        signature: Typed signature of the dispatched overload, e.g. "equalTo(string)"
        result: The predicate's answer
        call_text: The call as written in the expression
    """

    signature: str
    result: bool
    call_text: str = ""

    def __str__(self) -> str:
        return f"{self.signature} -> {str(self.result).lower()}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "signature": self.signature,
            "call": self.call_text,
            "result": self.result,
        }


@dataclass(frozen=True)
class EvaluationOutcome:
    """Result of executing an expression against a branch name.

    Attributes:
        result: Overall verdict (OR across AND-segments)
        trace: One entry per dispatched call, in left-to-right order
        validation: The validation outcome; invalid means nothing was dispatched
    """

    result: bool
    trace: tuple[TraceEntry, ...] = ()
    validation: ValidationOutcome = field(default_factory=ValidationOutcome.ok)

    @property
    def valid(self) -> bool:
        """True if the expression passed validation."""
        return self.validation.valid

    @property
    def message(self) -> str:
        return self.validation.message

    def failed_entries(self) -> tuple[TraceEntry, ...]:
        return tuple(entry for entry in self.trace if not entry.result)

    def trace_lines(self) -> list[str]:
        """Render the trace one line per entry as ``<signature> -> <true|false>``."""
        return [str(entry) for entry in self.trace]

    def to_dict(self) -> dict[str, Any]:
        return {
            "result": self.result,
            "validation": self.validation.to_dict(),
            "trace": [entry.to_dict() for entry in self.trace],
        }
