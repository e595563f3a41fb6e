"""Function call extraction for branch validation expressions.

Splits a syntactically valid expression into OR-segments, each holding the
AND-joined function calls in left-to-right order:

    startsWith('feature/') && isCharNum(8) || equalTo('develop')

    Segment(startsWith('feature/'), isCharNum(8))
    Segment(equalTo('develop'))

Splitting and argument parsing ignore operator and comma characters that
appear inside quoted string arguments.
"""

import logging
from typing import Iterator

from branchvalidator.expressions.types import (
    ArgValue,
    FunctionCall,
    NumberLiteral,
    Segment,
    StringLiteral,
)

logger = logging.getLogger(__name__)

AND_OPERATOR = "&&"
OR_OPERATOR = "||"
LEFT_PAREN = "("
RIGHT_PAREN = ")"
ARG_SEPARATOR = ","
QUOTES = ("'", '"')


def split_outside_quotes(text: str, separator: str) -> list[str]:
    """Split text on separator, skipping separators inside quoted strings.

    Pieces are returned untrimmed and may be empty.
    """
    pieces: list[str] = []
    quote: str | None = None
    start = 0
    i = 0

    while i < len(text):
        char = text[i]
        if quote is not None:
            if char == quote:
                quote = None
        elif char in QUOTES:
            quote = char
        elif text.startswith(separator, i):
            pieces.append(text[start:i])
            i += len(separator)
            start = i
            continue
        i += 1

    pieces.append(text[start:])
    return pieces


def iter_arg_spans(expression: str) -> Iterator[tuple[int, int]]:
    """Yield (open, close) indexes of every top-level argument list.

    ``open`` is the index of the ``(`` and ``close`` the index of its
    matching ``)``. An argument list left unclosed is not yielded.
    """
    depth = 0
    quote: str | None = None
    open_index = -1

    for index, char in enumerate(expression):
        if quote is not None:
            if char == quote:
                quote = None
            continue
        if char in QUOTES:
            quote = char
        elif char == LEFT_PAREN:
            if depth == 0:
                open_index = index
            depth += 1
        elif char == RIGHT_PAREN and depth > 0:
            depth -= 1
            if depth == 0:
                yield open_index, index


def arg_list_text(call_text: str) -> str:
    """Return the text between the first ``(`` and the last ``)``."""
    left = call_text.find(LEFT_PAREN)
    right = call_text.rfind(RIGHT_PAREN)
    if left == -1 or right == -1 or left > right:
        return ""
    return call_text[left + 1:right]


def split_args(arg_text: str) -> list[str]:
    """Split an argument list on commas and trim each argument.

    An empty argument list gives no arguments. Empty arguments between or
    after commas (``f(1,)``) are kept so the signature check rejects them.
    """
    if not arg_text.strip():
        return []

    return [arg.strip() for arg in split_outside_quotes(arg_text, ARG_SEPARATOR)]


def parse_arg(text: str) -> ArgValue:
    """Classify a trimmed argument as a string or number literal."""
    if len(text) >= 2 and text[0] in QUOTES and text[-1] == text[0]:
        return StringLiteral(text[1:-1])
    return NumberLiteral(text)


def parse_call(text: str) -> FunctionCall:
    """Parse a single call such as ``isSectionNum(8, '-')``."""
    text = text.strip()
    name = text.split(LEFT_PAREN, 1)[0].strip()
    args = tuple(parse_arg(arg) for arg in split_args(arg_list_text(text)))
    return FunctionCall(name=name, args=args, text=text)


def extract_segments(expression: str | None) -> tuple[Segment, ...]:
    """Split an expression into OR-segments of AND-joined calls.

    Splits on ``||`` first, then each piece on ``&&``, preserving order.
    Empty pieces (only possible for expressions the analyzers reject) are
    skipped.
    """
    if not expression or not expression.strip():
        return ()

    segments: list[Segment] = []
    for or_piece in split_outside_quotes(expression.strip(), OR_OPERATOR):
        calls = tuple(
            parse_call(and_piece)
            for and_piece in split_outside_quotes(or_piece, AND_OPERATOR)
            if and_piece.strip()
        )
        if calls:
            segments.append(Segment(calls))

    logger.debug(
        "Extracted %d segment(s) from expression %r", len(segments), expression
    )
    return tuple(segments)


def extract_calls(expression: str | None) -> list[FunctionCall]:
    """Return every call in the expression in left-to-right order."""
    return [call for segment in extract_segments(expression) for call in segment.calls]


def extract_names(expression: str | None) -> list[str]:
    """Return the function name of every call in left-to-right order."""
    return [call.name for call in extract_calls(expression)]


def join_segments(segments: tuple[Segment, ...] | list[Segment]) -> str:
    """Rebuild an expression from extracted segments."""
    return f" {OR_OPERATOR} ".join(str(segment) for segment in segments)
