"""Built-in functions for branch validation expressions.

Every function is a predicate over the branch name. Implementations take the
branch name first, followed by the call's literal arguments, and return a bool.
String comparisons are case-sensitive. An empty branch name makes every
predicate return False, except ``equalTo('')``.

Categories:
- Comparison: equalTo
- Search: contains, notContains, startsWith, notStartsWith, endsWith, notEndsWith
- Count: existsTotal, existsLessThan, existsGreaterThan
- Position: isCharNum, charIsNum, isSectionNum, startsWithNum, endsWithNum,
  isBefore, isAfter
- Length: lenLessThan, lenGreaterThan
- Case: allUpperCase, allLowerCase

Glob syntax is supported by equalTo and the search functions:
``#`` matches one or more digits, ``*`` matches one or more characters.
"""

import re
import string
from enum import Enum

from branchvalidator.expressions.functions import (
    FunctionCategory,
    FunctionDefinition,
    FunctionParameter,
    FunctionRegistry,
)
from branchvalidator.expressions.types import DataType

MATCH_NUMBERS = "#"
MATCH_ANYTHING = "*"

_STRING = DataType.STRING
_NUMBER = DataType.NUMBER


class MatchType(Enum):
    """Where a glob pattern must match within the branch name."""

    ANYWHERE = "anywhere"
    FULL = "full"
    START = "start"
    END = "end"


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def has_glob(value: str) -> bool:
    """Return True if the value uses ``#`` or ``*`` glob syntax."""
    return MATCH_NUMBERS in value or MATCH_ANYTHING in value


def glob_to_regex(pattern: str) -> str:
    """Translate a glob pattern into a regular expression.

    Consecutive ``#`` or ``*`` symbols collapse into one. All other
    characters match literally.
    """
    parts: list[str] = []
    previous = ""
    for char in pattern:
        if char in (MATCH_NUMBERS, MATCH_ANYTHING) and char == previous:
            continue
        if char == MATCH_NUMBERS:
            parts.append(r"\d+")
        elif char == MATCH_ANYTHING:
            parts.append(".+")
        else:
            parts.append(re.escape(char))
        previous = char
    return "".join(parts)


def glob_match(value: str, pattern: str, match_type: MatchType) -> bool:
    """Test a glob pattern against a value."""
    regex = glob_to_regex(pattern)
    if match_type == MatchType.FULL:
        return re.fullmatch(regex, value, re.DOTALL) is not None
    if match_type == MatchType.START:
        return re.match(regex, value, re.DOTALL) is not None
    if match_type == MatchType.END:
        return re.search(f"(?:{regex})\\Z", value, re.DOTALL) is not None
    return re.search(regex, value, re.DOTALL) is not None


def _is_digit(char: str) -> bool:
    return char in string.digits


def _count(branch: str, value: str) -> int:
    """Count non-overlapping literal occurrences of value in branch."""
    if not branch or not value:
        return 0
    return len(re.findall(re.escape(value), branch))


# -----------------------------------------------------------------------------
# Comparison
# -----------------------------------------------------------------------------


def _equal_to(branch: str, value: str) -> bool:
    """Branch equals value; both empty counts as equal."""
    if not value and not branch:
        return True
    if has_glob(value):
        return bool(branch) and glob_match(branch, value, MatchType.FULL)
    return value == branch


# -----------------------------------------------------------------------------
# Search
# -----------------------------------------------------------------------------


def _contains(branch: str, value: str) -> bool:
    if not branch:
        return False
    if has_glob(value):
        return glob_match(branch, value, MatchType.ANYWHERE)
    return value in branch


def _not_contains(branch: str, value: str) -> bool:
    return bool(branch) and not _contains(branch, value)


def _starts_with(branch: str, value: str) -> bool:
    if not branch:
        return False
    if has_glob(value):
        return glob_match(branch, value, MatchType.START)
    return branch.startswith(value)


def _not_starts_with(branch: str, value: str) -> bool:
    return bool(branch) and not _starts_with(branch, value)


def _ends_with(branch: str, value: str) -> bool:
    if not branch:
        return False
    if has_glob(value):
        return glob_match(branch, value, MatchType.END)
    return branch.endswith(value)


def _not_ends_with(branch: str, value: str) -> bool:
    return bool(branch) and not _ends_with(branch, value)


# -----------------------------------------------------------------------------
# Count
# -----------------------------------------------------------------------------


def _exists_total(branch: str, value: str, total: int) -> bool:
    return bool(branch) and _count(branch, value) == total


def _exists_less_than(branch: str, value: str, total: int) -> bool:
    return bool(branch) and _count(branch, value) < total


def _exists_greater_than(branch: str, value: str, total: int) -> bool:
    return bool(branch) and _count(branch, value) > total


# -----------------------------------------------------------------------------
# Position
# -----------------------------------------------------------------------------


def _is_char_num(branch: str, char_pos: int) -> bool:
    """Character at char_pos is a digit; False past the end of the branch."""
    if not branch or char_pos >= len(branch):
        return False
    return _is_digit(branch[char_pos])


def _is_section_num(branch: str, start_pos: int, end_pos: int) -> bool:
    """Every character from start_pos to end_pos (inclusive) is a digit.

    end_pos is clamped to the last character. An empty section (start_pos
    past end_pos or past the end of the branch) has no non-digits, so it is True.
    """
    if not branch:
        return False
    end_pos = min(end_pos, len(branch) - 1)
    return all(_is_digit(c) for c in branch[start_pos:end_pos + 1])


def _is_section_num_up_to(branch: str, start_pos: int, up_to_char: str) -> bool:
    """Every character from start_pos up to the first up_to_char is a digit.

    up_to_char is exclusive and only its first character is used. False if
    the character does not occur at or after start_pos.
    """
    if not branch or not up_to_char or start_pos >= len(branch):
        return False

    up_to_index = branch.find(up_to_char[0], start_pos)
    if up_to_index == -1:
        return False

    section = branch[start_pos:up_to_index]
    return bool(section) and all(_is_digit(c) for c in section)


def _starts_with_num(branch: str) -> bool:
    return bool(branch) and _is_digit(branch[0])


def _ends_with_num(branch: str) -> bool:
    return bool(branch) and _is_digit(branch[-1])


def _is_before(branch: str, value: str, after: str) -> bool:
    """First occurrence of value comes before the first occurrence of after.

    Both value and after must occur in the branch; otherwise False.
    """
    if not branch:
        return False
    value_index = branch.find(value)
    after_index = branch.find(after)
    if value_index == -1 or after_index == -1:
        return False
    return value_index < after_index


def _is_after(branch: str, value: str, before: str) -> bool:
    """First occurrence of value comes after the first occurrence of before.

    Both value and before must occur in the branch; otherwise False.
    """
    if not branch:
        return False
    value_index = branch.find(value)
    before_index = branch.find(before)
    if value_index == -1 or before_index == -1:
        return False
    return value_index > before_index


# -----------------------------------------------------------------------------
# Length
# -----------------------------------------------------------------------------


def _len_less_than(branch: str, length: int) -> bool:
    return bool(branch) and len(branch) < length


def _len_greater_than(branch: str, length: int) -> bool:
    return bool(branch) and len(branch) > length


# -----------------------------------------------------------------------------
# Case
# -----------------------------------------------------------------------------


def _all_upper_case(branch: str) -> bool:
    """At least one letter and every letter is upper case."""
    letters = [c for c in branch or "" if c.isalpha()]
    return bool(letters) and all(c.isupper() for c in letters)


def _all_lower_case(branch: str) -> bool:
    """At least one letter and every letter is lower case."""
    letters = [c for c in branch or "" if c.isalpha()]
    return bool(letters) and all(c.islower() for c in letters)


# -----------------------------------------------------------------------------
# Built-in table
# -----------------------------------------------------------------------------


def _comparison_functions() -> list[FunctionDefinition]:
    return [
        FunctionDefinition(
            name="equalTo",
            description="Returns true if the branch name equals the value (globbing allowed)",
            category=FunctionCategory.COMPARISON,
            parameters=(
                FunctionParameter("value", _STRING, "The value to compare against"),
            ),
            implementation=_equal_to,
            examples=("equalTo('develop')", "equalTo('release/v#.#.#')"),
        ),
    ]


def _search_functions() -> list[FunctionDefinition]:
    value = FunctionParameter("value", _STRING, "The text or glob pattern to look for")
    return [
        FunctionDefinition(
            name="contains",
            description="Returns true if the branch name contains the value",
            category=FunctionCategory.SEARCH,
            parameters=(value,),
            implementation=_contains,
            examples=("contains('feature')", "contains('#-*')"),
        ),
        FunctionDefinition(
            name="notContains",
            description="Returns true if the branch name does not contain the value",
            category=FunctionCategory.SEARCH,
            parameters=(value,),
            implementation=_not_contains,
            examples=("notContains('wip')",),
        ),
        FunctionDefinition(
            name="startsWith",
            description="Returns true if the branch name starts with the value",
            category=FunctionCategory.SEARCH,
            parameters=(value,),
            implementation=_starts_with,
            examples=("startsWith('feature/')", "startsWith('feature/#-')"),
        ),
        FunctionDefinition(
            name="notStartsWith",
            description="Returns true if the branch name does not start with the value",
            category=FunctionCategory.SEARCH,
            parameters=(value,),
            implementation=_not_starts_with,
            examples=("notStartsWith('temp/')",),
        ),
        FunctionDefinition(
            name="endsWith",
            description="Returns true if the branch name ends with the value",
            category=FunctionCategory.SEARCH,
            parameters=(value,),
            implementation=_ends_with,
            examples=("endsWith('-branch')", "endsWith('preview.#')"),
        ),
        FunctionDefinition(
            name="notEndsWith",
            description="Returns true if the branch name does not end with the value",
            category=FunctionCategory.SEARCH,
            parameters=(value,),
            implementation=_not_ends_with,
            examples=("notEndsWith('-old')",),
        ),
    ]


def _count_functions() -> list[FunctionDefinition]:
    params = (
        FunctionParameter("value", _STRING, "The text to count"),
        FunctionParameter("total", _NUMBER, "The number of occurrences to compare to"),
    )
    return [
        FunctionDefinition(
            name="existsTotal",
            description="Returns true if the value occurs exactly total times",
            category=FunctionCategory.COUNT,
            parameters=params,
            implementation=_exists_total,
            examples=("existsTotal('/', 1)",),
        ),
        FunctionDefinition(
            name="existsLessThan",
            description="Returns true if the value occurs fewer than total times",
            category=FunctionCategory.COUNT,
            parameters=params,
            implementation=_exists_less_than,
            examples=("existsLessThan('-', 3)",),
        ),
        FunctionDefinition(
            name="existsGreaterThan",
            description="Returns true if the value occurs more than total times",
            category=FunctionCategory.COUNT,
            parameters=params,
            implementation=_exists_greater_than,
            examples=("existsGreaterThan('-', 0)",),
        ),
    ]


def _position_functions() -> list[FunctionDefinition]:
    char_pos = FunctionParameter("charPos", _NUMBER, "Zero-based character position")
    start_pos = FunctionParameter("startPos", _NUMBER, "Zero-based start of the section")
    return [
        FunctionDefinition(
            name="isCharNum",
            description="Returns true if the character at charPos is a digit",
            category=FunctionCategory.POSITION,
            parameters=(char_pos,),
            implementation=_is_char_num,
            examples=("isCharNum(8)",),
        ),
        FunctionDefinition(
            name="charIsNum",
            description="Alias of isCharNum",
            category=FunctionCategory.POSITION,
            parameters=(char_pos,),
            implementation=_is_char_num,
            examples=("charIsNum(8)",),
        ),
        FunctionDefinition(
            name="isSectionNum",
            description="Returns true if every character from startPos to endPos is a digit",
            category=FunctionCategory.POSITION,
            parameters=(
                start_pos,
                FunctionParameter("endPos", _NUMBER, "Zero-based inclusive end of the section"),
            ),
            implementation=_is_section_num,
            examples=("isSectionNum(8, 10)",),
        ),
        FunctionDefinition(
            name="isSectionNum",
            description="Returns true if every character from startPos up to upToChar is a digit",
            category=FunctionCategory.POSITION,
            parameters=(
                start_pos,
                FunctionParameter("upToChar", _STRING, "Character that ends the section (exclusive)"),
            ),
            implementation=_is_section_num_up_to,
            examples=("isSectionNum(8, '-')",),
        ),
        FunctionDefinition(
            name="startsWithNum",
            description="Returns true if the branch name starts with a digit",
            category=FunctionCategory.POSITION,
            parameters=(),
            implementation=_starts_with_num,
            examples=("startsWithNum()",),
        ),
        FunctionDefinition(
            name="endsWithNum",
            description="Returns true if the branch name ends with a digit",
            category=FunctionCategory.POSITION,
            parameters=(),
            implementation=_ends_with_num,
            examples=("endsWithNum()",),
        ),
        FunctionDefinition(
            name="isBefore",
            description="Returns true if value first occurs before after",
            category=FunctionCategory.POSITION,
            parameters=(
                FunctionParameter("value", _STRING, "The text expected first"),
                FunctionParameter("after", _STRING, "The text expected after value"),
            ),
            implementation=_is_before,
            examples=("isBefore('feature', '/')",),
        ),
        FunctionDefinition(
            name="isAfter",
            description="Returns true if value first occurs after before",
            category=FunctionCategory.POSITION,
            parameters=(
                FunctionParameter("value", _STRING, "The text expected last"),
                FunctionParameter("before", _STRING, "The text expected before value"),
            ),
            implementation=_is_after,
            examples=("isAfter('-', 'feature/')",),
        ),
    ]


def _length_functions() -> list[FunctionDefinition]:
    length = FunctionParameter("length", _NUMBER, "The length to compare to")
    return [
        FunctionDefinition(
            name="lenLessThan",
            description="Returns true if the branch name is shorter than length",
            category=FunctionCategory.LENGTH,
            parameters=(length,),
            implementation=_len_less_than,
            examples=("lenLessThan(50)",),
        ),
        FunctionDefinition(
            name="lenGreaterThan",
            description="Returns true if the branch name is longer than length",
            category=FunctionCategory.LENGTH,
            parameters=(length,),
            implementation=_len_greater_than,
            examples=("lenGreaterThan(3)",),
        ),
    ]


def _case_functions() -> list[FunctionDefinition]:
    return [
        FunctionDefinition(
            name="allUpperCase",
            description="Returns true if every letter in the branch name is upper case",
            category=FunctionCategory.CASE,
            parameters=(),
            implementation=_all_upper_case,
            examples=("allUpperCase()",),
        ),
        FunctionDefinition(
            name="allLowerCase",
            description="Returns true if every letter in the branch name is lower case",
            category=FunctionCategory.CASE,
            parameters=(),
            implementation=_all_lower_case,
            examples=("allLowerCase()",),
        ),
    ]


def builtin_definitions() -> list[FunctionDefinition]:
    """Return every built-in overload in registration order."""
    return [
        *_comparison_functions(),
        *_search_functions(),
        *_count_functions(),
        *_position_functions(),
        *_length_functions(),
        *_case_functions(),
    ]


def build_default_registry() -> FunctionRegistry:
    """Build a new registry holding all built-in functions."""
    return FunctionRegistry(builtin_definitions())


_default_registry: FunctionRegistry | None = None


def default_registry() -> FunctionRegistry:
    """Return the shared built-in registry, building it on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = build_default_registry()
    return _default_registry
