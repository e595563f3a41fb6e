"""Function registry for branch validation expressions.

Functions are callable from expressions (e.g., `equalTo('main')`, `isCharNum(8)`).
Each overload is registered as its own FunctionDefinition with parameter
metadata for documentation and a direct reference to its implementation.

The registry is built once from a static table and is read-only afterwards,
so a single instance can be shared between concurrent evaluations.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from branchvalidator.expressions.types import DataType

logger = logging.getLogger(__name__)


class FunctionRegistryError(ValueError):
    """The built-in function table is malformed.

    Raised while constructing a registry. This is a programming defect,
    never a user input error.
    """


class FunctionCategory(Enum):
    """Categories for organizing functions in documentation."""

    COMPARISON = "comparison"
    SEARCH = "search"
    COUNT = "count"
    POSITION = "position"
    LENGTH = "length"
    CASE = "case"


@dataclass(frozen=True)
class FunctionParameter:
    """Definition of a function parameter.

    Attributes:
        name: Parameter name
        type: Expected data type
        description: Human-readable description
    """

    name: str
    type: DataType
    description: str = ""


@dataclass(frozen=True)
class FunctionSignature:
    """A function name with its ordered parameter types.

    Two overloads of the same name must have different signatures.
    """

    name: str
    param_types: tuple[DataType, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.param_types)

    @property
    def text(self) -> str:
        """Typed signature text, e.g. ``isSectionNum(number, string)``."""
        types = ", ".join(t.value for t in self.param_types)
        return f"{self.name}({types})"

    def matches(self, arg_types: Iterable[DataType]) -> bool:
        return self.param_types == tuple(arg_types)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class FunctionDefinition:
    """Complete definition of one function overload.

    Attributes:
        name: Function name as used in expressions
        description: Human-readable description
        category: Category for documentation organization
        parameters: Parameter definitions, in call order
        implementation: Predicate called as ``implementation(branch_name, *args)``
        examples: Example expressions using this function
    """

    name: str
    description: str
    category: FunctionCategory
    parameters: tuple[FunctionParameter, ...]
    implementation: Callable[..., bool] | None
    examples: tuple[str, ...] = field(default_factory=tuple)

    @property
    def signature(self) -> FunctionSignature:
        return FunctionSignature(self.name, tuple(p.type for p in self.parameters))

    def describe(self) -> str:
        """Documentation signature, e.g. ``equalTo(value: string): bool``."""
        params = ", ".join(f"{p.name}: {p.type.value}" for p in self.parameters)
        return f"{self.name}({params}): bool"

    def to_dict(self) -> dict[str, Any]:
        """Export for the documentation command."""
        return {
            "name": self.name,
            "signature": self.describe(),
            "description": self.description,
            "category": self.category.value,
            "parameters": [
                {
                    "name": p.name,
                    "type": p.type.value,
                    "description": p.description,
                }
                for p in self.parameters
            ],
            "returnType": "bool",
            "examples": list(self.examples),
        }


class FunctionRegistry:
    """Immutable registry of expression functions and their overloads.

    Example:
        registry = FunctionRegistry([
            FunctionDefinition(
                name="equalTo",
                description="Branch equals the value",
                category=FunctionCategory.COMPARISON,
                parameters=(FunctionParameter("value", DataType.STRING),),
                implementation=equal_to,
            ),
        ])

        registry.signatures("equalTo")     # [FunctionSignature("equalTo", (STRING,))]
        registry.param_type("equalTo", 1)  # DataType.STRING

    Raises:
        FunctionRegistryError: If the definitions violate the table invariants
    """

    def __init__(self, definitions: Iterable[FunctionDefinition]):
        by_name: dict[str, list[FunctionDefinition]] = {}

        for definition in definitions:
            self._check_definition(definition)
            overloads = by_name.setdefault(definition.name, [])
            signature = definition.signature
            if any(existing.signature == signature for existing in overloads):
                raise FunctionRegistryError(
                    f"Function '{definition.name}' has a duplicate overload "
                    f"'{signature.text}'."
                )
            overloads.append(definition)

        self._functions: Mapping[str, tuple[FunctionDefinition, ...]] = MappingProxyType(
            {name: tuple(overloads) for name, overloads in by_name.items()}
        )
        logger.debug(
            "Function registry built with %d function(s), %d overload(s)",
            len(self._functions),
            sum(len(o) for o in self._functions.values()),
        )

    @staticmethod
    def _check_definition(definition: FunctionDefinition) -> None:
        if not definition.name or not definition.name.strip():
            raise FunctionRegistryError("Function names cannot be empty.")

        if definition.implementation is None:
            raise FunctionRegistryError(
                f"Function '{definition.name}' has no implementation."
            )

        for position, param in enumerate(definition.parameters, start=1):
            if not isinstance(param.type, DataType):
                raise FunctionRegistryError(
                    f"Parameter '{position}' of function '{definition.name}' "
                    "is missing a data type."
                )
            if not param.name:
                raise FunctionRegistryError(
                    f"Parameter '{position}' of function '{definition.name}' "
                    "is missing a name."
                )

    def is_registered(self, name: str) -> bool:
        """Check if a function name is registered."""
        return name in self._functions

    def definitions(self, name: str) -> tuple[FunctionDefinition, ...]:
        """All overloads of a function in registration order (empty if unknown)."""
        return self._functions.get(name, ())

    def signatures(self, name: str) -> list[FunctionSignature]:
        """All signatures of a function in registration order (empty if unknown)."""
        return [definition.signature for definition in self.definitions(name)]

    def total_params(self, name: str) -> int:
        """Parameter count of the first registered overload, 0 if unknown.

        Only meaningful for error messages when the function is overloaded.
        """
        overloads = self.definitions(name)
        return overloads[0].signature.arity if overloads else 0

    def param_type(self, name: str, position: int) -> DataType:
        """Data type of a 1-indexed parameter of the first matching overload.

        Raises:
            ValueError: If no overload of the function has that position
        """
        for definition in self.definitions(name):
            if 1 <= position <= len(definition.parameters):
                return definition.parameters[position - 1].type
        raise ValueError(
            f"The function '{name}' has no parameter at position '{position}'."
        )

    @property
    def names(self) -> list[str]:
        """Registered function names in registration order."""
        return list(self._functions)

    def list_all(self) -> list[FunctionDefinition]:
        """Every overload of every function in registration order."""
        return [d for overloads in self._functions.values() for d in overloads]

    def list_by_category(self, category: FunctionCategory) -> list[FunctionDefinition]:
        """List overloads in a specific category."""
        return [d for d in self.list_all() if d.category == category]

    def list_signatures(self) -> list[str]:
        """Documentation signatures of every overload."""
        return [d.describe() for d in self.list_all()]

    def export_documentation(self) -> dict[str, Any]:
        """Export the registry for documentation.

        Returns:
            Dict with all overloads keyed by function name and grouped by category
        """
        by_category: dict[str, list[dict[str, Any]]] = {}
        for definition in self.list_all():
            by_category.setdefault(definition.category.value, []).append(
                definition.to_dict()
            )

        return {
            "functions": {
                name: [d.to_dict() for d in overloads]
                for name, overloads in self._functions.items()
            },
            "byCategory": by_category,
        }

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __len__(self) -> int:
        return len(self._functions)
