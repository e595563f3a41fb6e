"""Tests for the function registry."""

import dataclasses

import pytest

from branchvalidator.expressions import (
    DataType,
    FunctionCategory,
    FunctionDefinition,
    FunctionParameter,
    FunctionRegistry,
    FunctionRegistryError,
    FunctionSignature,
    build_default_registry,
    default_registry,
)


def _always_true(branch, *args):
    return True


def _definition(name="funA", parameters=(), implementation=_always_true):
    return FunctionDefinition(
        name=name,
        description="Test function",
        category=FunctionCategory.COMPARISON,
        parameters=parameters,
        implementation=implementation,
    )


class TestFunctionSignature:
    """Tests for typed signatures."""

    def test_text(self):
        assert FunctionSignature("allUpperCase").text == "allUpperCase()"
        assert FunctionSignature(
            "isSectionNum", (DataType.NUMBER, DataType.STRING)
        ).text == "isSectionNum(number, string)"

    def test_arity(self):
        assert FunctionSignature("f").arity == 0
        assert FunctionSignature("f", (DataType.STRING,)).arity == 1

    def test_matches(self):
        signature = FunctionSignature("f", (DataType.NUMBER, DataType.NUMBER))
        assert signature.matches([DataType.NUMBER, DataType.NUMBER])
        assert not signature.matches([DataType.NUMBER, DataType.STRING])
        assert not signature.matches([DataType.NUMBER])


class TestFunctionDefinition:
    """Tests for overload definitions."""

    def test_signature_from_parameters(self):
        definition = _definition(
            parameters=(
                FunctionParameter("value", DataType.STRING),
                FunctionParameter("total", DataType.NUMBER),
            )
        )
        assert definition.signature == FunctionSignature(
            "funA", (DataType.STRING, DataType.NUMBER)
        )

    def test_describe(self):
        definition = _definition(
            name="equalTo", parameters=(FunctionParameter("value", DataType.STRING),)
        )
        assert definition.describe() == "equalTo(value: string): bool"

    def test_is_frozen(self):
        definition = _definition()
        with pytest.raises(dataclasses.FrozenInstanceError):
            definition.name = "other"

    def test_to_dict(self):
        data = _definition(parameters=(FunctionParameter("n", DataType.NUMBER, "A number"),)).to_dict()
        assert data["name"] == "funA"
        assert data["signature"] == "funA(n: number): bool"
        assert data["category"] == "comparison"
        assert data["parameters"] == [{"name": "n", "type": "number", "description": "A number"}]
        assert data["returnType"] == "bool"


class TestRegistryConstruction:
    """The registry rejects a malformed function table."""

    def test_empty_registry(self):
        registry = FunctionRegistry([])
        assert len(registry) == 0
        assert registry.names == []

    def test_empty_name(self):
        with pytest.raises(FunctionRegistryError, match="cannot be empty"):
            FunctionRegistry([_definition(name="")])
        with pytest.raises(FunctionRegistryError):
            FunctionRegistry([_definition(name="   ")])

    def test_missing_implementation(self):
        with pytest.raises(FunctionRegistryError, match="has no implementation"):
            FunctionRegistry([_definition(implementation=None)])

    def test_parameter_without_data_type(self):
        with pytest.raises(FunctionRegistryError, match="missing a data type"):
            FunctionRegistry([_definition(parameters=(FunctionParameter("value", "string"),))])

    def test_parameter_without_name(self):
        with pytest.raises(FunctionRegistryError, match="missing a name"):
            FunctionRegistry([_definition(parameters=(FunctionParameter("", DataType.STRING),))])

    def test_duplicate_overload(self):
        params = (FunctionParameter("value", DataType.STRING),)
        with pytest.raises(FunctionRegistryError, match="duplicate overload 'funA\\(string\\)'"):
            FunctionRegistry([_definition(parameters=params), _definition(parameters=params)])

    def test_registry_error_is_value_error(self):
        with pytest.raises(ValueError):
            FunctionRegistry([_definition(name="")])

    def test_overloads_with_different_signatures(self):
        registry = FunctionRegistry([
            _definition(parameters=()),
            _definition(parameters=(FunctionParameter("n", DataType.NUMBER),)),
        ])
        assert len(registry) == 1
        assert [s.text for s in registry.signatures("funA")] == ["funA()", "funA(number)"]


class TestRegistryLookup:
    """Tests for lookups on the built-in registry."""

    def setup_method(self):
        self.registry = build_default_registry()

    def test_is_registered(self):
        assert self.registry.is_registered("equalTo")
        assert "isCharNum" in self.registry
        assert not self.registry.is_registered("notAFunction")
        assert not self.registry.is_registered("EqualTo")

    def test_signatures_of_unknown_function(self):
        assert self.registry.signatures("notAFunction") == []
        assert self.registry.definitions("notAFunction") == ()

    def test_signatures_in_registration_order(self):
        assert [s.text for s in self.registry.signatures("isSectionNum")] == [
            "isSectionNum(number, number)",
            "isSectionNum(number, string)",
        ]

    def test_total_params(self):
        assert self.registry.total_params("equalTo") == 1
        assert self.registry.total_params("isSectionNum") == 2
        assert self.registry.total_params("allUpperCase") == 0
        assert self.registry.total_params("notAFunction") == 0

    def test_param_type(self):
        assert self.registry.param_type("equalTo", 1) == DataType.STRING
        assert self.registry.param_type("existsTotal", 2) == DataType.NUMBER
        # First matching overload wins
        assert self.registry.param_type("isSectionNum", 2) == DataType.NUMBER

    def test_param_type_out_of_range(self):
        with pytest.raises(ValueError):
            self.registry.param_type("equalTo", 2)
        with pytest.raises(ValueError):
            self.registry.param_type("equalTo", 0)
        with pytest.raises(ValueError):
            self.registry.param_type("notAFunction", 1)

    def test_names(self):
        names = self.registry.names
        assert names[0] == "equalTo"
        assert len(names) == 21
        assert len(names) == len(set(names))

    def test_list_all_includes_overloads(self):
        assert len(self.registry.list_all()) == 22

    def test_list_by_category(self):
        names = [d.name for d in self.registry.list_by_category(FunctionCategory.CASE)]
        assert names == ["allUpperCase", "allLowerCase"]

    def test_list_signatures(self):
        signatures = self.registry.list_signatures()
        assert signatures[0] == "equalTo(value: string): bool"
        assert "isSectionNum(startPos: number, upToChar: string): bool" in signatures

    def test_export_documentation(self):
        docs = self.registry.export_documentation()
        assert set(docs) == {"functions", "byCategory"}
        assert len(docs["functions"]["isSectionNum"]) == 2
        assert [d["name"] for d in docs["byCategory"]["comparison"]] == ["equalTo"]

    def test_default_registry_is_shared(self):
        assert default_registry() is default_registry()
