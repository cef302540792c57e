import pytest

from data_model_to_code.data_model import Array, DataType, Enum, EnumType, Struct, StructField, TypeKind, Variant
from data_model_to_code.errors import DuplicateNameError, RegistryFrozenError, ReservedNameError
from data_model_to_code.registry import Registry
from data_model_to_code.serialization import Array as ArrayModel
from data_model_to_code.serialization import Value


def test_duplicate_name_keeps_first_entry():
    registry = Registry()
    first = DataType("Point", Struct([StructField("x", "number")]))
    registry.add(first)

    with pytest.raises(DuplicateNameError) as excinfo:
        registry.add(DataType("Point", Array("number")))

    assert excinfo.value.name == "Point"
    assert len(registry) == 1
    assert registry.get("Point") is first


@pytest.mark.parametrize("name", ["integer", "number", "string", "boolean", "int", "str"])
def test_builtin_names_are_reserved(name):
    registry = Registry()
    with pytest.raises(ReservedNameError) as excinfo:
        registry.add(DataType(name, Struct()))
    assert excinfo.value.name == name
    assert name not in registry


def test_lookup_and_order():
    registry = Registry(["geo"])
    registry.add(DataType("B", Array("number")))
    registry.add(DataType("A", Struct()))
    registry.add(DataType("C", Array("A")))

    assert registry.names() == ["B", "A", "C"]
    assert [data_type.name for data_type in registry] == ["B", "A", "C"]
    assert "A" in registry
    assert "D" not in registry
    assert registry.get("D") is None
    assert [data_type.name for data_type in registry.get_group(TypeKind.ARRAY)] == ["B", "C"]
    assert registry.namespace == ["geo"]


def test_headers_footers_and_macros():
    registry = Registry()
    registry.set_header("py", "import math")
    registry.set_header("py", "import cmath")
    registry.set_footer("pyi", "# end")
    registry.set_macro("PI", "3.14")
    registry.set_macro("LIST", ArrayModel([Value("1")]))

    assert registry.get_header("py") == "import cmath"
    assert registry.get_header("pyi") == ""
    assert registry.get_footer("pyi") == "# end"
    assert registry.get_footer("py") == ""
    assert registry.macros == {"PI": Value("3.14"), "LIST": ArrayModel([Value("1")])}


def test_freeze_rejects_mutation():
    registry = Registry()
    registry.add(DataType("A", Struct()))
    assert registry.freeze() is registry
    assert registry.frozen

    with pytest.raises(RegistryFrozenError):
        registry.add(DataType("B", Struct()))
    with pytest.raises(RegistryFrozenError):
        registry.set_macro("X", "1")
    with pytest.raises(RegistryFrozenError):
        registry.set_header("py", "")
    assert registry.names() == ["A"]


def test_references():
    data_type = DataType(
        "Geometry",
        Enum([EnumType("Empty"), EnumType("Pt", "Point"), EnumType("Pts", "Points")]),
    )
    assert data_type.references() == ["Point", "Points"]
    assert DataType("S", Struct([StructField("a", "A")], inherit="Base")).references() == ["Base", "A"]
    assert DataType("V", Variant(["integer", "string"])).references() == ["integer", "string"]
