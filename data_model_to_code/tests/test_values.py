import pytest

from data_model_to_code.errors import (
    ExcessFieldsError,
    InheritanceError,
    MissingFieldError,
    ShapeError,
    UnknownEnumCaseError,
    UnknownTypeError,
    VariantError,
)
from data_model_to_code.loader import registry_from_dict
from data_model_to_code.schema import ValueConverter
from data_model_to_code.serialization import Value, from_python


@pytest.fixture
def converter(shapes_registry):
    return ValueConverter(shapes_registry)


@pytest.mark.parametrize(
    "text, type_name, expected",
    [
        ("true", "boolean", True),
        ("12", "integer", 12),
        ("12", "number", 12.0),
        ("12", "string", "12"),
        ("false", "bool", False),
        ("-3", "int", -3),
    ],
)
def test_scalars(text, type_name, expected):
    assert ValueConverter(registry_from_dict({})).to_json(Value(text), type_name) == expected


def test_struct_fills_defaults(converter):
    assert converter.to_json(from_python({"x": "2"}), "Point") == {"x": 2.0, "y": 0.0}


def test_struct_rejects_unknown_fields(converter, shapes):
    model = from_python({"x": "1", "color": "red"})
    with pytest.raises(ExcessFieldsError) as excinfo:
        converter.to_json(model, "Point")
    assert excinfo.value.names == ["color"]

    # The generated parser keeps them instead
    assert shapes.parse_Point(model).extra_fields == from_python({"color": "red"})


def test_missing_field(converter):
    with pytest.raises(MissingFieldError):
        converter.to_json(from_python({"shapes": []}), "Layer")


def test_nested_values(converter):
    model = from_python(
        {
            "name": "top",
            "shapes": ["Empty", {"Circle": "2"}, {"Polygon": [{"x": "1", "y": "1"}]}],
            "opacity": "0.5",
        }
    )
    assert converter.to_json(model, "Layer") == {
        "name": "top",
        "shapes": ["Empty", {"Circle": 2.0}, {"Polygon": [{"x": 1.0, "y": 1.0}]}],
        "visible": True,
        "opacity": 0.5,
    }


def test_error_location(converter):
    model = from_python({"name": "top", "shapes": [{"Polygon": [{"x": "1"}, {"z": "1"}]}]})
    with pytest.raises(ExcessFieldsError) as excinfo:
        converter.to_json(model, "Layer")
    assert excinfo.value.path == "shapes[0].Polygon[1]"


def test_variant_uses_first_match(converter):
    assert converter.to_json(Value("3"), "Opacity") == 3
    assert converter.to_json(Value("3.5"), "Opacity") == 3.5
    assert converter.to_json(Value("opaque"), "Opacity") == "opaque"
    with pytest.raises(VariantError):
        converter.to_json(from_python([]), "Opacity")


def test_enum(converter):
    assert converter.to_json(Value("Empty"), "Shape") == "Empty"
    with pytest.raises(UnknownEnumCaseError):
        converter.to_json(Value("Circle"), "Shape")
    with pytest.raises(UnknownEnumCaseError):
        converter.to_json(from_python({"Empty": "1"}), "Shape")
    with pytest.raises(ShapeError):
        converter.to_json(from_python({"Circle": "1", "Polygon": []}), "Shape")


def test_unknown_type(converter):
    with pytest.raises(UnknownTypeError):
        converter.to_json(Value("1"), "Nope")


def inheritance_registry(base_type="struct"):
    base = {"name": "Base", "type": "struct", "data": {"fields": [{"name": "id", "type": "integer"}]}}
    if base_type != "struct":
        base = {"name": "Base", "type": "array", "data": {"type": "integer"}}
    return registry_from_dict(
        {
            "types": [
                base,
                {
                    "name": "Child",
                    "type": "struct",
                    "data": {"inherit": "Base", "fields": [{"name": "name", "type": "string"}]},
                },
            ]
        }
    )


def test_inherited_fields():
    converter = ValueConverter(inheritance_registry())
    assert converter.to_json(from_python({"id": "1", "name": "a"}), "Child") == {"id": 1, "name": "a"}
    with pytest.raises(MissingFieldError):
        converter.to_json(from_python({"name": "a"}), "Child")


def test_inherit_from_non_struct():
    converter = ValueConverter(inheritance_registry("array"))
    with pytest.raises(InheritanceError):
        converter.to_json(from_python({"name": "a"}), "Child")


def test_circular_inheritance():
    registry = registry_from_dict(
        {
            "types": [
                {"name": "A", "type": "struct", "data": {"inherit": "B"}},
                {"name": "B", "type": "struct", "data": {"inherit": "A"}},
            ]
        }
    )
    with pytest.raises(InheritanceError):
        ValueConverter(registry).to_json(from_python({}), "A")
