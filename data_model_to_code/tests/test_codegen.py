import ast

import pytest

from data_model_to_code.codegen import GeneratorConfig, ModelGenerator
from data_model_to_code.errors import (
    ConstraintError,
    FieldOrderError,
    IntegerConversionError,
    MissingFieldError,
    NumberConversionError,
    ShapeError,
    UnknownEnumCaseError,
    VariantError,
)
from data_model_to_code.serialization import Array, Map, Value, from_python


def test_generated_code_is_valid_python(shapes_registry):
    generator = ModelGenerator(shapes_registry, GeneratorConfig(add_generation_comment=False))
    ast.parse(generator.get_source("shapes"))
    ast.parse(generator.get_header("shapes"))


class TestStruct:
    def test_parse_with_defaults(self, shapes):
        point = shapes.parse_Point(Map({"x": Value("1.5")}))
        assert point.x == 1.5
        assert point.y == 0.0
        assert point.label is None
        assert point.extra_fields == Map()

    def test_constructor(self, shapes):
        point = shapes.Point(label="a")
        assert point.x == shapes.Point.default_x()
        assert point == shapes.Point(0.0, 0.0, "a")
        assert point != shapes.Point(1.0, 0.0, "a")

    def test_round_trip_keeps_extra_fields(self, shapes):
        model = from_python({"x": "1.5", "y": "-2.0", "label": "A", "color": "red", "tags": ["a", "b"]})
        point = shapes.parse_Point(model)
        assert point.extra_fields == from_python({"color": "red", "tags": ["a", "b"]})
        assert shapes.export_Point(point) == model

    def test_optional_field_is_not_exported(self, shapes):
        assert shapes.export_Point(shapes.Point(1.0, 2.0)) == Map({"x": Value("1.0"), "y": Value("2.0")})

    def test_missing_required_field(self, shapes):
        with pytest.raises(MissingFieldError) as excinfo:
            shapes.parse_Layer(from_python({"shapes": []}))
        assert str(excinfo.value) == 'Missing required field "name"'

    def test_field_error_location(self, shapes):
        model = from_python({"name": "top", "shapes": [{"Polygon": [{"x": "1"}, {"x": "one"}]}]})
        with pytest.raises(VariantError):
            shapes.parse_Layer(from_python({"name": "top", "shapes": [], "opacity": ["x"]}))
        with pytest.raises(NumberConversionError) as excinfo:
            shapes.parse_Layer(model)
        assert excinfo.value.path == "shapes[0].Polygon[1].x"

    def test_not_a_map(self, shapes):
        with pytest.raises(ShapeError):
            shapes.parse_Point(Value("1.0"))

    def test_repr_uses_namespace(self, shapes):
        assert repr(shapes.Point(1.0, 2.0)).startswith("shapes.Point(x=1.0, y=2.0, label=None")

    def test_docstring(self, shapes):
        assert shapes.Point.__doc__ == "A point in the plane"


class TestArray:
    def test_round_trip(self, shapes):
        model = from_python([{"x": "1.0", "y": "2.0"}, {"x": "3.0", "y": "4.0"}])
        points = shapes.parse_Points(model)
        assert len(points) == 2
        assert [point.x for point in points] == [1.0, 3.0]
        assert shapes.export_Points(points) == model

    def test_element_error_is_indexed(self, shapes):
        with pytest.raises(ShapeError) as excinfo:
            shapes.parse_Points(from_python([{"x": "1.0"}, "oops"]))
        assert excinfo.value.location == [1]
        assert str(excinfo.value) == "[1]: Expected a map but found a value"

    def test_not_a_list(self, shapes):
        with pytest.raises(ShapeError):
            shapes.parse_Points(Map())


class TestVariant:
    def test_declared_order_wins(self, shapes):
        opacity = shapes.parse_Opacity(Value("5"))
        assert opacity.value == 5
        assert type(opacity.value) is int

    def test_falls_through_alternatives(self, shapes):
        assert shapes.parse_Opacity(Value("0.5")).value == 0.5
        assert shapes.parse_Opacity(Value("half")).value == "half"

    def test_round_trip(self, shapes):
        for text in ["5", "0.5", "half"]:
            opacity = shapes.parse_Opacity(Value(text))
            assert shapes.parse_Opacity(shapes.export_Opacity(opacity)) == opacity

    def test_all_alternatives_fail(self, shapes):
        with pytest.raises(VariantError) as excinfo:
            shapes.parse_Opacity(Array())
        assert [name for name, _ in excinfo.value.failures] == ["integer", "number", "string"]

    def test_equality_compares_held_type(self, shapes):
        assert shapes.Opacity(1) != shapes.Opacity(1.0)


class TestEnum:
    def test_unit_case(self, shapes):
        shape = shapes.parse_Shape(Value("Empty"))
        assert shape.kind is shapes.Shape.Kind.Empty
        assert shape.value is None
        assert shapes.export_Shape(shape) == Value("Empty")

    def test_payload_case(self, shapes):
        model = from_python({"Circle": "2.5"})
        shape = shapes.parse_Shape(model)
        assert shape.kind is shapes.Shape.Kind.Circle
        assert shape.value == shapes.Radius(2.5)
        assert shapes.export_Shape(shape) == model

    def test_unknown_case(self, shapes):
        with pytest.raises(UnknownEnumCaseError):
            shapes.parse_Shape(Value("Square"))
        with pytest.raises(UnknownEnumCaseError):
            shapes.parse_Shape(from_python({"Square": "1"}))

    def test_payload_case_needs_payload(self, shapes):
        with pytest.raises(UnknownEnumCaseError):
            shapes.parse_Shape(Value("Circle"))

    def test_invalid_shapes(self, shapes):
        with pytest.raises(ShapeError):
            shapes.parse_Shape(from_python({"Circle": "1", "Polygon": []}))
        with pytest.raises(ShapeError):
            shapes.parse_Shape(Array())

    def test_payload_error_location(self, shapes):
        with pytest.raises(ConstraintError) as excinfo:
            shapes.parse_Shape(from_python({"Circle": "-1"}))
        assert str(excinfo.value) == "Circle: Did not pass constraint: x > 0"

    def test_repr(self, shapes):
        assert repr(shapes.Shape(shapes.Shape.Kind.Empty)) == "shapes.Shape.Empty"


class TestConstrained:
    def test_valid(self, shapes):
        radius = shapes.parse_Radius(Value("3"))
        assert radius.get() == 3.0
        assert shapes.export_Radius(radius) == Value("3.0")

    @pytest.mark.parametrize(
        "text, constraint",
        [("0", "x > 0"), ("1001", "x <= 1000"), ("nan", "not math.isnan(x)")],
    )
    def test_first_failing_constraint(self, shapes, text, constraint):
        with pytest.raises(ConstraintError) as excinfo:
            shapes.parse_Radius(Value(text))
        assert excinfo.value.constraint == constraint

    def test_set_validates(self, shapes):
        radius = shapes.Radius(1.0)
        with pytest.raises(ConstraintError):
            radius.set(-1.0)
        assert radius.get() == 1.0

    def test_base_error(self, shapes):
        with pytest.raises(NumberConversionError) as excinfo:
            shapes.parse_Radius(Value("wide"))
        assert str(excinfo.value) == 'Unable to convert "wide" to a number'


def test_layer_round_trip(shapes):
    model = from_python(
        {
            "name": "top",
            "shapes": ["Empty", {"Polygon": [{"x": "1.0", "y": "2.0"}]}, {"Circle": "4.0"}],
            "visible": "false",
            "opacity": "1",
        }
    )
    layer = shapes.parse_Layer(model)
    assert layer.visible is False
    assert shapes.export_Layer(layer) == model


def test_default_expression_evaluated_per_instance(shapes):
    layer = shapes.Layer("top", shapes.Shapes())
    assert layer.visible is True
    assert shapes.export_Layer(layer) == from_python({"name": "top", "shapes": [], "visible": "true"})


def test_header_and_footer(shapes):
    assert shapes.UNIT_CIRCLE.value == shapes.Radius(1.0)


def test_registered_with_runtime(shapes):
    from data_model_to_code import runtime

    assert runtime.is_registered(shapes.Point)
    point = runtime.parse(shapes.Point, Map())
    assert runtime.export(shapes.Point, point) == Map({"x": Value("0.0"), "y": Value("0.0")})


def test_builtin_aliases(make_module):
    module = make_module(
        {"types": [{"name": "Flags", "type": "struct", "data": {"fields": [{"name": "on", "type": "bool"}, {"name": "count", "type": "int"}]}}]}
    )
    flags = module.parse_Flags(from_python({"on": True, "count": 3}))
    assert flags.on is True
    assert flags.count == 3

    with pytest.raises(IntegerConversionError) as excinfo:
        module.parse_Flags(from_python({"on": "true", "count": "three"}))
    assert str(excinfo.value) == 'count: Unable to convert "three" to an integer'


def test_indent_width(shapes_registry):
    source = ModelGenerator(shapes_registry, GeneratorConfig(indent=2, add_generation_comment=False)).get_source("shapes")
    assert "\n  def __init__(self, x: float = _runtime.MISSING" in source
    assert "\n    self.x = self.default_x() if x is _runtime.MISSING else x" in source
    ast.parse(source)


def test_namespace_override(make_module):
    module = make_module(
        {"namespace": ["a", "b"], "types": [{"name": "Empty", "type": "struct", "data": {}}]},
        namespace=["c"],
    )
    assert repr(module.Empty()) == "c.Empty(extra_fields=Map({}))"


def test_file_layout(shapes_registry):
    generator = ModelGenerator(shapes_registry, GeneratorConfig(add_generation_comment=False))
    source = generator.get_source("shapes")
    assert source.startswith('"""shapes data model (shapes)."""\n\nfrom __future__ import annotations\n')
    assert source.index("import math") < source.index("class Point:")
    assert source.index("class Point:") < source.index("def parse_Point") < source.index("def export_Point")
    assert source.index("def export_Point") < source.index("class Points:")
    assert source.rstrip().endswith("UNIT_CIRCLE = Shape(Shape.Kind.Circle, Radius(1.0))")
    assert "_runtime.register(Layer, parse_Layer, export_Layer)" in source

    header = generator.get_header("shapes")
    assert "def parse_Point(model: _runtime.SerializationModel) -> Point: ..." in header
    assert "import math" not in header
    assert "class Point:" in header


def test_generation_comment(shapes_registry):
    source = ModelGenerator(shapes_registry).get_source("shapes")
    assert source.startswith("# Generated by data_model_to_code v")


def test_structural_error_aborts_generation(make_module):
    with pytest.raises(FieldOrderError) as excinfo:
        make_module(
            {
                "types": [
                    {
                        "name": "Bad",
                        "type": "struct",
                        "data": {
                            "fields": [
                                {"name": "a", "type": "integer"},
                                {"name": "b", "type": "integer", "default": "optional"},
                                {"name": "c", "type": "integer"},
                            ]
                        },
                    }
                ]
            }
        )
    assert excinfo.value.path == "Bad.c"
