import json

import pytest

from idl_bindgen.errors import DeclarationError
from idl_bindgen.ir import (
    IR,
    ArrayType,
    DictionaryUnit,
    FuncInfo,
    GlobalFunctionUnit,
    InterfaceUnit,
    NamedType,
    NullableType,
    ParamInfo,
    Primitive,
    PrimitiveKind,
    UnknownUnit,
    parse_type,
    validate_unit,
)


POINT = {
    "name": "point",
    "objects": [
        {
            "kind": "interface",
            "name": "Point",
            "parent": "Geometry",
            "constructor": {"args": [{"name": "x", "type": "int32", "required": False}]},
            "props": [{"name": "x", "type": "int32", "readonly": True}, {"name": "label", "type": "dom_string"}],
            "methods": [
                {
                    "name": "move",
                    "args": [
                        {"name": "x", "type": "int32"},
                        {"name": "y", "type": "int32"},
                        {"name": "z", "type": "int32", "required": False},
                    ],
                    "returnType": "void",
                }
            ],
        },
        {"kind": "dictionary", "name": "PointInit", "props": [{"name": "x", "type": "double"}]},
        {"kind": "function", "functions": [{"name": "distance", "args": [], "returnType": "double"}]},
        {"kind": "typedef", "name": "Coordinate"},
    ],
}


def test_parse_type_forms():
    assert parse_type("int32") == Primitive(PrimitiveKind.INT32)
    assert parse_type("function") == Primitive(PrimitiveKind.CALLBACK)
    assert parse_type("Element") == NamedType("Element")
    assert parse_type({"array": "double"}) == ArrayType(Primitive(PrimitiveKind.DOUBLE))
    assert parse_type({"nullable": {"array": "Node"}}) == NullableType(ArrayType(NamedType("Node")))
    assert parse_type(None) == Primitive(None)


@pytest.mark.parametrize("bad", ["", {"tuple": "int32"}, {"array": "int32", "nullable": "int32"}, 3])
def test_parse_type_rejects_malformed(bad):
    with pytest.raises(DeclarationError):
        parse_type(bad)


def test_from_dict_builds_every_unit_kind():
    ir = IR.from_dict(POINT)
    assert ir.class_name == "Point"
    interface, dictionary, functions, unknown = ir.units

    assert isinstance(interface, InterfaceUnit)
    assert interface.parent == "Geometry"
    assert [p.name for p in interface.props] == ["x", "label"]
    assert interface.props[0].readonly and not interface.props[1].readonly
    assert interface.methods[0].required_count == 2
    assert interface.methods[0].arity == 3
    assert interface.constructor.name == "constructor"

    assert isinstance(dictionary, DictionaryUnit)
    assert dictionary.props[0].type == Primitive(PrimitiveKind.DOUBLE)

    assert isinstance(functions, GlobalFunctionUnit)
    assert functions.name == "Point"
    assert functions.funcs[0].return_type == Primitive(PrimitiveKind.DOUBLE)

    assert isinstance(unknown, UnknownUnit)
    assert unknown.kind == "typedef"


def test_load_reads_json(tmp_path):
    path = tmp_path / "point.json"
    path.write_text(json.dumps(POINT), encoding="utf-8")
    assert IR.load(str(path)) == IR.from_dict(POINT)


def test_missing_name_is_rejected():
    with pytest.raises(DeclarationError, match="'name'"):
        IR.from_dict({"name": "x", "objects": [{"kind": "interface"}]})


def test_optional_before_required_is_rejected():
    func = FuncInfo(
        name="fill",
        params=[
            ParamInfo(name="color", type=Primitive(PrimitiveKind.DOM_STRING), required=False),
            ParamInfo(name="rule", type=Primitive(PrimitiveKind.DOM_STRING)),
        ],
    )
    with pytest.raises(DeclarationError, match="'rule' follows optional parameter 'color'"):
        func.validate()


def test_loader_validates_parameter_order():
    data = {
        "name": "canvas",
        "objects": [
            {
                "kind": "function",
                "functions": [
                    {"name": "fill", "args": [{"name": "a", "type": "any", "required": False}, {"name": "b", "type": "any"}]}
                ],
            }
        ],
    }
    with pytest.raises(DeclarationError):
        IR.from_dict(data)


def test_validate_unit_checks_the_constructor():
    unit = InterfaceUnit(
        name="Canvas",
        constructor=FuncInfo(
            name="constructor",
            params=[
                ParamInfo(name="width", type=Primitive(PrimitiveKind.INT32), required=False),
                ParamInfo(name="height", type=Primitive(PrimitiveKind.INT32)),
            ],
        ),
    )
    with pytest.raises(DeclarationError, match="'height' follows optional parameter 'width'"):
        validate_unit(unit)
    validate_unit(DictionaryUnit(name="Init"))
    validate_unit(UnknownUnit(kind="typedef"))
