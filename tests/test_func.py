from idl_bindgen.args import Receiver
from idl_bindgen.codegen import CodeGen
from idl_bindgen.func import FuncGenerator
from idl_bindgen.ir import FuncInfo, ParamInfo, Primitive, PrimitiveKind, PropInfo, VOID
from idl_bindgen.types import TypeConverter


INT32 = Primitive(PrimitiveKind.INT32)
DOM_STRING = Primitive(PrimitiveKind.DOM_STRING)


def _func_gen() -> FuncGenerator:
    return FuncGenerator(TypeConverter())


def _move() -> FuncInfo:
    return FuncInfo(
        name="move",
        params=[
            ParamInfo(name="x", type=INT32),
            ParamInfo(name="y", type=INT32),
            ParamInfo(name="z", type=INT32, required=False),
        ],
        return_type=VOID,
    )


def test_parse_body():
    parse = FuncInfo(name="parse", params=[ParamInfo(name="input", type=DOM_STRING)], return_type=DOM_STRING)
    body = _func_gen().generate_body(parse, "Parser", Receiver.STATIC)
    assert body == "\n".join(
        [
            "if (argc < 1) {",
            "  return JS_ThrowTypeError(ctx, \"Failed to execute 'parse' : 1 argument required, but %d present.\", argc);",
            "}",
            "",
            "ExceptionState exception_state;",
            "Converter<IDLDOMString>::ImplType return_value;",
            "ExecutingContext* context = ExecutingContext::From(ctx);",
            "",
            "[&]() {",
            "  auto&& args_input = Converter<IDLDOMString>::FromValue(ctx, argv[0], exception_state);",
            "  if (exception_state.HasException()) {",
            "    return;",
            "  }",
            "  return_value = Parser::parse(context, args_input, exception_state);",
            "}();",
            "",
            "if (exception_state.HasException()) {",
            "  return exception_state.ToQuickJS();",
            "}",
            "return Converter<IDLDOMString>::ToValue(ctx, std::move(return_value));",
        ]
    )


def test_arity_check_precedes_conversion():
    body = _func_gen().generate_body(_move(), "Point", Receiver.INSTANCE)
    assert "if (argc < 2) {" in body
    assert "2 argument required, but %d present." in body
    assert body.index("if (argc < 2)") < body.index("ExceptionState exception_state;")
    assert body.index("ExceptionState exception_state;") < body.index("FromValue")


def test_void_member_returns_null_after_error_check():
    body = _func_gen().generate_body(_move(), "Point", Receiver.INSTANCE)
    assert "return_value" not in body
    assert body.endswith("return JS_NULL;")
    assert body.index("return exception_state.ToQuickJS();") < body.index("return JS_NULL;")


def test_no_required_arguments_skips_arity_check():
    func = FuncInfo(name="reset", params=[ParamInfo(name="hard", type=INT32, required=False)])
    body = _func_gen().generate_body(func, "Point", Receiver.INSTANCE)
    assert "argc <" not in body
    assert body.startswith("ExceptionState exception_state;")


def test_constructor_body_calls_create():
    ctor = FuncInfo(name="constructor", params=[ParamInfo(name="data", type=DOM_STRING, required=False)])
    body = _func_gen().generate_body(ctor, "TextNode", Receiver.CONSTRUCTOR)
    assert "TextNode* return_value = nullptr;" in body
    assert "return_value = TextNode::Create(context, exception_state);" in body
    assert "return_value = TextNode::Create(context, args_data, exception_state);" in body
    assert body.endswith("return return_value->ToQuickJS();")


def test_generate_wraps_body_in_callback():
    gen = CodeGen()
    _func_gen().generate(_move(), "Point", Receiver.INSTANCE, gen)
    text = gen.output()
    assert text.startswith("static JSValue move(JSContext* ctx, JSValueConst this_val, int argc, JSValueConst* argv) {")
    assert "\n  if (argc < 2) {\n" in text
    assert text.endswith("}\n")


def test_accessors():
    gen = CodeGen()
    func_gen = _func_gen()
    prop = PropInfo(name="data", type=DOM_STRING)
    func_gen.generate_getter(prop, "TextNode", gen)
    func_gen.generate_setter(prop, "TextNode", gen)
    text = gen.output()
    assert "static JSValue dataAttributeGetCallback(" in text
    assert "return_value = self->data(exception_state);" in text
    assert "static JSValue dataAttributeSetCallback(" in text
    assert "self->setData(args_value, exception_state);" in text
    assert "Failed to execute 'setData' : 1 argument required" in text
