from idl_bindgen.codegen import CodeGen
from idl_bindgen.dictionary import DictionaryGenerator
from idl_bindgen.ir import DictionaryUnit, NamedType, Primitive, PrimitiveKind, PropInfo
from idl_bindgen.types import TypeConverter


def _generate(unit: DictionaryUnit) -> str:
    gen = CodeGen()
    DictionaryGenerator(TypeConverter()).generate(unit, gen)
    return gen.output()


def test_dictionary_converts_each_property():
    unit = DictionaryUnit(
        name="EventInit",
        props=[
            PropInfo(name="bubbles", type=Primitive(PrimitiveKind.BOOLEAN)),
            PropInfo(name="target", type=NamedType("EventTarget")),
        ],
    )
    text = _generate(unit)
    assert "bool EventInit::FillImplWithJSValue(JSContext* ctx, JSValueConst value, ExceptionState& exception_state) {" in text
    assert 'JSValue v_bubbles = JS_GetPropertyStr(ctx, value, "bubbles");' in text
    assert "bubbles_ = Converter<IDLBoolean>::FromValue(ctx, v_bubbles, exception_state);" in text
    assert "target_ = Converter<EventTarget>::FromValue(ctx, v_target, exception_state);" in text
    assert 'JS_SetPropertyStr(ctx, object, "target", Converter<EventTarget>::ToValue(ctx, target_));' in text
    assert text.index("bubbles_ =") < text.index("target_ =")


def test_dictionary_has_no_call_dispatch():
    unit = DictionaryUnit(name="EventInit", props=[PropInfo(name="composed", type=Primitive(PrimitiveKind.BOOLEAN))])
    text = _generate(unit)
    assert "argc" not in text
    assert "[&]()" not in text
