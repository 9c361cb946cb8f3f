"""
Dictionary binding generation module

Generates field-by-field conversion between a script object and the
native dictionary struct. Dictionaries carry values, not identity, so
no call dispatch is involved.
"""

from typing import TYPE_CHECKING

from .codegen import CodeGen

if TYPE_CHECKING:
    from .ir import DictionaryUnit, PropInfo
    from .types import TypeConverter


def member_var(prop: 'PropInfo') -> str:
    """Native struct member holding a property"""
    return f'{prop.name}_'


class DictionaryGenerator:
    """Generates dictionary conversion code"""

    def __init__(self, type_conv: 'TypeConverter'):
        self.type_conv = type_conv

    def generate(self, unit: 'DictionaryUnit', gen: CodeGen):
        """Generate both conversion directions for a dictionary"""
        self._gen_fill_impl(unit, gen)
        self._gen_to_quickjs(unit, gen)

    def _gen_fill_impl(self, unit: 'DictionaryUnit', gen: CodeGen):
        """Script object -> native struct"""
        exception_state = self.type_conv.exception_state
        header = (f'bool {unit.name}::FillImplWithJSValue(JSContext* ctx, JSValueConst value, '
                  f'ExceptionState& {exception_state}) {{')
        with gen.block(header):
            for prop in unit.props:
                self._gen_field_init(prop, gen)
            gen.line('return true;')
        gen.line()

    def _gen_field_init(self, prop: 'PropInfo', gen: CodeGen):
        """Generate one member initialization, skipping undefined fields"""
        value = f'v_{prop.name}'
        gen.line(f'JSValue {value} = JS_GetPropertyStr(ctx, value, "{prop.name}");')
        with gen.block(f'if (!JS_IsUndefined({value})) {{'):
            gen.line(f'{member_var(prop)} = {self.type_conv.from_value(prop.type, value)};')
        gen.line(f'JS_FreeValue(ctx, {value});')
        with gen.block(f'if ({self.type_conv.exception_state}.HasException()) {{'):
            gen.line('return false;')

    def _gen_to_quickjs(self, unit: 'DictionaryUnit', gen: CodeGen):
        """Native struct -> script object"""
        with gen.block(f'JSValue {unit.name}::toQuickJS(JSContext* ctx) const {{'):
            gen.line('JSValue object = JS_NewObject(ctx);')
            for prop in unit.props:
                to_value = self.type_conv.to_value(prop.type, member_var(prop))
                gen.line(f'JS_SetPropertyStr(ctx, object, "{prop.name}", {to_value});')
            gen.line('return object;')
        gen.line()
