"""
Type conversion module

Maps declared types onto the C++ Converter<> strategies of the bridge
and builds the conversion expressions used in generated bodies.
"""

from .ir import (
    TypeDescriptor, Primitive, PrimitiveKind,
    ArrayType, NullableType, NamedType,
)

# Converter type per builtin kind; anything missing converts as IDLAny
PRIMITIVE_CONVERTERS = {
    PrimitiveKind.INT32: 'IDLInt32',
    PrimitiveKind.INT64: 'IDLInt64',
    PrimitiveKind.DOUBLE: 'IDLDouble',
    PrimitiveKind.BOOLEAN: 'IDLBoolean',
    PrimitiveKind.DOM_STRING: 'IDLDOMString',
    PrimitiveKind.OBJECT: 'IDLObject',
    PrimitiveKind.CALLBACK: 'IDLCallback',
    PrimitiveKind.ANY: 'IDLAny',
}

ANY_CONVERTER = 'IDLAny'


def generate_type_converter(desc: TypeDescriptor) -> str:
    """Get the converter type for a declared type

    Examples:
        Primitive(INT32)                      -> IDLInt32
        ArrayType(Primitive(DOM_STRING))      -> IDLSequence<IDLDOMString>
        NullableType(ArrayType(INT32))        -> IDLNullable<IDLSequence<IDLInt32>>
        NamedType('Element')                  -> Element
    """
    if isinstance(desc, NullableType):
        inner = desc.inner
        while isinstance(inner, NullableType):
            inner = inner.inner
        return f'IDLNullable<{generate_type_converter(inner)}>'

    elif isinstance(desc, ArrayType):
        return f'IDLSequence<{generate_type_converter(desc.element)}>'

    elif isinstance(desc, NamedType):
        return desc.name

    elif isinstance(desc, Primitive):
        return PRIMITIVE_CONVERTERS.get(desc.kind, ANY_CONVERTER)

    return ANY_CONVERTER


class TypeConverter:
    """Builds Converter<> expressions between script values and native values"""

    def __init__(self, ctx: str = 'ctx', exception_state: str = 'exception_state'):
        self.ctx = ctx
        self.exception_state = exception_state

    def converter(self, desc: TypeDescriptor, optional: bool = False) -> str:
        """Get `Converter<...>` for a type, wrapped in IDLOptional when asked"""
        type_str = generate_type_converter(desc)
        if optional:
            type_str = f'IDLOptional<{type_str}>'
        return f'Converter<{type_str}>'

    def from_value(self, desc: TypeDescriptor, value: str, optional: bool = False) -> str:
        """Generate code to convert a script value to a native value"""
        return f'{self.converter(desc, optional)}::FromValue({self.ctx}, {value}, {self.exception_state})'

    def to_value(self, desc: TypeDescriptor, expr: str) -> str:
        """Generate code to convert a native value to a script value"""
        return f'{self.converter(desc)}::ToValue({self.ctx}, {expr})'

    def impl_type(self, desc: TypeDescriptor) -> str:
        """Native storage type for a converted value"""
        return f'{self.converter(desc)}::ImplType'
