"""
Return value module

Declares the native slot a call assigns to and the expression that hands
the slot back to the script engine.
"""

from dataclasses import dataclass

from .ir import TypeDescriptor, NamedType, NullableType, is_void
from .types import TypeConverter

PROMISE_TYPE = 'Promise'


@dataclass(frozen=True)
class ReturnValue:
    """Slot declaration and result expression of a generated call"""
    slot: str    # empty when the call produces nothing
    result: str

    @property
    def has_slot(self) -> bool:
        return bool(self.slot)


class ReturnValueSynthesizer:
    """Generates return slots and result encoding"""

    def __init__(self, type_conv: TypeConverter):
        self.type_conv = type_conv

    def synthesize(self, return_type: TypeDescriptor, owner: str,
                   is_constructor: bool = False) -> ReturnValue:
        """Get slot and result for a member of `owner`

        | return kind  | slot                              | result                         |
        | constructor  | Owner* return_value = nullptr;    | return_value->ToQuickJS()      |
        | void         | -                                 | JS_NULL                        |
        | Promise      | ScriptPromise return_value;       | return_value.ToQuickJS()       |
        | named type   | Name* return_value = nullptr;     | return_value->ToQuickJS()      |
        | other        | Converter<T>::ImplType ...;       | Converter<T>::ToValue(...)     |
        """
        if is_constructor:
            return ReturnValue(
                slot=f'{owner}* return_value = nullptr;',
                result='return_value->ToQuickJS()',
            )

        if is_void(return_type):
            return ReturnValue(slot='', result='JS_NULL')

        named = return_type
        while isinstance(named, NullableType):
            named = named.inner

        if isinstance(named, NamedType):
            if named.name == PROMISE_TYPE:
                return ReturnValue(
                    slot='ScriptPromise return_value;',
                    result='return_value.ToQuickJS()',
                )
            return ReturnValue(
                slot=f'{named.name}* return_value = nullptr;',
                result='return_value->ToQuickJS()',
            )

        return ReturnValue(
            slot=f'{self.type_conv.impl_type(return_type)} return_value;',
            result=self.type_conv.to_value(return_type, 'std::move(return_value)'),
        )
