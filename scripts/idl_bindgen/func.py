"""
Function binding generation module

Generates QuickJS callbacks for methods, attribute accessors,
constructors and global functions.
"""

from typing import TYPE_CHECKING

from .args import ArgumentMarshaller, CallContext, Receiver
from .codegen import CodeGen, setter_name
from .ir import FuncInfo, ParamInfo, PropInfo, VOID
from .returns import ReturnValueSynthesizer

if TYPE_CHECKING:
    from .types import TypeConverter

CALLBACK_PARAMS = 'JSContext* ctx, JSValueConst this_val, int argc, JSValueConst* argv'


def getter_callback(prop: PropInfo) -> str:
    return f'{prop.name}AttributeGetCallback'


def setter_callback(prop: PropInfo) -> str:
    return f'{prop.name}AttributeSetCallback'


class FuncGenerator:
    """Generates callback bodies for callable members"""

    def __init__(self, type_conv: 'TypeConverter'):
        self.type_conv = type_conv
        self.marshaller = ArgumentMarshaller(type_conv)
        self.returns = ReturnValueSynthesizer(type_conv)

    def generate(self, func: FuncInfo, owner: str, receiver: Receiver, gen: CodeGen,
                 callback_name: str = ''):
        """Generate a complete callback for a function"""
        with gen.block(f'static JSValue {callback_name or func.name}({CALLBACK_PARAMS}) {{'):
            self._gen_body(func, owner, receiver, gen)
        gen.line()

    def generate_body(self, func: FuncInfo, owner: str, receiver: Receiver) -> str:
        """Generate only the statements of a callback, unindented"""
        gen = CodeGen()
        self._gen_body(func, owner, receiver, gen)
        return gen.output()

    def generate_getter(self, prop: PropInfo, owner: str, gen: CodeGen):
        """Generate the attribute getter: a no-argument instance call"""
        getter = FuncInfo(name=prop.name, params=[], return_type=prop.type)
        self.generate(getter, owner, Receiver.INSTANCE, gen, getter_callback(prop))

    def generate_setter(self, prop: PropInfo, owner: str, gen: CodeGen):
        """Generate the attribute setter: set<Name>(value) on the instance"""
        setter = FuncInfo(
            name=setter_name(prop.name),
            params=[ParamInfo(name='value', type=prop.type)],
            return_type=VOID,
        )
        self.generate(setter, owner, Receiver.INSTANCE, gen, setter_callback(prop))

    def _gen_body(self, func: FuncInfo, owner: str, receiver: Receiver, gen: CodeGen):
        exception_state = self.type_conv.exception_state
        ret = self.returns.synthesize(func.return_type, owner, receiver is Receiver.CONSTRUCTOR)
        call = CallContext(receiver=receiver, owner=owner, member=func.name, has_result=ret.has_slot)

        self._gen_arity_check(func, gen)

        gen.line(f'ExceptionState {exception_state};')
        if ret.has_slot:
            gen.line(ret.slot)
        gen.line('ExecutingContext* context = ExecutingContext::From(ctx);')
        gen.line()

        self.marshaller.generate(func.params, call, gen)
        gen.line()

        # Failures recorded while converting or calling win over the result
        with gen.block(f'if ({exception_state}.HasException()) {{'):
            gen.line(f'return {exception_state}.ToQuickJS();')
        gen.line(f'return {ret.result};')

    def _gen_arity_check(self, func: FuncInfo, gen: CodeGen):
        required = func.required_count
        if required == 0:
            return
        with gen.block(f'if (argc < {required}) {{'):
            gen.line(f'return JS_ThrowTypeError(ctx, "Failed to execute \'{func.name}\' : '
                     f'{required} argument required, but %d present.", argc);')
        gen.line()
