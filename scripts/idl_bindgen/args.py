"""
Argument marshalling module

Turns one declared signature into a ladder of calls, one per accepted
argument count. Required arguments are converted up front; every
optional argument adds a tier that is converted only when the caller
actually passed it. The generated scope is an immediately invoked
lambda, so each tier leaves with a plain `return` after its call.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .codegen import CodeGen
from .ir import ParamInfo
from .types import TypeConverter

CONSTRUCTOR_NAME = 'constructor'
FACTORY_NAME = 'Create'


class Receiver(Enum):
    """What the native call is bound to"""
    INSTANCE = 'instance'        # the wrapped `this` object
    STATIC = 'static'            # the owning class or namespace
    CONSTRUCTOR = 'constructor'  # the owning class factory


@dataclass(frozen=True)
class CallContext:
    """Where a generated call goes"""
    receiver: Receiver
    owner: str   # native class or namespace
    member: str  # declared member name
    has_result: bool = False

    @property
    def call_name(self) -> str:
        """Native member name; `constructor` is the only rewritten name"""
        if self.member == CONSTRUCTOR_NAME:
            return FACTORY_NAME
        return self.member


@dataclass(frozen=True)
class ArityTier:
    """One rung of the dispatch ladder

    The call fires when argc <= max_argc, or unconditionally when
    max_argc is None (the last tier, which also absorbs extra arguments).
    """
    max_argc: Optional[int]
    params: tuple[ParamInfo, ...]


def plan_tiers(params: Sequence[ParamInfo]) -> list[ArityTier]:
    """Build the dispatch ladder for a parameter list

    Example (x, y required; z optional):
        argc <= 2 -> move(x, y)
        otherwise -> move(x, y, z)
    """
    required = sum(1 for p in params if p.required)
    tiers = []
    for count in range(required, len(params) + 1):
        max_argc = count if count < len(params) else None
        tiers.append(ArityTier(max_argc=max_argc, params=tuple(params[:count])))
    return tiers


def resolve_tier(params: Sequence[ParamInfo], argc: int) -> Optional[ArityTier]:
    """Tier whose call the generated code issues for argc, None if too few"""
    required = sum(1 for p in params if p.required)
    if argc < required:
        return None
    for tier in plan_tiers(params):
        if tier.max_argc is None or argc <= tier.max_argc:
            return tier
    return None


def arg_var(param: ParamInfo) -> str:
    return f'args_{param.name}'


class ArgumentMarshaller:
    """Generates the arity dispatch scope of one callable member"""

    def __init__(self, type_conv: TypeConverter):
        self.type_conv = type_conv

    def generate(self, params: Sequence[ParamInfo], call: CallContext, gen: CodeGen):
        """Generate the dispatch scope for a call"""
        converted = 0
        with gen.block('[&]() {', '}();'):
            for tier in plan_tiers(params):
                for idx in range(converted, len(tier.params)):
                    self._gen_conversion(params[idx], idx, gen)
                converted = len(tier.params)

                if tier.max_argc is None:
                    self._gen_call(call, tier.params, gen)
                else:
                    with gen.block(f'if (argc <= {tier.max_argc}) {{'):
                        self._gen_call(call, tier.params, gen)
                        gen.line('return;')

    def _gen_conversion(self, param: ParamInfo, idx: int, gen: CodeGen):
        """Convert argv[idx], leaving the scope if conversion failed"""
        value = self.type_conv.from_value(param.type, f'argv[{idx}]', optional=not param.required)
        gen.line(f'auto&& {arg_var(param)} = {value};')
        with gen.block(f'if ({self.type_conv.exception_state}.HasException()) {{'):
            gen.line('return;')

    def _gen_call(self, call: CallContext, params: Sequence[ParamInfo], gen: CodeGen):
        """Generate the native call for one tier"""
        args = [arg_var(p) for p in params] + [self.type_conv.exception_state]
        assign = 'return_value = ' if call.has_result else ''

        if call.receiver is Receiver.INSTANCE:
            gen.line(f'auto* self = toScriptWrappable<{call.owner}>(this_val);')
            gen.line(f'{assign}self->{call.call_name}({", ".join(args)});')
        else:
            args.insert(0, 'context')
            gen.line(f'{assign}{call.owner}::{call.call_name}({", ".join(args)});')
