"""
idl_bindgen - QuickJS binding generation from interface declarations

Turns a declaration model (interfaces, dictionaries, global functions)
into C++ binding sources: argument conversion, arity dispatch, return
value encoding and member registration tables, assembled through
per-kind source templates.
"""

from .ir import (
    IR, PrimitiveKind, Primitive, ArrayType, NullableType, NamedType,
    ParamInfo, FuncInfo, PropInfo,
    InterfaceUnit, DictionaryUnit, GlobalFunctionUnit, UnknownUnit,
    parse_type, validate_unit,
)
from .errors import BindgenError, DeclarationError, TemplateError
from .types import TypeConverter, generate_type_converter
from .args import ArgumentMarshaller, ArityTier, CallContext, Receiver, plan_tiers, resolve_tier
from .returns import ReturnValue, ReturnValueSynthesizer
from .func import FuncGenerator
from .dictionary import DictionaryGenerator
from .templates import TemplateSet
from .generator import Generator, GenerationReport, UnitFragments, output_name

__all__ = [
    'IR', 'PrimitiveKind', 'Primitive', 'ArrayType', 'NullableType', 'NamedType',
    'ParamInfo', 'FuncInfo', 'PropInfo',
    'InterfaceUnit', 'DictionaryUnit', 'GlobalFunctionUnit', 'UnknownUnit',
    'parse_type', 'validate_unit',
    'BindgenError', 'DeclarationError', 'TemplateError',
    'TypeConverter', 'generate_type_converter',
    'ArgumentMarshaller', 'ArityTier', 'CallContext', 'Receiver', 'plan_tiers', 'resolve_tier',
    'ReturnValue', 'ReturnValueSynthesizer',
    'FuncGenerator',
    'DictionaryGenerator',
    'TemplateSet',
    'Generator', 'GenerationReport', 'UnitFragments', 'output_name',
]
