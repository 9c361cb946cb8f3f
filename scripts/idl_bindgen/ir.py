"""
IR (Intermediate Representation) module

Declaration model of one interface definition file (interfaces,
dictionaries and global function sets) and a loader for the JSON
form written by the IDL analyzer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union
import json

from .codegen import as_pascal_case
from .errors import DeclarationError


class PrimitiveKind(Enum):
    """Builtin argument kinds, keyed by their analyzer keyword"""
    INT32 = 'int32'
    INT64 = 'int64'
    DOUBLE = 'double'
    BOOLEAN = 'boolean'
    DOM_STRING = 'dom_string'
    OBJECT = 'object'
    CALLBACK = 'function'
    ANY = 'any'
    VOID = 'void'


@dataclass(frozen=True)
class Primitive:
    """Builtin type; a kind of None means the analyzer did not recognize it"""
    kind: Optional[PrimitiveKind] = PrimitiveKind.ANY


@dataclass(frozen=True)
class ArrayType:
    element: 'TypeDescriptor'


@dataclass(frozen=True)
class NullableType:
    inner: 'TypeDescriptor'


@dataclass(frozen=True)
class NamedType:
    """Reference to another declared interface or dictionary"""
    name: str


TypeDescriptor = Union[Primitive, ArrayType, NullableType, NamedType]

VOID = Primitive(PrimitiveKind.VOID)
ANY = Primitive(PrimitiveKind.ANY)


def is_void(desc: TypeDescriptor) -> bool:
    return isinstance(desc, Primitive) and desc.kind is PrimitiveKind.VOID


@dataclass
class ParamInfo:
    """Function parameter information"""
    name: str
    type: TypeDescriptor
    required: bool = True


@dataclass
class FuncInfo:
    """Function declaration information"""
    name: str
    params: list[ParamInfo] = field(default_factory=list)
    return_type: TypeDescriptor = VOID

    @property
    def required_count(self) -> int:
        """Number of parameters the caller must supply"""
        return sum(1 for p in self.params if p.required)

    @property
    def arity(self) -> int:
        """Declared parameter count, as registered with the engine"""
        return len(self.params)

    def validate(self):
        """Reject an optional parameter declared before a required one"""
        optional: Optional[ParamInfo] = None
        for param in self.params:
            if not param.required:
                optional = param
            elif optional is not None:
                raise DeclarationError(
                    f"'{self.name}': required parameter '{param.name}' "
                    f"follows optional parameter '{optional.name}'")


@dataclass
class PropInfo:
    """Attribute information"""
    name: str
    readonly: bool = False
    type: TypeDescriptor = ANY


@dataclass
class InterfaceUnit:
    """Script-visible class with methods and attributes"""
    kind: ClassVar[str] = 'interface'
    name: str
    parent: Optional[str] = None
    methods: list[FuncInfo] = field(default_factory=list)
    props: list[PropInfo] = field(default_factory=list)
    constructor: Optional[FuncInfo] = None

    def functions(self) -> list[FuncInfo]:
        funcs = list(self.methods)
        if self.constructor is not None:
            funcs.append(self.constructor)
        return funcs


@dataclass
class DictionaryUnit:
    """Structured value converted field by field"""
    kind: ClassVar[str] = 'dictionary'
    name: str
    props: list[PropInfo] = field(default_factory=list)

    def functions(self) -> list[FuncInfo]:
        return []


@dataclass
class GlobalFunctionUnit:
    """Free functions installed on the global object"""
    kind: ClassVar[str] = 'function'
    name: str  # owning namespace of the native implementations
    funcs: list[FuncInfo] = field(default_factory=list)

    def functions(self) -> list[FuncInfo]:
        return list(self.funcs)


@dataclass
class UnknownUnit:
    """Declaration of a kind the generator has no template for"""
    kind: str
    name: str = ''

    def functions(self) -> list[FuncInfo]:
        return []


Unit = Union[InterfaceUnit, DictionaryUnit, GlobalFunctionUnit, UnknownUnit]


def validate_unit(unit: Unit):
    """Check every function a unit declares"""
    for func in unit.functions():
        func.validate()


_PRIMITIVES = {kind.value: kind for kind in PrimitiveKind}


@dataclass
class IR:
    """Intermediate representation of one declaration file"""
    name: str  # file stem, e.g. 'text_node'
    units: list[Unit] = field(default_factory=list)

    @property
    def class_name(self) -> str:
        return as_pascal_case(self.name)

    @classmethod
    def load(cls, json_path: str) -> 'IR':
        """Load IR from a JSON file"""
        with open(json_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls._from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'IR':
        """Create IR from a dictionary (e.g., from the analyzer)"""
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> 'IR':
        """Internal: Parse dict into IR"""
        name = _require(data, 'name', 'declaration file')
        class_name = as_pascal_case(name)
        units = []

        for decl in data.get('objects', []):
            kind = decl.get('kind', '')

            if kind == 'interface':
                units.append(cls._parse_interface(decl))

            elif kind == 'dictionary':
                units.append(DictionaryUnit(
                    name=_require(decl, 'name', 'dictionary'),
                    props=[cls._parse_prop(p) for p in decl.get('props', [])],
                ))

            elif kind == 'function':
                units.append(GlobalFunctionUnit(
                    name=decl.get('name', class_name),
                    funcs=[cls._parse_func(f) for f in decl.get('functions', [])],
                ))

            else:
                units.append(UnknownUnit(kind=str(kind), name=decl.get('name', '')))

        return cls(name=name, units=units)

    @classmethod
    def _parse_interface(cls, decl: dict) -> InterfaceUnit:
        """Parse interface declaration"""
        construct = decl.get('constructor')
        return InterfaceUnit(
            name=_require(decl, 'name', 'interface'),
            parent=decl.get('parent'),
            methods=[cls._parse_func(m) for m in decl.get('methods', [])],
            props=[cls._parse_prop(p) for p in decl.get('props', [])],
            constructor=cls._parse_func(dict(construct, name='constructor')) if construct is not None else None,
        )

    @staticmethod
    def _parse_func(decl: dict) -> FuncInfo:
        """Parse function declaration"""
        name = _require(decl, 'name', 'function')
        params = []
        for p in decl.get('args', []):
            params.append(ParamInfo(
                name=_require(p, 'name', f"argument of '{name}'"),
                type=parse_type(p.get('type')),
                required=p.get('required', True),
            ))
        func = FuncInfo(
            name=name,
            params=params,
            return_type=parse_type(decl.get('returnType', 'void')),
        )
        func.validate()
        return func

    @staticmethod
    def _parse_prop(decl: dict) -> PropInfo:
        """Parse attribute declaration"""
        return PropInfo(
            name=_require(decl, 'name', 'property'),
            readonly=decl.get('readonly', False),
            type=parse_type(decl.get('type', 'any')),
        )


def parse_type(data) -> TypeDescriptor:
    """Parse a type descriptor

    Examples:
        'int32'                      -> Primitive(INT32)
        'Element'                    -> NamedType('Element')
        {'array': 'double'}          -> ArrayType(Primitive(DOUBLE))
        {'nullable': {'array': 'x'}} -> NullableType(ArrayType(NamedType('x')))
        None                         -> Primitive(None)
    """
    if data is None:
        return Primitive(None)
    if isinstance(data, str):
        if not data:
            raise DeclarationError('empty type name')
        if data in _PRIMITIVES:
            return Primitive(_PRIMITIVES[data])
        return NamedType(data)
    if isinstance(data, dict) and len(data) == 1:
        if 'array' in data:
            return ArrayType(parse_type(data['array']))
        if 'nullable' in data:
            return NullableType(parse_type(data['nullable']))
    raise DeclarationError(f'unrecognized type descriptor: {data!r}')


def _require(decl: dict, key: str, what: str):
    if key not in decl:
        raise DeclarationError(f"{what} is missing '{key}'")
    return decl[key]
