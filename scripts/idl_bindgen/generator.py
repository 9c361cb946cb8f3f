"""
Main generator module

Orchestrates all components to generate complete QuickJS binding sources.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from .args import Receiver
from .codegen import CodeGen, as_upper_snake_case
from .dictionary import DictionaryGenerator
from .errors import BindgenError
from .func import FuncGenerator, getter_callback, setter_callback
from .ir import IR, Unit, InterfaceUnit, DictionaryUnit, GlobalFunctionUnit, validate_unit
from .templates import (
    TemplateSet, BaseContext, InterfaceContext,
    DictionaryContext, GlobalFunctionContext,
)
from .types import TypeConverter

ILLEGAL_CONSTRUCTOR = 'return JS_ThrowTypeError(ctx, "Illegal constructor");'


@dataclass(frozen=True)
class UnitFragments:
    """Text and registration entries contributed by one or more units"""
    class_name: str = ''  # wrapper owning the Install entry points
    content: str = ''
    global_function_entries: tuple[str, ...] = ()
    method_entries: tuple[str, ...] = ()
    prop_entries: tuple[str, ...] = ()
    wrapper_type_infos: tuple[str, ...] = ()

    def merge(self, other: 'UnitFragments') -> 'UnitFragments':
        """Append another unit's fragments, keeping declaration order"""
        return UnitFragments(
            class_name=self.class_name or other.class_name,
            content='\n'.join(text for text in (self.content, other.content) if text),
            global_function_entries=self.global_function_entries + other.global_function_entries,
            method_entries=self.method_entries + other.method_entries,
            prop_entries=self.prop_entries + other.prop_entries,
            wrapper_type_infos=self.wrapper_type_infos + other.wrapper_type_infos,
        )


@dataclass
class GenerationReport:
    """Outcome of generating several declaration files"""
    sources: dict[str, str] = field(default_factory=dict)
    failures: dict[str, BindgenError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


def output_name(ir: IR) -> str:
    """Source file name for a declaration file: text_node -> qjs_text_node.cc"""
    return f'qjs_{ir.name}.cc'


class Generator:
    """Main binding generator"""

    def __init__(self, template_dir: Optional[Union[str, Path]] = None):
        self.templates = TemplateSet(template_dir)
        self.type_conv = TypeConverter()
        self.func_gen = FuncGenerator(self.type_conv)
        self.dict_gen = DictionaryGenerator(self.type_conv)
        self._ignores: set[str] = set()
        self._composers: dict[str, Callable[[Unit], UnitFragments]] = {
            InterfaceUnit.kind: self._compose_interface,
            DictionaryUnit.kind: self._compose_dictionary,
            GlobalFunctionUnit.kind: self._compose_global_functions,
        }

    def ignore(self, *names: str):
        """Add units to skip, by declared name"""
        self._ignores.update(names)

    def generate_all(self, irs: Iterable[IR]) -> GenerationReport:
        """Generate every declaration file; a failing unit is reported and left out of its file"""
        print('=== Generating QuickJS bindings:')
        report = GenerationReport()
        for ir in irs:
            print(f'  {ir.name} => {output_name(ir)}')
            try:
                source, failures = self._generate(ir)
            except BindgenError as e:
                print(f'  >> error: {ir.name}: {e}')
                report.failures[ir.name] = e
                continue
            report.sources[ir.name] = source
            report.failures.update(failures)
        return report

    def generate(self, ir: IR) -> str:
        """Generate the binding source of one declaration file, leaving out units that fail"""
        source, _ = self._generate(ir)
        return source

    def _generate(self, ir: IR) -> tuple[str, dict[str, BindgenError]]:
        fragments = UnitFragments()
        failures: dict[str, BindgenError] = {}
        for unit in ir.units:
            if unit.name in self._ignores:
                continue
            if unit.kind not in self._composers:
                print(f"  >> warning: skipping unknown declaration kind '{unit.kind}' ({unit.name})...")
            try:
                validate_unit(unit)
                fragments = fragments.merge(self.compose_unit(unit))
            except BindgenError as e:
                print(f'  >> error: {ir.name}: {unit.name}: {e}')
                failures[f'{ir.name}/{unit.name}'] = e

        source = self.templates.render(BaseContext(
            class_name=fragments.class_name or ir.class_name,
            file_name=ir.name,
            content=fragments.content,
            global_function_entries=list(fragments.global_function_entries),
            method_entries=list(fragments.method_entries),
            prop_entries=list(fragments.prop_entries),
            wrapper_type_infos=list(fragments.wrapper_type_infos),
        ))
        return source, failures

    def compose_unit(self, unit: Unit) -> UnitFragments:
        """Generate one unit; kinds without a composer contribute nothing"""
        composer = self._composers.get(unit.kind)
        if composer is None:
            return UnitFragments()
        return composer(unit)

    def _compose_interface(self, unit: InterfaceUnit) -> UnitFragments:
        gen = CodeGen()

        # Attribute accessors
        prop_entries = []
        for prop in unit.props:
            self.func_gen.generate_getter(prop, unit.name, gen)
            if prop.readonly:
                setter = 'nullptr'
            else:
                self.func_gen.generate_setter(prop, unit.name, gen)
                setter = setter_callback(prop)
            prop_entries.append(f'{{"{prop.name}", {getter_callback(prop)}, {setter}}}')

        # Prototype methods
        method_entries = []
        for method in unit.methods:
            self.func_gen.generate(method, unit.name, Receiver.INSTANCE, gen)
            method_entries.append(f'{{"{method.name}", {method.name}, {method.arity}}}')

        if unit.constructor is not None:
            constructor_body = self.func_gen.generate_body(unit.constructor, unit.name, Receiver.CONSTRUCTOR)
        else:
            constructor_body = ILLEGAL_CONSTRUCTOR

        content = self.templates.render(InterfaceContext(
            name=unit.name,
            parent=unit.parent,
            callbacks=gen.output(),
            constructor_body=constructor_body,
        ))
        return UnitFragments(
            class_name=unit.name,
            content=content,
            method_entries=tuple(method_entries),
            prop_entries=tuple(prop_entries),
            wrapper_type_infos=(self._wrapper_type_info(unit),),
        )

    def _wrapper_type_info(self, unit: InterfaceUnit) -> str:
        """Type metadata linking to the parent's record and the constructor"""
        parent = f'{unit.parent}::GetStaticWrapperTypeInfo()' if unit.parent else 'nullptr'
        class_id = f'JS_CLASS_{as_upper_snake_case(unit.name)}'
        return (f'const WrapperTypeInfo QJS{unit.name}::wrapper_type_info_ '
                f'{{{class_id}, "{unit.name}", {parent}, QJS{unit.name}::ConstructorCallback}};\n'
                f'const WrapperTypeInfo& {unit.name}::wrapper_type_info_ = QJS{unit.name}::wrapper_type_info_;')

    def _compose_dictionary(self, unit: DictionaryUnit) -> UnitFragments:
        gen = CodeGen()
        self.dict_gen.generate(unit, gen)
        content = self.templates.render(DictionaryContext(name=unit.name, conversions=gen.output()))
        return UnitFragments(content=content)

    def _compose_global_functions(self, unit: GlobalFunctionUnit) -> UnitFragments:
        gen = CodeGen()
        entries = []
        for func in unit.funcs:
            self.func_gen.generate(func, unit.name, Receiver.STATIC, gen)
            entries.append(f'{{"{func.name}", {func.name}, {func.arity}}}')
        content = self.templates.render(GlobalFunctionContext(name=unit.name, callbacks=gen.output()))
        return UnitFragments(content=content, global_function_entries=tuple(entries))
