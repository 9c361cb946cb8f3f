"""
Unit template module

Loads the per-kind source templates once and renders them from typed
contexts. A template that refers to a name its context does not define
is rejected when the set is loaded, not when a unit is rendered.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import ClassVar, Optional, Union

from jinja2 import (
    Environment, FileSystemLoader, StrictUndefined, meta,
    TemplateNotFound, TemplateSyntaxError, UndefinedError,
)

from .errors import TemplateError

TEMPLATE_DIR = Path(__file__).parent / 'templates'
TEMPLATE_SUFFIX = '.cc.j2'


@dataclass(frozen=True)
class InterfaceContext:
    template: ClassVar[str] = 'interface'
    name: str
    parent: Optional[str]
    callbacks: str          # method and attribute callbacks
    constructor_body: str


@dataclass(frozen=True)
class DictionaryContext:
    template: ClassVar[str] = 'dictionary'
    name: str
    conversions: str


@dataclass(frozen=True)
class GlobalFunctionContext:
    template: ClassVar[str] = 'global_function'
    name: str
    callbacks: str


@dataclass(frozen=True)
class BaseContext:
    template: ClassVar[str] = 'base'
    class_name: str
    file_name: str
    content: str
    global_function_entries: list[str] = field(default_factory=list)
    method_entries: list[str] = field(default_factory=list)
    prop_entries: list[str] = field(default_factory=list)
    wrapper_type_infos: list[str] = field(default_factory=list)


TemplateContext = Union[InterfaceContext, DictionaryContext, GlobalFunctionContext, BaseContext]

CONTEXT_TYPES = (BaseContext, InterfaceContext, DictionaryContext, GlobalFunctionContext)


class TemplateSet:
    """The base template plus one template per unit kind"""

    def __init__(self, template_dir: Optional[Union[str, Path]] = None):
        self.template_dir = Path(template_dir) if template_dir is not None else TEMPLATE_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._templates = {ctx.template: self._load(ctx) for ctx in CONTEXT_TYPES}

    def _load(self, context_type: type):
        """Load one template, checking its names against the context"""
        filename = context_type.template + TEMPLATE_SUFFIX
        try:
            source, _, _ = self.env.loader.get_source(self.env, filename)
            ast = self.env.parse(source, filename)
        except TemplateNotFound:
            raise TemplateError(filename, f'not found in {self.template_dir}')
        except TemplateSyntaxError as e:
            raise TemplateError(filename, f'line {e.lineno}: {e.message}')
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateError(filename, str(e))

        allowed = {f.name for f in fields(context_type)} | set(self.env.globals)
        unknown = meta.find_undeclared_variables(ast) - allowed
        if unknown:
            raise TemplateError(filename, 'undefined substitution points: ' + ', '.join(sorted(unknown)))

        return self.env.get_template(filename)

    def render(self, context: TemplateContext) -> str:
        """Render the template matching a context"""
        template = self._templates[context.template]
        values = {f.name: getattr(context, f.name) for f in fields(context)}
        try:
            return template.render(**values)
        except UndefinedError as e:
            raise TemplateError(template.name, str(e))
