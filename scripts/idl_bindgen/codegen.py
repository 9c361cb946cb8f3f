"""
Code generation utilities

Indented line builder shared by every generator that writes C++ binding
code (callbacks, dispatch scopes, dictionary conversions), plus the
class-name casing helpers used for wrapper names and setter names.
"""


class CodeGen:
    """Code generation helper with indentation support"""

    def __init__(self):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str: str = '  '  # 2 spaces

    def line(self, text: str = ''):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append('')

    def indent(self):
        """Increase indentation"""
        self._indent += 1

    def dedent(self):
        """Decrease indentation"""
        if self._indent > 0:
            self._indent -= 1

    def block(self, header: str, footer: str = '}'):
        """Context manager for code blocks"""
        return _BlockContext(self, header, footer)

    def output(self) -> str:
        """Get generated code as string"""
        return '\n'.join(self._lines)


class _BlockContext:
    """Context manager for indented code blocks"""

    def __init__(self, gen: CodeGen, header: str, footer: str):
        self._gen = gen
        self._header = header
        self._footer = footer

    def __enter__(self):
        self._gen.line(self._header)
        self._gen.indent()
        return self

    def __exit__(self, *args):
        self._gen.dedent()
        self._gen.line(self._footer)


def as_pascal_case(name: str) -> str:
    """Convert a declaration file stem to PascalCase

    Examples:
        text_node -> TextNode
        console -> Console
        mouseEvent -> MouseEvent
    """
    return ''.join(part[:1].upper() + part[1:] for part in name.split('_') if part)


def as_upper_snake_case(name: str) -> str:
    """Convert a PascalCase class name to UPPER_SNAKE_CASE

    Examples:
        TextNode -> TEXT_NODE
        Point -> POINT
    """
    result = ''
    for i, ch in enumerate(name):
        if ch.isupper() and i > 0 and not name[i - 1].isupper():
            result += '_'
        result += ch.upper()
    return result


def setter_name(prop_name: str) -> str:
    """Native setter method for a property: data -> setData"""
    return 'set' + prop_name[:1].upper() + prop_name[1:]
