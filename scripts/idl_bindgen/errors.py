"""
Generation error module

Exceptions raised while turning a declaration model into binding source.
Failures of the generated code itself (argument count, value conversion)
are never raised here; they are emitted as C++ for the script engine.
"""


class BindgenError(Exception):
    """Base class for generation-time failures"""


class DeclarationError(BindgenError):
    """Malformed declaration model"""


class TemplateError(BindgenError):
    """Missing, unreadable or inconsistent unit template"""

    def __init__(self, name: str, message: str):
        super().__init__(f'template {name}: {message}')
        self.name = name
