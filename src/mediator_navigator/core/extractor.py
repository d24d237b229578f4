from tree_sitter import Parser

from mediator_navigator.config import NavigatorSettings
from mediator_navigator.core.ast import first_declaration, parse_source
from mediator_navigator.models import TypeDeclaration


def is_request_declaration(declaration: TypeDeclaration, request_interface: str = "IRequest") -> bool:
    """Public class/record with a base named ``request_interface``, generic or not.

    Qualified bases (``Ns.IRequest``) have no simple name and never match.
    """
    return declaration.is_public and any(base.simple_name == request_interface for base in declaration.base_types)


def extract_request_type(
    text: str,
    settings: NavigatorSettings | None = None,
    parser: Parser | None = None,
) -> str | None:
    """Return the name of the first request type declared in ``text``."""
    settings = settings or NavigatorSettings()
    parsed = parse_source(text, parser)
    declaration = first_declaration(
        parsed, lambda candidate: is_request_declaration(candidate, settings.request_interface)
    )
    return declaration.name if declaration else None
