import logging
from collections.abc import Iterable

from tree_sitter import Parser

from mediator_navigator.config import NavigatorSettings
from mediator_navigator.core.ast import create_parser, first_declaration, parse_source
from mediator_navigator.models import HandlerLocation, SourceFile, TypeDeclaration

logger = logging.getLogger(__name__)


def is_handler_declaration(
    declaration: TypeDeclaration,
    request_type: str,
    handler_interface: str = "IRequestHandler",
) -> bool:
    """Class implementing ``handler_interface<request_type, ...>``.

    The first type argument is compared as trimmed source text, so
    ``Foo``, ``Ns.Foo`` and ``Foo<T>`` are three different requests.
    """
    if declaration.kind != "class":
        return False
    return any(
        base.generic
        and base.simple_name == handler_interface
        and len(base.type_arguments) >= 1
        and base.type_arguments[0] == request_type
        for base in declaration.base_types
    )


def find_handler_in_source(
    source: SourceFile,
    request_type: str,
    settings: NavigatorSettings | None = None,
    parser: Parser | None = None,
) -> HandlerLocation | None:
    settings = settings or NavigatorSettings()
    parsed = parse_source(source.text, parser)
    declaration = first_declaration(
        parsed, lambda candidate: is_handler_declaration(candidate, request_type, settings.handler_interface)
    )
    if declaration is None:
        return None
    return HandlerLocation(file_path=source.path, line=declaration.line)


def resolve_handler(
    request_type: str,
    files: Iterable[SourceFile],
    settings: NavigatorSettings | None = None,
) -> HandlerLocation | None:
    """Scan ``files`` in order and return the first handler for ``request_type``.

    ``files`` is consumed lazily; nothing past the first match is read. A file
    that fails to parse counts as a non-match.
    """
    if not request_type:
        raise ValueError("request_type must be a non-empty identifier.")

    settings = settings or NavigatorSettings()
    parser = create_parser()
    scanned = 0
    for source in files:
        scanned += 1
        try:
            location = find_handler_in_source(source, request_type, settings, parser)
        except ValueError as exc:
            logger.warning("Skipping %s: %s", source.path, exc)
            continue
        if location is not None:
            logger.debug("Found handler for %s after %d file(s)", request_type, scanned)
            return location
    logger.debug("No handler for %s in %d file(s)", request_type, scanned)
    return None
