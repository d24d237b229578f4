from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import cast

from tree_sitter import Node, Parser, Tree
from tree_sitter_language_pack import SupportedLanguage, get_parser

from mediator_navigator.core.languages import CSHARP, normalize_language
from mediator_navigator.models import BaseTypeRef, Position, TypeDeclaration

_DECLARATION_KINDS = {
    "class_declaration": "class",
    "record_declaration": "record",
    "record_struct_declaration": "record",
}

# Older grammars call the record base list ``record_base``.
_BASE_LIST_TYPES = frozenset({"base_list", "record_base"})

_PRIMARY_CONSTRUCTOR_BASE = "primary_constructor_base_type"


@dataclass(frozen=True)
class ParsedSource:
    tree: Tree
    source_bytes: bytes

    @property
    def root(self) -> Node:
        return self.tree.root_node


def create_parser(language: str = CSHARP) -> Parser:
    return get_parser(cast(SupportedLanguage, normalize_language(language)))


def parse_source(text: str, parser: Parser | None = None) -> ParsedSource:
    """Parse C# text. Malformed input still yields a tree with ERROR nodes."""
    source_bytes = text.encode("utf-8")
    tree = (parser or create_parser()).parse(source_bytes)
    return ParsedSource(tree=tree, source_bytes=source_bytes)


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield ``root`` and all its descendants in document (pre-)order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _named_children(node: Node) -> list[Node]:
    return [child for child in node.named_children if child.type != "comment"]


def _base_list(node: Node) -> Node | None:
    return next((child for child in node.children if child.type in _BASE_LIST_TYPES), None)


def _base_type_ref(node: Node, source_bytes: bytes) -> BaseTypeRef:
    if node.type == _PRIMARY_CONSTRUCTOR_BASE:
        inner = node.child_by_field_name("type") or next(iter(_named_children(node)), None)
        if inner is not None:
            node = inner

    text = node_text(node, source_bytes).strip()
    if node.type == "identifier":
        return BaseTypeRef(simple_name=text, text=text)
    if node.type == "generic_name":
        identifier = next((child for child in node.children if child.type == "identifier"), None)
        argument_list = next((child for child in node.children if child.type == "type_argument_list"), None)
        arguments = (
            [node_text(arg, source_bytes).strip() for arg in _named_children(argument_list)]
            if argument_list is not None
            else []
        )
        return BaseTypeRef(
            simple_name=node_text(identifier, source_bytes) if identifier is not None else None,
            text=text,
            generic=True,
            type_arguments=arguments,
        )
    return BaseTypeRef(simple_name=None, text=text)


def base_types(node: Node, source_bytes: bytes) -> list[BaseTypeRef]:
    base_list = _base_list(node)
    if base_list is None:
        return []
    return [_base_type_ref(entry, source_bytes) for entry in _named_children(base_list)]


def to_type_declaration(node: Node, source_bytes: bytes) -> TypeDeclaration | None:
    """Convert a class/record declaration node; ``None`` for any other node."""
    kind = _DECLARATION_KINDS.get(node.type)
    if kind is None:
        return None
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None
    return TypeDeclaration(
        name=node_text(name_node, source_bytes),
        kind=kind,  # type: ignore[arg-type]
        modifiers=[node_text(child, source_bytes) for child in node.children if child.type == "modifier"],
        base_types=base_types(node, source_bytes),
        start=Position(row=node.start_point[0], column=node.start_point[1]),
    )


def iter_type_declarations(parsed: ParsedSource) -> Iterator[TypeDeclaration]:
    for node in iter_nodes(parsed.root):
        declaration = to_type_declaration(node, parsed.source_bytes)
        if declaration is not None:
            yield declaration


def first_declaration(
    parsed: ParsedSource, predicate: Callable[[TypeDeclaration], bool]
) -> TypeDeclaration | None:
    """Return the first declaration in document order satisfying ``predicate``."""
    return next((declaration for declaration in iter_type_declarations(parsed) if predicate(declaration)), None)


def extract_type_declarations(text: str, parser: Parser | None = None) -> list[TypeDeclaration]:
    return list(iter_type_declarations(parse_source(text, parser)))
