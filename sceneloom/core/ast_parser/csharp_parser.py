"""C# declaration parser using tree-sitter.

Walks the tree-sitter AST to extract every field declaration in a C#
source file, with its modifiers and attributes, and flags the ones that
a serialized MonoBehaviour instance may carry as properties.
"""

from typing import Iterator, List, Optional

import tree_sitter
import tree_sitter_c_sharp

from .base import BaseLanguageParser
from .models import FieldDeclaration

_CSHARP_LANGUAGE = tree_sitter.Language(tree_sitter_c_sharp.language())

_TYPE_DECLARATIONS = frozenset({
    "class_declaration",
    "struct_declaration",
    "record_declaration",
    "interface_declaration",
})


class CSharpParser(BaseLanguageParser):
    """tree-sitter based C# field parser.

    Extracts:
    - Field declarations at any nesting depth -> FieldDeclaration per declarator
    - Modifier keywords (public, private, static, readonly, ...)
    - Attribute names ([SerializeField], [Range(0, 1)], [HideInInspector])

    Property, event and local declarations are ignored.
    """

    def get_language(self) -> str:
        return "csharp"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _CSHARP_LANGUAGE

    def extract_fields(self, tree: tree_sitter.Tree, source: bytes) -> List[FieldDeclaration]:
        """Extract field declarations from the C# AST."""
        fields: List[FieldDeclaration] = []
        for node in self._iter_nodes(tree.root_node):
            if node.type == "field_declaration":
                fields.extend(self._extract_field(node, source))
        return fields

    # =========================================================================
    # Member extractors
    # =========================================================================

    def _extract_field(self, node: tree_sitter.Node, source: bytes) -> List[FieldDeclaration]:
        """Extract one FieldDeclaration per declarator of a field declaration."""
        declaration = self._get_child_by_type(node, "variable_declaration")
        if declaration is None:
            return []

        type_node = declaration.child_by_field_name("type")
        type_name = self._text(type_node, source) if type_node else ""
        modifiers = self._extract_modifiers(node, source)
        attributes = self._extract_attributes(node, source)
        serializable = self.is_serializable(modifiers, attributes)
        parent_name = self._enclosing_type_name(node, source)

        fields = []
        for child in declaration.children:
            if child.type != "variable_declarator":
                continue
            name = self._declarator_name(child, source)
            if not name:
                continue
            fields.append(FieldDeclaration(
                name=name,
                type_name=type_name,
                line=child.start_point.row + 1,
                parent_name=parent_name,
                modifiers=modifiers,
                attributes=attributes,
                serializable=serializable,
            ))
        return fields

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _iter_nodes(root: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
        """Depth-first pre-order walk over every node below root."""
        stack = [root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    @staticmethod
    def _text(node: tree_sitter.Node, source: bytes) -> str:
        return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    @staticmethod
    def _get_child_by_type(node: tree_sitter.Node, type_name: str) -> Optional[tree_sitter.Node]:
        for child in node.children:
            if child.type == type_name:
                return child
        return None

    @classmethod
    def _declarator_name(cls, node: tree_sitter.Node, source: bytes) -> Optional[str]:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            name_node = cls._get_child_by_type(node, "identifier")
        if name_node is None:
            return None
        return cls._text(name_node, source)

    @classmethod
    def _enclosing_type_name(cls, node: tree_sitter.Node, source: bytes) -> str:
        parent = node.parent
        while parent is not None:
            if parent.type in _TYPE_DECLARATIONS:
                name_node = parent.child_by_field_name("name")
                return cls._text(name_node, source) if name_node else ""
            parent = parent.parent
        return ""

    @classmethod
    def _extract_attributes(cls, node: tree_sitter.Node, source: bytes) -> List[str]:
        """Extract attribute names ([SerializeField, Range(0, 1)] -> two names)."""
        attributes = []
        for child in node.children:
            if child.type != "attribute_list":
                continue
            for attr in child.children:
                if attr.type != "attribute":
                    continue
                name_node = attr.child_by_field_name("name")
                text = cls._text(name_node if name_node else attr, source).strip()
                if text:
                    attributes.append(text.split("(")[0].strip())
        return attributes

    @classmethod
    def _extract_modifiers(cls, node: tree_sitter.Node, source: bytes) -> List[str]:
        """Extract modifier keywords (public, static, readonly, etc.)."""
        modifiers = []
        for child in node.children:
            if child.type == "modifier":
                modifiers.append(cls._text(child, source).strip())
        return modifiers
