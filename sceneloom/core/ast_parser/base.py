"""Base interface for language-specific declaration parsers.

Defines the Strategy pattern base class that all language parsers implement.
Shared reading and error bookkeeping lives here; field extraction is delegated.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List

import tree_sitter

from .models import DeclarationResult, FieldDeclaration, ParseError

logger = logging.getLogger(__name__)


class BaseLanguageParser(ABC):
    """Abstract base for language-specific tree-sitter parsers.

    Subclasses implement:
    - get_language(): returns language name string
    - get_tree_sitter_language(): returns tree-sitter Language object
    - extract_fields(): walks AST tree and extracts FieldDeclaration objects
    """

    def __init__(
        self,
        serializable_modifiers: Iterable[str] = ("public",),
        serialization_attribute: str = "SerializeField",
    ):
        self.serializable_modifiers = frozenset(serializable_modifiers)
        self.serialization_attribute = serialization_attribute

    @abstractmethod
    def get_language(self) -> str:
        """Return the language identifier (e.g., 'csharp')."""
        ...

    @abstractmethod
    def get_tree_sitter_language(self) -> tree_sitter.Language:
        """Return the tree-sitter Language object for this language."""
        ...

    @abstractmethod
    def extract_fields(self, tree: tree_sitter.Tree, source: bytes) -> List[FieldDeclaration]:
        """Extract field declarations from a parsed tree-sitter AST.

        Args:
            tree: Parsed tree-sitter tree
            source: Raw source bytes

        Returns:
            List of FieldDeclaration objects in source order
        """
        ...

    def is_serializable(self, modifiers: List[str], attributes: List[str]) -> bool:
        """A field is externally assignable when it carries a qualifying
        modifier or the serialization marker attribute."""
        if any(m in self.serializable_modifiers for m in modifiers):
            return True
        return any(self.serialization_attribute in a for a in attributes)

    def parse_file(self, file_path: str) -> DeclarationResult:
        """Parse a script file into a DeclarationResult.

        Read failures are returned as an error-severity ParseError rather
        than raised, so one bad script never stops a run.

        Args:
            file_path: Path to the source file

        Returns:
            DeclarationResult with extracted fields and any errors
        """
        try:
            with open(file_path, "r", encoding="utf-8", errors="replace") as f:
                source_text = f.read()
        except OSError as e:
            logger.warning(f"Failed to read script {file_path}: {e}")
            return DeclarationResult(
                file_path=file_path,
                language=self.get_language(),
                fields=[],
                line_count=0,
                errors=[ParseError(file_path=file_path, line=0, message=str(e), severity="error")],
            )

        return self.parse_source(source_text, file_path)

    def parse_source(self, source_text: str, file_path: str) -> DeclarationResult:
        """Parse source code string into a DeclarationResult.

        Args:
            source_text: Source code as string
            file_path: File path (for metadata)

        Returns:
            DeclarationResult with extracted fields and any errors
        """
        errors: List[ParseError] = []
        source_bytes = source_text.encode("utf-8")
        line_count = source_text.count("\n") + (1 if source_text and not source_text.endswith("\n") else 0)

        parser = tree_sitter.Parser(self.get_tree_sitter_language())
        tree = parser.parse(source_bytes)

        # tree-sitter recovers from syntax errors; keep what it found
        if tree.root_node.has_error:
            errors.append(
                ParseError(
                    file_path=file_path,
                    line=0,
                    message="Tree-sitter reported parse errors in file",
                    severity="warning",
                )
            )

        try:
            fields = self.extract_fields(tree, source_bytes)
        except Exception as e:
            logger.error(f"Failed to extract fields from {file_path}: {e}")
            fields = []
            errors.append(ParseError(file_path=file_path, line=0, message=f"Field extraction failed: {e}", severity="error"))

        return DeclarationResult(
            file_path=file_path,
            language=self.get_language(),
            fields=fields,
            line_count=line_count,
            errors=errors,
        )
