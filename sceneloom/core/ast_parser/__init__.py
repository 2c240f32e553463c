"""SceneLoom AST Parser: tree-sitter based declaration scanning.

Public API:
    parse_file(path) → DeclarationResult
    parse_source(source, file_path, language) → DeclarationResult
    detect_language(file_path) → str | None
"""

from typing import Iterable

from .models import DeclarationResult, FieldDeclaration, ParseError
from .utils import detect_language, get_parser, is_supported_file

__all__ = [
    "parse_file",
    "parse_source",
    "detect_language",
    "is_supported_file",
    "DeclarationResult",
    "FieldDeclaration",
    "ParseError",
]


def _resolve_language(file_path: str, language: str | None) -> str:
    if language is None:
        language = detect_language(file_path)
    if language is None:
        raise ValueError(f"Cannot detect script language for {file_path}")
    return language


def parse_file(
    file_path: str,
    language: str | None = None,
    serializable_modifiers: Iterable[str] = ("public",),
    serialization_attribute: str = "SerializeField",
) -> DeclarationResult:
    """Scan a script file for its field declarations.

    Args:
        file_path: Path to the source file
        language: Language identifier. If None, detected from file_path.
        serializable_modifiers: Modifiers that make a field assignable
        serialization_attribute: Attribute name that forces a field assignable

    Returns:
        DeclarationResult containing extracted fields

    Raises:
        ValueError: If the language is not supported
    """
    parser = get_parser(
        _resolve_language(file_path, language), serializable_modifiers, serialization_attribute
    )
    return parser.parse_file(file_path)


def parse_source(
    source_text: str,
    file_path: str,
    language: str | None = None,
    serializable_modifiers: Iterable[str] = ("public",),
    serialization_attribute: str = "SerializeField",
) -> DeclarationResult:
    """Scan source code string for its field declarations.

    Args:
        source_text: Source code as string
        file_path: File path (for metadata)
        language: Language identifier. If None, detected from file_path.

    Returns:
        DeclarationResult containing extracted fields
    """
    parser = get_parser(
        _resolve_language(file_path, language), serializable_modifiers, serialization_attribute
    )
    return parser.parse_source(source_text, file_path)
