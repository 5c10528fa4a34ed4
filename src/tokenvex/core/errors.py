"""
Error types for tokenvex input loading, reference lookup, and token trees.

Resolution-level problems (unresolved aliases, circular references,
expression warnings) are not exceptions: they degrade to sentinel values
or fall back to raw values so a single bad token never blocks an export.
The classes below are the hard failures surfaced to callers.
"""

from dataclasses import dataclass
from pathlib import Path


class TokenVexError(Exception):
    """Base exception for all tokenvex errors."""

    def __init__(self, message: str, context: "ErrorContext | None" = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class AmbiguousReferenceError(TokenVexError):
    """
    Raised when a short variable path matches variables in several collections.

    Examples:
    - 'base' exists in both "Spacing" and "Sizing"
    - 'primary' exists in "Brand" and "Semantic"
    """

    def __init__(self, path: str, collection_names: list[str]):
        self.path = path
        self.collection_names = collection_names
        names = ", ".join(collection_names)
        super().__init__(
            f"Ambiguous reference '{path}' matches variables in multiple collections: "
            f"{names}. Use the full 'Collection/name' path."
        )


class TokenTreeConflictError(TokenVexError):
    """
    Raised when a token path is both a leaf and a group.

    Examples:
    - "color/primary" inserted after "color/primary/hover"
    - "spacing" inserted after "spacing/sm"
    """

    pass


class InvalidGlobPatternError(TokenVexError):
    """
    Raised when a name format rule pattern cannot be compiled.

    Examples:
    - Empty or whitespace-only pattern
    - Pattern whose translated regex fails to compile
    """

    pass


class InputError(TokenVexError):
    """
    Raised when variable snapshots or token documents are malformed.

    Examples:
    - Snapshot file is not valid JSON
    - Variable record missing its collection id
    - Document without a "collections" object
    """

    pass


class SettingsError(TokenVexError):
    """Raised when a settings file cannot be loaded or validated."""

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error.

    Attributes:
        file: Path to the input file being processed
        token_path: Optional slash-delimited token path
    """

    file: Path
    token_path: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "tokens.json (token color/primary)"
        """
        if self.token_path:
            return f"{self.file} (token {self.token_path})"
        return str(self.file)
