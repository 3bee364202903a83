"""
Devlog document exceptions.

The document parser itself is tolerant and never raises on malformed prose;
these exceptions cover the few places where strict validation is required:
line-range tokens, the dialect pattern table, and document discovery.
"""

from typing import Any, Dict, Optional


class DevlogError(Exception):
    """Base exception for devlog processing errors."""
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class MalformedRangeError(DevlogError, ValueError):
    """
    Raised when a line-range token cannot be expanded.
    
    Attributes:
        token: The full token that was being parsed (e.g. "1-3,9-5")
        part: The comma-separated part that failed (e.g. "9-5")
    """
    
    def __init__(self, message: str, token: str, part: Optional[str] = None) -> None:
        super().__init__(message, context={"token": token, "part": part})
        self.token = token
        self.part = part


class DevlogGrammarError(DevlogError):
    """Raised when a dialect pattern fails to compile."""
    
    def __init__(
        self,
        message: str,
        pattern_name: Optional[str] = None,
        regex: Optional[str] = None
    ) -> None:
        super().__init__(message, context={"pattern_name": pattern_name, "regex": regex})
        self.pattern_name = pattern_name
        self.regex = regex


class DevlogNotFoundError(DevlogError):
    """Raised when no devlog document can be located for a command."""
    
    def __init__(self, message: str, searched: Optional[str] = None) -> None:
        super().__init__(message, context={"searched": searched})
        self.searched = searched
