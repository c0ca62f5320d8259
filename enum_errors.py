# enum_errors.py
# Exceptions raised while scanning enum declarations.
from typing import Optional


class EnumStringsError(Exception):
    """Base class for all enum-strings failures."""


class ScanError(EnumStringsError):
    """
    Raised by the scanner when the input does not contain a usable enum.
    Carries the source name and the 1-based line number (when known).
    """

    def __init__(self, message: str, source: Optional[str] = None, line: Optional[int] = None):
        self.message = message
        self.source = source
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        if self.source and self.line:
            return f"{self.source}:{self.line}: {self.message}"
        if self.source:
            return f"{self.source}: {self.message}"
        return self.message


class HeaderNotFound(ScanError):
    pass


class NoEnclosingNamespace(ScanError):
    pass


class EmptyEnumName(ScanError):
    pass


class TruncatedBody(ScanError):
    pass


class MalformedHeader(ScanError):
    """A namespace or enum header line that the header grammar does not accept."""
