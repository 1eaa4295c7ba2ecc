"""Source locations for error reporting."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """Source code location: file, 1-based line and column, byte offset."""

    file: str
    line: int
    column: int
    offset: int = 0

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


# Used only when a malformed node carries no location of its own.
UNKNOWN_LOCATION = Location("<unknown>", 0, 0)
