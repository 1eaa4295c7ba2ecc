"""Error types for the desugaring pass."""

from sugarfree.utils.location import Location


class DesugarError(Exception):
    """Base class for desugaring failures.

    Carries the source location of the offending node and an optional
    remediation hint.
    """

    location: Location
    hint: str | None

    def __init__(self, message: str, location: Location, hint: str | None = None):
        super().__init__(message)
        self.message = message
        self.location = location
        self.hint = hint

    def format(self) -> str:
        """Render as `Error: ...` / `  at file:line:col` / optional `  Hint: ...`."""
        loc = self.location
        parts = [f"Error: {self.message}", f"  at {loc.file}:{loc.line}:{loc.column}"]
        if self.hint:
            parts.append(f"  Hint: {self.hint}")
        return "\n".join(parts)


class EmptyBlock(DesugarError):
    """Block expression with no statements."""

    def __init__(self, location: Location):
        super().__init__(
            "Empty block expression",
            location,
            "Block must contain at least one expression",
        )


class NonLetInBlock(DesugarError):
    """A statement other than the last one in a block is not a let binding."""

    def __init__(self, location: Location):
        super().__init__(
            "Non-let expression in block (except final expression)",
            location,
            "All expressions in a block except the last must be let bindings",
        )


class InvariantViolation(DesugarError):
    """Surface tree breaks an invariant an upstream pass should guarantee.

    Indicates a compiler bug (parser or case expansion), not a user error.
    """

    def __init__(self, message: str, location: Location, hint: str | None = None):
        super().__init__(
            message,
            location,
            hint or "This may indicate a parser bug or missing desugaring implementation",
        )
