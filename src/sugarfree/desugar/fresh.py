"""Fresh binder names for hygienic rewrites."""

from __future__ import annotations


class FreshNameGenerator:
    """Monotonic counter producing names like `$composed0`, `$loop1`.

    One instance per desugaring run; not safe to share between threads.
    Generated names start with a sigil that cannot begin a user
    identifier, so they never capture or shadow user bindings.
    """

    def __init__(self, sigil: str = "$", default_prefix: str = "tmp") -> None:
        self._sigil = sigil
        self._default_prefix = default_prefix
        self._counter = 0

    def fresh(self, prefix: str | None = None) -> str:
        """Return a new unique name built from `prefix` and the counter."""
        name = f"{self._sigil}{prefix or self._default_prefix}{self._counter}"
        self._counter += 1
        return name

    next = fresh

    def reset(self) -> None:
        """Restart numbering from zero."""
        self._counter = 0

    @property
    def counter(self) -> int:
        return self._counter
