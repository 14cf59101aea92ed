"""Environment variables: session configuration via key-value pairs.

The shell keeps a small environment of ``KEY=VALUE`` string pairs, in
the spirit of a Unix process environment.  The REPL reads its prompt
from ``PS1``; users inspect and change the rest with ``env``,
``export`` and ``unset``.

Both keys and values are strings.  Uppercase names are a convention,
not a rule.
"""

DEFAULT_PROMPT = "> "

class Environment:
    """A key-value store for environment variables.

    Each instance owns its variables: modifying one does not
    affect any other.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        """Create an environment, optionally pre-populated.

        Args:
            initial: Starting variables (copied, not referenced).

        """
        self._vars: dict[str, str] = dict(initial) if initial else {}

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for *key*, or *default* if not set."""
        return self._vars.get(key, default)

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value* (creates or overwrites)."""
        self._vars[key] = value

    def delete(self, key: str) -> None:
        """Remove *key* from the environment.

        Raises:
            KeyError: If *key* does not exist.

        """
        del self._vars[key]

    def items(self) -> list[tuple[str, str]]:
        """Return all (key, value) pairs, sorted by key."""
        return sorted(self._vars.items())

def default_environment() -> Environment:
    """Return the environment a fresh session starts with."""
    return Environment(initial={"PS1": DEFAULT_PROMPT})
