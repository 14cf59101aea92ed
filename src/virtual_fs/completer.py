"""Context-aware tab completer for the virtual-fs shell.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)`` which analyses the input
context and returns a list of candidate strings.
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

from virtual_fs.fs.filesystem import Directory

if TYPE_CHECKING:
    from virtual_fs.shell import Shell

# Commands whose argument is a directory path.
_DIRECTORY_COMMANDS: frozenset[str] = frozenset(["cd"])


class Completer:
    """Context-aware tab completer for the virtual-fs shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance.

        Args:
            shell: The shell whose commands, file system and environment
                   are used to generate completion candidates.

        """
        self._shell = shell

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback: return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, …).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        words = line.lstrip().split()

        # No words yet, or still typing the first word → command completion
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return self._complete_commands(text)

        cmd = words[0]
        if cmd in _DIRECTORY_COMMANDS:
            return self._complete_directories(text)
        if cmd == "unset":
            return self._complete_env_vars(text)
        return []

    # -- private completers ------------------------------------------------

    def _complete_commands(self, text: str) -> list[str]:
        """Complete command names from the shell's dispatch table."""
        return [cmd for cmd in self._shell.command_names if cmd.startswith(text)]

    def _complete_directories(self, text: str) -> list[str]:
        """Complete directory paths, relative or absolute.

        Split ``"quz/fo"`` into the already-typed directory ``"quz/"``
        and the prefix ``"fo"``, resolve the directory without moving
        the working directory, and offer matching child directories
        with a trailing ``/``.
        """
        fs = self._shell.filesystem
        last_slash = text.rfind("/")
        directory = text[: last_slash + 1]
        prefix = text[last_slash + 1 :]

        try:
            base = fs.resolve(directory) if directory else fs.cwd
        except FileNotFoundError:
            return []

        names = {
            child.name
            for child in fs.children_of(base)
            if isinstance(child, Directory) and child.name.startswith(prefix)
        }
        return sorted(f"{directory}{name}/" for name in names)

    def _complete_env_vars(self, text: str) -> list[str]:
        """Complete environment variable names."""
        return sorted(key for key, _val in self._shell.env.items() if key.startswith(text))
