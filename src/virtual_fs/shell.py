"""The shell: command interpreter for the virtual file system.

The shell reads a command string, splits it into a command name and
arguments, dispatches to the matching handler, and returns a string
result.  Every handler is a thin adapter over one ``FileSystem``
operation.

Design choices:
    - **Returns strings, not prints.**  This keeps the shell fully
      testable and separates concerns (the REPL or the web UI decides
      how to display output).
    - **Command dispatch via a dict.**  Adding a new command means
      writing a method and adding one dict entry.
    - **Errors never end the session.**  Core errors come back as a
      single ``Error: ...`` line and the caller keeps prompting.
"""

from collections.abc import Callable, Sequence
from typing import TypeAlias

from virtual_fs.env import Environment, default_environment
from virtual_fs.fs.filesystem import FileSystem, ListingEntry
from virtual_fs.logging import Logger, LogLevel

# Type alias for a command handler: takes a list of args, returns output.
_Handler: TypeAlias = Callable[[list[str]], str]

# Spaces between tab-aligned columns in ``ls`` output.
_COLUMN_PADDING = 4

_LISTING_HEADER = ("TYPE", "SIZE", "NAME")


def format_table(rows: Sequence[Sequence[str]], *, padding: int = _COLUMN_PADDING) -> str:
    """Align *rows* into columns separated by at least *padding* spaces.

    Every column except the last is left-justified to its widest cell;
    the last column is written as-is, so lines carry no trailing
    whitespace.

    Args:
        rows: The table rows, all with the same number of cells.
        padding: Minimum gap between columns.

    Returns:
        The rendered table, one line per row.

    """
    if not rows:
        return ""
    widths = [max(len(row[col]) for row in rows) for col in range(len(rows[0]) - 1)]
    lines: list[str] = []
    for row in rows:
        cells = [cell.ljust(width + padding) for cell, width in zip(row, widths, strict=False)]
        cells.append(row[-1])
        lines.append("".join(cells))
    return "\n".join(lines)


def format_listing(entries: Sequence[ListingEntry]) -> str:
    """Render listing entries under a ``TYPE SIZE NAME`` header."""
    rows = [_LISTING_HEADER]
    rows.extend((str(e.kind), e.size_label, e.name) for e in entries)
    return format_table(rows)


class Shell:
    """Command interpreter bound to one file system for a session."""

    EXIT_SENTINEL = "__EXIT__"

    def __init__(
        self,
        *,
        filesystem: FileSystem,
        env: Environment | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create a shell over *filesystem*.

        Args:
            filesystem: The tree every command operates on.
            env: Session configuration; defaults to ``default_environment()``.
            logger: Audit log shown by the ``log`` command.

        """
        self._fs = filesystem
        self._env = env if env is not None else default_environment()
        self._logger = logger
        self._history: list[str] = []

        # Command dispatch table: maps command names to handler methods.
        self._commands: dict[str, _Handler] = {
            "help": self._cmd_help,
            "touch": self._cmd_touch,
            "mkdir": self._cmd_mkdir,
            "ls": self._cmd_ls,
            "pwd": self._cmd_pwd,
            "cd": self._cmd_cd,
            "quit": self._cmd_quit,
            "exit": self._cmd_quit,
            "log": self._cmd_log,
            "history": self._cmd_history,
            "env": self._cmd_env,
            "export": self._cmd_export,
            "unset": self._cmd_unset,
        }

    @property
    def filesystem(self) -> FileSystem:
        """Return the file system this shell operates on."""
        return self._fs

    @property
    def env(self) -> Environment:
        """Return the session environment."""
        return self._env

    @property
    def command_names(self) -> list[str]:
        """Return the sorted names of every built-in command."""
        return sorted(self._commands)

    def execute(self, command: str) -> str:
        """Parse and execute a single command line.

        Args:
            command: The raw command string (e.g. ``"cd /quz/foo"``).

        Returns:
            The command output, ``""`` for silent success, an error
            line, or ``EXIT_SENTINEL`` when the session should end.

        """
        parts = command.split()
        if not parts:
            return ""
        self._history.append(command.strip())

        name, args = parts[0], parts[1:]
        handler = self._commands.get(name)
        if handler is None:
            self._log(LogLevel.WARNING, f"Unknown command: {name}")
            return f"unknown command: {name}"

        try:
            return handler(args)
        except (FileNotFoundError, ValueError) as e:
            return f"Error: {e}"

    # -- Command handlers ------------------------------------------------

    def _cmd_help(self, _args: list[str]) -> str:
        """List available commands."""
        return "Available commands: " + ", ".join(self.command_names)

    def _cmd_touch(self, args: list[str]) -> str:
        """Create an empty file in the working directory."""
        if not args:
            return "Usage: touch <name>"
        self._fs.create_file(args[0], b"")
        return ""

    def _cmd_mkdir(self, args: list[str]) -> str:
        """Create a directory in the working directory."""
        if not args:
            return "Usage: mkdir <name>"
        self._fs.create_dir(args[0])
        return ""

    def _cmd_ls(self, args: list[str]) -> str:
        """List the working directory, recursively with ``-r``."""
        recursive = "-r" in args
        return format_listing(self._fs.list_dir(recursive=recursive))

    def _cmd_pwd(self, _args: list[str]) -> str:
        """Print the working directory."""
        return self._fs.current_dir()

    def _cmd_cd(self, args: list[str]) -> str:
        """Change the working directory."""
        if not args:
            return "Usage: cd <path>"
        self._fs.change_dir(args[0])
        return ""

    def _cmd_quit(self, _args: list[str]) -> str:
        """Signal the caller to end the session."""
        self._log(LogLevel.INFO, "Session ended")
        return self.EXIT_SENTINEL

    def _cmd_log(self, args: list[str]) -> str:
        """Show audit log entries, optionally from a minimum level up."""
        if self._logger is None:
            return "No log entries."
        min_level: LogLevel | None = None
        if args:
            try:
                min_level = LogLevel[args[0].upper()]
            except KeyError:
                levels = ", ".join(level.name.lower() for level in LogLevel)
                return f"Usage: log [{levels}]"
        entries = self._logger.filter(min_level=min_level)
        return "\n".join(str(e) for e in entries) if entries else "No log entries."

    def _cmd_history(self, _args: list[str]) -> str:
        """Show command history."""
        if not self._history:
            return "No history."
        lines = [f"  {i + 1}  {cmd}" for i, cmd in enumerate(self._history)]
        return "\n".join(lines)

    def _cmd_env(self, _args: list[str]) -> str:
        """List all environment variables."""
        items = self._env.items()
        return "\n".join(f"{k}={v}" for k, v in items) if items else "No variables set."

    def _cmd_export(self, args: list[str]) -> str:
        """Set an environment variable (KEY=VALUE)."""
        if not args or "=" not in args[0]:
            return "Usage: export KEY=VALUE"
        key, value = " ".join(args).split("=", 1)
        self._env.set(key, value)
        return ""

    def _cmd_unset(self, args: list[str]) -> str:
        """Remove an environment variable."""
        if not args:
            return "Usage: unset KEY"
        try:
            self._env.delete(args[0])
        except KeyError:
            return f"Error: variable not set: {args[0]}"
        return ""

    def _log(self, level: LogLevel, message: str) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source="shell")
