"""Interactive REPL (Read-Eval-Print Loop) for the virtual file system.

The REPL creates a fresh file system and a shell over it, then enters
the classic loop:

    1. **Read**: display a prompt and read user input.
    2. **Eval**: pass the command to ``shell.execute()``.
    3. **Print**: display the result.
    4. **Loop**: repeat until the shell returns the exit sentinel.

The shell is fully testable (returns strings, no I/O); the REPL is the
thin I/O wrapper that connects it to ``stdin``/``stdout``.  The helpers
``build_prompt`` and ``format_banner`` are pure and testable.
"""

import readline

from virtual_fs import __version__
from virtual_fs.completer import Completer
from virtual_fs.env import DEFAULT_PROMPT, Environment, default_environment
from virtual_fs.fs.filesystem import FileSystem
from virtual_fs.logging import Logger
from virtual_fs.shell import Shell


def format_banner() -> str:
    """Return the greeting printed when the REPL starts."""
    return (
        f"virtual-fs v{__version__}: an in-memory file system.\n"
        "Type 'help' for commands, 'quit' to leave.  Nothing is saved."
    )


def build_prompt(env: Environment) -> str:
    """Build the prompt string from the ``PS1`` variable.

    Args:
        env: The session environment.

    Returns:
        The value of ``PS1``, or ``"> "`` if it is unset.

    """
    return env.get("PS1", DEFAULT_PROMPT) or DEFAULT_PROMPT


def run() -> None:
    """Run the interactive REPL until ``quit``, Ctrl+D or Ctrl+C."""
    logger = Logger()
    env = default_environment()
    shell = Shell(filesystem=FileSystem(logger=logger), env=env, logger=logger)

    # Wire up tab completion via readline.
    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner())  # noqa: T201

    try:
        while True:
            try:
                command = input(build_prompt(env))
            except EOFError:
                # Ctrl+D: graceful exit
                print()  # noqa: T201
                break

            result = shell.execute(command)
            if result == Shell.EXIT_SENTINEL:
                break
            if result:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        # Ctrl+C: graceful exit
        print("\nInterrupted.")  # noqa: T201
