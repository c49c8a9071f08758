"""Rich console for TuneLift's own screen output.

Only the startup banner and the update notice go through here. Progress
lines use core.output.log so they also reach the daily log file.
"""

from rich.console import Console

_console: Console | None = None


def get_console() -> Console:
    """Return the shared console, creating it on first use.

    Highlighting is off: version numbers and paths print in plain colours.
    """
    global _console
    if _console is None:
        _console = Console(highlight=False)
    return _console


def safe_print(message: str = "", style: str | None = None) -> None:
    """Print one line to the console, never interpreting Rich markup.

    Args:
        message: Text to print; square brackets are printed literally
        style: Optional Rich style for the whole line (e.g. "bold", "cyan")
    """
    get_console().print(message, style=style, markup=False, soft_wrap=True)
