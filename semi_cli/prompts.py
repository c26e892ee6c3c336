"""Interactive yes/no questions."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from rich.prompt import Confirm

from .utils import console

AskBool = Callable[[str, bool], bool]


def ask_bool(message: str, default: bool = False) -> bool:
    """Ask a yes/no question on the shared console."""
    return Confirm.ask(message, default=default, console=console)


def confirm_delete(directory: Path, ask: AskBool = ask_bool) -> bool:
    """Warn that *directory* is not empty and ask for permission to delete it."""
    return ask(
        f'The directory "{directory}" already exists. Do you want to delete its content?',
        False,
    )
