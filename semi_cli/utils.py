"""Shared utility functions for semi-cli.

Provides async command execution, JSON output, name slugification and the
Rich console helpers every command reports through.
"""

from __future__ import annotations

import asyncio
import json
import os
import re
from pathlib import Path
from typing import Any

from rich.console import Console

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 120,
    capture: bool = True,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously.

    Args:
        cmd: Program followed by its arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
        capture: Whether to capture stdout/stderr (if ``False`` they inherit
            the parent's streams, which is how package-manager output reaches
            the user).
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  If *capture* is ``False``
        the stdout/stderr strings will be empty.  A timeout yields ``-1``.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    stdout_pipe = asyncio.subprocess.PIPE if capture else None
    stderr_pipe = asyncio.subprocess.PIPE if capture else None

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=stdout_pipe,
        stderr=stderr_pipe,
        cwd=str(cwd) if cwd else None,
        env=merged_env,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def slugify(name: str) -> str:
    """Convert a project name into a lower-case, hyphen-separated slug.

    Anything that is not a letter or digit is dropped (strict mode), words are
    joined with single hyphens.

    Examples::

        slugify("My Semi App") -> "my-semi-app"
        slugify("  Hello, World!  ") -> "hello-world"
    """
    result = re.sub(r"[^a-z0-9\s_-]", "", name.strip().lower())
    result = re.sub(r"[\s_-]+", "-", result)
    return result.strip("-")


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------


def format_json(data: dict[str, Any]) -> str:
    """Serialise *data* as 2-space JSON with a trailing newline."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


async def save_json(data: dict[str, Any], path: str | Path) -> Path:
    """Save data as pretty-printed JSON.

    Parent directories are created automatically and the write runs in a
    worker thread.
    """
    file_path = Path(path)
    content = format_json(data)

    def _write() -> None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")

    await asyncio.to_thread(_write)
    return file_path


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step(message: str) -> None:
    """Print a dim cyan progress line."""
    console.print(f"[cyan]>[/cyan] {message}")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
