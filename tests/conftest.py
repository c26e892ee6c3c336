"""Shared pytest fixtures for the semi-cli test suite.

Provides reusable fixtures for:
- Temporary working directories and configs
- Mock subprocess helpers
- A recording package installer
- Scripted answers for interactive questions
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from semi_cli.config import Config
from semi_cli.installer import PackageInstaller


# ---------------------------------------------------------------------------
# Paths & Config
# ---------------------------------------------------------------------------

@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Empty directory standing in for the user's working directory."""
    cwd = tmp_path / "workspace"
    cwd.mkdir()
    yield cwd


@pytest.fixture
def config(workspace: Path) -> Config:
    """Config rooted at the temporary workspace, using npm."""
    return Config(cwd=workspace, package_manager="npm")


# ---------------------------------------------------------------------------
# Subprocesses
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


@pytest.fixture
def fake_installer() -> MagicMock:
    """PackageInstaller double whose calls are recorded but never executed."""
    installer = MagicMock(spec=PackageInstaller)
    installer.install = AsyncMock(return_value=[])
    installer.reinstall = AsyncMock(return_value=[])
    return installer


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

@pytest.fixture
def scripted_answers() -> Callable[..., Callable[[str, bool], bool]]:
    """Build an ``ask`` function that answers by matching question keywords.

    Usage:
        ask = scripted_answers(express=True, mongoose=False)

    Questions with no matching keyword get their default answer.  Quoted
    paths are ignored while matching.  Every question asked is recorded on
    ``ask.questions``.
    """
    def factory(**answers: bool) -> Callable[[str, bool], bool]:
        questions: list[str] = []

        def ask(message: str, default: bool = False) -> bool:
            questions.append(message)
            text = message.split('"')[-1]
            for keyword, answer in answers.items():
                if keyword in text:
                    return answer
            return default

        ask.questions = questions  # type: ignore[attr-defined]
        return ask

    return factory
