"""Package-manager invocation.

Wraps ``npm install`` / ``yarn add`` so the generator and the ``reinstall``
command never build package-manager command lines by hand.  Output of the
child process is streamed straight to the terminal.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from .config import Config, PackageManager
from .errors import InstallError, ScaffoldError
from .utils import print_step, run_command


def build_install_args(
    packages: str | list[str],
    dev: bool = False,
    manager: PackageManager = "npm",
) -> list[str]:
    """Return the argument vector (without the program) for an install.

    ``packages`` may be a space separated string such as ``"express cors"``.
    """
    if isinstance(packages, str):
        packages = packages.split()
    args = ["add" if manager == "yarn" else "install", *packages]
    if dev:
        args.append("-D")
    return args


class PackageInstaller:
    """Runs the configured package manager inside a project directory."""

    def __init__(self, config: Config) -> None:
        self.config = config

    def _manager(self, force_yarn: bool) -> PackageManager:
        return "yarn" if force_yarn else self.config.package_manager

    async def _run(self, cmd: list[str], directory: Path) -> None:
        command = " ".join(cmd)
        try:
            returncode, _, stderr = await run_command(
                cmd,
                cwd=directory,
                timeout=self.config.install_timeout,
                capture=False,
            )
        except FileNotFoundError as exc:
            raise InstallError(f"{cmd[0]} not found", command=command, exit_code=127) from exc
        if returncode != 0:
            raise InstallError(
                stderr or f"'{command}' exited with code {returncode}",
                command=command,
                exit_code=returncode if returncode > 0 else 1,
            )

    async def install(
        self,
        packages: str | list[str],
        directory: str | Path,
        dev: bool = False,
        force_yarn: bool = False,
    ) -> list[str]:
        """Install *packages* into *directory*.

        Returns:
            The full command line that was executed.

        Raises:
            InstallError: When the package manager exits non-zero; its exit
                code becomes the program's exit code.
        """
        manager = self._manager(force_yarn)
        cmd = [manager, *build_install_args(packages, dev=dev, manager=manager)]
        print_step(" ".join(cmd))
        await self._run(cmd, Path(directory))
        return cmd

    async def reinstall(self, directory: str | Path) -> list[str]:
        """Delete ``node_modules`` and lock files, then install from scratch.

        Raises:
            ScaffoldError: When the old files cannot be deleted.
            InstallError: When the package manager exits non-zero.
        """
        root = Path(directory)
        await asyncio.to_thread(_remove_install_state, root)

        cmd = [self.config.package_manager, "install"]
        print_step(" ".join(cmd))
        await self._run(cmd, root)
        return cmd


def _remove_install_state(root: Path) -> None:
    """Synchronous helper: drop ``node_modules`` and both lock files."""
    node_modules = root / "node_modules"
    try:
        if node_modules.is_dir():
            shutil.rmtree(node_modules)
        for lock_file in ("package-lock.json", "yarn.lock"):
            (root / lock_file).unlink(missing_ok=True)
    except PermissionError as exc:
        raise ScaffoldError(f"Permission denied while deleting {exc.filename}") from exc
