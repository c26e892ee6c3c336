"""Main scaffolding orchestrator.

Takes a ``ProjectConfig`` and generates a Semi full-stack project: a root
workspace with its ``package.json`` and ``.gitignore``, a TypeScript backend
with optional express / auth / mongoose / redis modules, and an empty
frontend directory.  Dependencies are installed with the configured package
manager as the tree is built.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, computed_field, model_validator

from ..config import Config
from ..errors import ScaffoldError
from ..installer import PackageInstaller
from ..prompts import AskBool, ask_bool, confirm_delete
from ..utils import print_step, print_warning, run_command, save_json, slugify
from .modules import BackendModules
from .templates import TemplateRenderer

ROOT_MARKER = ".semiroot"


# ---------------------------------------------------------------------------
# Configuration models
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """Pydantic model describing the project to scaffold."""

    name: str = Field(..., description="Project name as typed by the user")
    path: str | None = Field(default=None, description="Custom project folder, relative to cwd")
    force: bool | None = Field(
        default=None,
        description="True deletes an existing folder, False aborts, None asks",
    )
    force_yarn: bool = Field(default=False, description="Install with yarn regardless of config")
    cwd: Path = Field(default_factory=Path.cwd)

    @computed_field  # type: ignore[misc]
    @property
    def slug(self) -> str:
        """Package name derived from :attr:`name`."""
        return slugify(self.name)

    @property
    def root_dir(self) -> Path:
        return self.cwd / (self.path or self.slug)

    @model_validator(mode="after")
    def _check_slug(self) -> "ProjectConfig":
        if not self.slug:
            raise ValueError(f"Project name {self.name!r} contains no usable characters")
        return self


class BackendOptions(BaseModel):
    """Optional backend modules chosen by the user."""

    express: bool = True
    auth: bool = True
    mongoose: bool = True
    redis: bool = True


# ---------------------------------------------------------------------------
# Manifests
# ---------------------------------------------------------------------------


def root_package_json(slug: str) -> dict[str, Any]:
    return {
        "name": slug,
        "version": "0.0.0",
        "description": f"Full-Stack {slug} project.",
        "license": "MIT",
        "prettier": {
            "trailingComma": "all",
            "tabWidth": 2,
            "semi": True,
            "singleQuote": False,
        },
        "scripts": {
            "build": "semi-cli build bundle",
            "cli": "semi-cli",
            "delete": "semi-cli delete bundle",
            "format": "semi-cli format all",
            "reinstall": "semi-cli reinstall",
        },
    }


def backend_package_json(slug: str) -> dict[str, Any]:
    return {
        "name": "backend",
        "version": "0.0.0",
        "main": "dist/index.js",
        "description": f"Backend of {slug} project.",
        "license": "MIT",
        "scripts": {
            "build": "semi-cli build backend",
            "cli": "semi-cli",
            "delete": "semi-cli delete backend",
            "dev": "semi-cli start backend",
            "format": "semi-cli format backend",
            "reinstall": "semi-cli reinstall",
            "start": "node .",
        },
    }


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Creates a Semi project on disk.

    Generates::

        <root>/
          .semiroot            absolute path of the project root
          .gitignore
          package.json
          backend/
            .env
            package.json
            tsconfig.json      (written by ``tsc --init``)
            src/index.ts
            src/Components/
          frontend/

    Args:
        project: What to generate and where.
        config: Global configuration (package manager, timeouts).
        ask: Yes/no question function; defaults to an interactive prompt.
        installer: Package installer; built from *config* when omitted.
        renderer: Template renderer; uses the packaged templates when omitted.
    """

    def __init__(
        self,
        project: ProjectConfig,
        config: Config,
        ask: AskBool = ask_bool,
        installer: PackageInstaller | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.project = project
        self.config = config
        self.ask = ask
        self.installer = installer or PackageInstaller(config)
        self.renderer = renderer or TemplateRenderer()

    @property
    def root_dir(self) -> Path:
        return self.project.root_dir

    @property
    def backend_dir(self) -> Path:
        return self.root_dir / "backend"

    @property
    def frontend_dir(self) -> Path:
        return self.root_dir / "frontend"

    # -- Public API --------------------------------------------------------

    async def generate(self) -> Path:
        """Generate the complete project.

        Returns:
            Path to the generated project root.

        Raises:
            ScaffoldError: The target directory exists and may not be deleted.
            InstallError: A package-manager call failed.
        """
        await self._prepare_root()
        await self._write_root_files()

        print_step(f"Installing {self.config.cli_package}")
        await self.installer.install(
            self.config.cli_package,
            self.root_dir,
            dev=True,
            force_yarn=self.project.force_yarn,
        )

        await self._create_backend()
        await self._create_frontend()
        return self.root_dir

    def ask_backend_options(self) -> BackendOptions:
        """Ask which optional backend modules to add."""
        express = self.ask("Do you want to add express (webserver)?", True)
        auth = False
        if express:
            auth = self.ask(
                "Do you want to add @semi-framework/node-auth (Backend authentication handler)?",
                True,
            )
        mongoose = self.ask("Do you want to add mongoose (database)?", True)
        redis = self.ask("Do you want to add ioredis (RAM database)?", True)
        return BackendOptions(express=express, auth=auth, mongoose=mongoose, redis=redis)

    # -- Root --------------------------------------------------------------

    async def _prepare_root(self) -> None:
        """Make sure :attr:`root_dir` exists and is empty."""
        root = self.root_dir
        if root.exists():
            force = self.project.force
            if force is False:
                raise ScaffoldError(
                    f'Option "force" is set to "false" and directory "{root}" already exists. Aborting!'
                )
            if force is None and not confirm_delete(root, self.ask):
                raise ScaffoldError(f'Directory "{root}" was left untouched. Aborting!')

            print_step(f"Deleting {root}")
            try:
                await asyncio.to_thread(_remove_path, root)
            except PermissionError as exc:
                raise ScaffoldError(f"Permission denied while deleting {exc.filename or root}") from exc

        await asyncio.to_thread(root.mkdir, parents=True, exist_ok=True)

    async def _write_root_files(self) -> None:
        root = self.root_dir
        print_step(f"Creating project {self.project.slug} in {root}")
        await asyncio.to_thread((root / ROOT_MARKER).write_text, str(root), "utf-8")
        await save_json(root_package_json(self.project.slug), root / "package.json")
        await self.renderer.render_to_file(
            "gitignore.j2", root / ".gitignore", self._build_context()
        )

    # -- Backend -----------------------------------------------------------

    async def _create_backend(self) -> BackendOptions:
        backend = self.backend_dir
        src_dir = backend / "src"
        print_step("Creating backend")

        await asyncio.to_thread(backend.mkdir)
        await asyncio.to_thread((backend / ".env").write_text, "DEBUG=1\n", "utf-8")
        await asyncio.to_thread(src_dir.mkdir)
        await save_json(backend_package_json(self.project.slug), backend / "package.json")

        await self.installer.install("@types/node @semi-framework/cli", backend, dev=True)
        await self._init_typescript()

        await asyncio.to_thread((src_dir / "index.ts").write_text, "", "utf-8")
        await asyncio.to_thread((src_dir / "Components").mkdir)

        modules = BackendModules(backend, self.installer, self.renderer, self._build_context())
        await modules.semi()

        options = self.ask_backend_options()
        modules.context = self._build_context(options)
        if options.express:
            await modules.express()
        if options.auth:
            await modules.auth()
        if options.mongoose:
            await modules.mongoose()
        if options.redis:
            await modules.redis()
        return options

    async def _init_typescript(self) -> None:
        """Write ``tsconfig.json`` with the locally installed compiler."""
        tsc = self.backend_dir / "node_modules" / ".bin" / "tsc"
        try:
            returncode, _, stderr = await run_command(
                [str(tsc), "--init", "--outDir", "dist"], cwd=self.backend_dir
            )
        except FileNotFoundError:
            print_warning(f"TypeScript compiler not found at {tsc}; skipping tsconfig.json")
            return
        if returncode != 0:
            print_warning(f"tsc --init failed ({returncode}): {stderr}")

    # -- Frontend ----------------------------------------------------------

    async def _create_frontend(self) -> None:
        print_step("Creating frontend")
        await asyncio.to_thread(self.frontend_dir.mkdir)

    # -- Context building --------------------------------------------------

    def _build_context(self, options: BackendOptions | None = None) -> dict[str, Any]:
        """Build the Jinja2 template context."""
        options = options or BackendOptions(express=False, auth=False, mongoose=False, redis=False)
        return {
            "project_name": self.project.name,
            "project_name_slug": self.project.slug,
            **options.model_dump(),
        }


def _remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()
