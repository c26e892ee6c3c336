"""semi-cli scaffolder -- generates Semi full-stack project structures.

Quick usage::

    from semi_cli.config import Config
    from semi_cli.scaffolder import ProjectConfig, ProjectGenerator

    project = ProjectConfig(name="My App", force=True)
    generator = ProjectGenerator(project, Config())
    project_path = await generator.generate()
"""

from semi_cli.scaffolder.generator import BackendOptions, ProjectConfig, ProjectGenerator
from semi_cli.scaffolder.modules import BackendModules
from semi_cli.scaffolder.templates import TemplateRenderer

__all__ = [
    "BackendModules",
    "BackendOptions",
    "ProjectConfig",
    "ProjectGenerator",
    "TemplateRenderer",
]
