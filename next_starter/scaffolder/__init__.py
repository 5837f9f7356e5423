"""next-starter scaffolder -- writes the Next.js starter file tree.

Quick usage::

    from next_starter.config import StarterConfig
    from next_starter.scaffolder import ProjectGenerator

    config = StarterConfig(name="my-site", with_firebase=True)
    project_path = await ProjectGenerator(config).generate()
"""

from next_starter.scaffolder.generator import (
    ProjectExistsError,
    ProjectGenerator,
    ScaffoldError,
    build_manifest,
)
from next_starter.scaffolder.templates import TemplateRenderer

__all__ = [
    "ProjectExistsError",
    "ProjectGenerator",
    "ScaffoldError",
    "TemplateRenderer",
    "build_manifest",
]
