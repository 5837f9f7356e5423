"""Main scaffolding orchestrator.

Takes a ``StarterConfig`` and writes a Next.js starter into
``<output_dir>/<name>``: the ``package.json`` manifest, optional ``.env`` and
``netlify.toml``, a ``styles`` directory, a ``pages`` directory and a ``lib``
directory.  Each step runs in a fixed order; there is no rollback if a later
step fails.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from rich.markup import escape

from ..config import StarterConfig
from ..utils import print_step
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Firebase web-config field -> environment variable holding its value.
FIREBASE_FIELDS: tuple[tuple[str, str], ...] = (
    ("apiKey", "NEXT_PUBLIC_FIREBASE_API_KEY"),
    ("authDomain", "NEXT_PUBLIC_FIREBASE_AUTH_DOMAIN"),
    ("databaseURL", "NEXT_PUBLIC_FIREBASE_DATABASE_URL"),
    ("projectId", "NEXT_PUBLIC_FIREBASE_PROJECT_ID"),
    ("storageBucket", "NEXT_PUBLIC_FIREBASE_STORAGE_BUCKET"),
    ("messagingSenderId", "NEXT_PUBLIC_FIREBASE_MESSAGING_SENDER_ID"),
    ("appId", "NEXT_PUBLIC_FIREBASE_APP_ID"),
    ("measurementId", "NEXT_PUBLIC_FIREBASE_MEASUREMENT_ID"),
)

FIREBASE_ENV_KEYS: tuple[str, ...] = tuple(key for _, key in FIREBASE_FIELDS)

SASS_VERSION = "^1.32.0"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Raised when the scaffold cannot be written."""


class ProjectExistsError(ScaffoldError, FileExistsError):
    """Raised when the target project directory already exists."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Directory with that name already exists: {path}")


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------


def build_manifest(config: StarterConfig) -> dict[str, Any]:
    """Return the ``package.json`` content for *config*.

    ``export`` is only present for Netlify builds, which publish the static
    ``out`` directory produced by ``next export``.
    """
    scripts: dict[str, str] = {
        "dev": "next dev",
        "build": "next build",
        "start": "next start",
    }
    if config.for_netlify:
        scripts["export"] = "next export"

    return {
        "scripts": scripts,
        "devDependencies": {"sass": SASS_VERSION},
    }


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Writes the starter project described by a ``StarterConfig``.

    Files are written in this order:
    - ``package.json``
    - ``.env`` (Firebase only)
    - ``netlify.toml`` (Netlify only)
    - ``styles/global.scss``
    - ``pages/_app.js`` and ``pages/index.js``
    - ``lib/api.js`` and ``lib/firebase.js`` (Firebase only)
    """

    def __init__(
        self,
        config: StarterConfig,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.written: list[str] = []

    # -- Public API --------------------------------------------------------

    async def generate(self) -> Path:
        """Generate the project and return its root directory.

        Raises:
            ProjectExistsError: If ``config.project_path`` already exists.
                Nothing is written in that case.
        """
        project_root = await self._create_project_directory()
        context = self._build_context()

        await self._write_manifest(project_root)
        await self._write_env_file(project_root, context)
        await self._write_netlify_config(project_root, context)
        await self._setup_styles(project_root, context)
        await self._setup_pages(project_root, context)
        await self._setup_lib(project_root, context)

        return project_root

    # -- Steps ---------------------------------------------------------------

    async def _create_project_directory(self) -> Path:
        project_root = self.config.project_path
        if project_root.exists():
            raise ProjectExistsError(project_root)
        try:
            await asyncio.to_thread(project_root.mkdir)
        except FileExistsError as exc:
            raise ProjectExistsError(project_root) from exc
        print_step(f'Project directory "{escape(str(project_root))}" created.')
        return project_root

    async def _write_manifest(self, project_root: Path) -> None:
        print_step("Creating package.json")
        content = json.dumps(build_manifest(self.config), indent=2) + "\n"
        await asyncio.to_thread(
            (project_root / "package.json").write_text, content, "utf-8"
        )
        self.written.append("package.json")

    async def _write_env_file(self, project_root: Path, context: dict[str, Any]) -> None:
        if not self.config.with_firebase:
            return
        print_step("Creating .env")
        await self._render(project_root, "env.j2", ".env", context)

    async def _write_netlify_config(
        self, project_root: Path, context: dict[str, Any]
    ) -> None:
        if not self.config.for_netlify:
            return
        print_step("Creating netlify.toml")
        await self._render(project_root, "netlify.toml.j2", "netlify.toml", context)

    async def _setup_styles(self, project_root: Path, context: dict[str, Any]) -> None:
        print_step("Setting up styles directory")
        await self._mkdir(project_root / "styles")
        await self._render(
            project_root, "styles/global.scss.j2", "styles/global.scss", context, indent=1
        )

    async def _setup_pages(self, project_root: Path, context: dict[str, Any]) -> None:
        print_step("Setting up pages directory")
        await self._mkdir(project_root / "pages")
        await self._render(project_root, "pages/_app.js.j2", "pages/_app.js", context, indent=1)
        await self._render(
            project_root, "pages/index.js.j2", "pages/index.js", context, indent=1
        )

    async def _setup_lib(self, project_root: Path, context: dict[str, Any]) -> None:
        print_step("Setting up lib directory")
        await self._mkdir(project_root / "lib")
        await self._render(project_root, "lib/api.js.j2", "lib/api.js", context, indent=1)
        if self.config.with_firebase:
            await self._render(
                project_root, "lib/firebase.js.j2", "lib/firebase.js", context, indent=1
            )

    # -- Helpers -------------------------------------------------------------

    def _build_context(self) -> dict[str, Any]:
        """Template variables shared by every file."""
        return {
            "with_font_awesome": self.config.with_font_awesome,
            "firebase_fields": FIREBASE_FIELDS,
            "firebase_env_keys": FIREBASE_ENV_KEYS,
        }

    async def _render(
        self,
        project_root: Path,
        template_path: str,
        relative_path: str,
        context: dict[str, Any],
        *,
        indent: int = 0,
    ) -> None:
        if indent:
            print_step(f"Creating {relative_path}", indent=indent)
        await self.renderer.render_to_file(
            template_path, project_root / relative_path, context
        )
        self.written.append(relative_path)

    @staticmethod
    async def _mkdir(path: Path) -> None:
        await asyncio.to_thread(path.mkdir)
