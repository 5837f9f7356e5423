"""next-starter configuration.

A single, immutable Pydantic v2 model describing the project to scaffold.  It
is built once by the CLI entry point and then passed explicitly to the
generator, the installer and the pipeline; nothing reads flags from global
state.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StarterConfig(BaseModel):
    """Options for one scaffolding run.

    Attributes:
        name: Project name; also the name of the directory that is created.
        for_netlify: Add an ``export`` script and a ``netlify.toml``.
        with_firebase: Add a ``.env`` template, ``lib/firebase.js`` and the
            ``firebase`` package.
        with_font_awesome: Register the FontAwesome icon library in
            ``pages/_app.js`` and install its packages.
        output_dir: Parent directory in which the project directory is created.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project name (used as the directory name)")
    for_netlify: bool = Field(default=False, description="True if hosting on Netlify")
    with_firebase: bool = Field(default=False, description="True if using Firebase services")
    with_font_awesome: bool = Field(default=False, description="True if using FontAwesome")
    output_dir: Path = Field(default=Path("."))

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("project name must not be empty")
        if name in {".", ".."}:
            raise ValueError(f"'{name}' is not a valid project name")
        if "/" in name or "\\" in name:
            raise ValueError("project name must not contain path separators")
        return name

    @property
    def project_path(self) -> Path:
        """Directory the scaffold is written to."""
        return self.output_dir / self.name

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "StarterConfig":
        """Build a config from parsed command-line arguments."""
        return cls(
            name=args.name,
            for_netlify=args.for_netlify,
            with_firebase=args.with_firebase,
            with_font_awesome=args.with_font_awesome,
        )

    def options(self) -> dict[str, str]:
        """Return the enabled toggles as a ``{label: value}`` mapping for display."""
        return {
            "Project": self.name,
            "Netlify": "yes" if self.for_netlify else "no",
            "Firebase": "yes" if self.with_firebase else "no",
            "FontAwesome": "yes" if self.with_font_awesome else "no",
        }
