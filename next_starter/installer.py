"""Dependency installation for the generated project.

Computes the npm package list from the config toggles and runs a single
``npm install`` inside the project directory, waiting for it to finish.  The
outcome is returned as an ``InstallResult`` rather than raised, because a
failed install leaves a usable scaffold on disk.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from pydantic import BaseModel, Field, computed_field

from .config import StarterConfig
from .utils import console, run_command


CORE_PACKAGES: tuple[str, ...] = ("next@^12", "react@^17.0.2", "react-dom@^17.0.2")
FIREBASE_PACKAGES: tuple[str, ...] = ("firebase@^8.10.1",)
FONT_AWESOME_PACKAGES: tuple[str, ...] = (
    "@fortawesome/fontawesome-svg-core",
    "@fortawesome/free-solid-svg-icons",
    "@fortawesome/react-fontawesome",
)

# Conventional shell status for "command not found".
NOT_FOUND_RETURNCODE = 127


class InstallResult(BaseModel):
    """Outcome of one ``npm install`` run."""

    packages: list[str] = Field(default_factory=list)
    command: list[str] = Field(default_factory=list)
    returncode: int = Field(default=0)
    stdout: str = Field(default="")
    stderr: str = Field(default="")

    @computed_field  # type: ignore[misc]
    @property
    def success(self) -> bool:
        """True when the package manager exited cleanly."""
        return self.returncode == 0


def resolve_packages(config: StarterConfig) -> list[str]:
    """Return the packages to install for *config*, in install order."""
    packages = list(CORE_PACKAGES)
    if config.with_firebase:
        packages.extend(FIREBASE_PACKAGES)
    if config.with_font_awesome:
        packages.extend(FONT_AWESOME_PACKAGES)
    return list(dict.fromkeys(packages))


async def install_packages(
    config: StarterConfig,
    project_root: Path | None = None,
    *,
    npm: str = "npm",
) -> InstallResult:
    """Install the packages for *config* into *project_root*.

    Args:
        config: The scaffolding options.
        project_root: Directory to run ``npm`` in.  Defaults to
            ``config.project_path``.
        npm: Name or path of the npm executable.

    Returns:
        An ``InstallResult``.  A missing ``npm`` executable is reported with
        return code 127 instead of raising.
    """
    cwd = project_root or config.project_path
    packages = resolve_packages(config)

    executable = shutil.which(npm)
    if executable is None:
        return InstallResult(
            packages=packages,
            command=[npm, "install", *packages],
            returncode=NOT_FOUND_RETURNCODE,
            stderr=f"'{npm}' was not found on PATH. Install Node.js and npm, then run "
            f"'npm install {' '.join(packages)}' in {cwd}.",
        )

    command = [executable, "install", *packages]
    console.print(f"Installing packages: [cyan]{', '.join(packages)}[/cyan]")
    with console.status("[dim]Running npm install...[/dim]"):
        returncode, stdout, stderr = await run_command(command, cwd=cwd)

    return InstallResult(
        packages=packages,
        command=command,
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
    )
