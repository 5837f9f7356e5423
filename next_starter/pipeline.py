"""next-starter pipeline and CLI entry point.

Runs the scaffolding steps once, top to bottom:

1. Create the project directory (fails if it exists).
2. Write the manifest, optional ``.env`` and ``netlify.toml``, styles, pages
   and lib files.
3. Install the npm packages selected by the toggles.

Usage::

    create-next-starter -n my-site
    python -m next_starter -n my-site -fN -wF -wFA
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, computed_field
from rich.markup import escape

from .config import StarterConfig
from .installer import InstallResult, install_packages
from .scaffolder import ProjectGenerator, ScaffoldError
from .utils import (
    console,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
)

# Lines of npm stderr shown when the install fails.
_STDERR_TAIL_LINES = 20


class ScaffoldResult(BaseModel):
    """Everything a scaffolding run produced."""

    project_path: Path
    files: list[str] = Field(default_factory=list)
    install: InstallResult | None = None

    @computed_field  # type: ignore[misc]
    @property
    def success(self) -> bool:
        """True when the files were written and the install succeeded."""
        return self.install is not None and self.install.success


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives one scaffolding run for a ``StarterConfig``.

    Attributes:
        config: The immutable run options.
        generator: Writes the project files.
    """

    def __init__(self, config: StarterConfig) -> None:
        self.config = config
        self.generator = ProjectGenerator(config)

    async def run(self, *, install: bool = True) -> ScaffoldResult:
        """Write the scaffold and, unless *install* is False, install packages.

        Raises:
            ProjectExistsError: If the project directory already exists.
        """
        print_header(f"next-starter: {escape(self.config.name)}")
        print_summary_table(self.config.options(), title="Options")

        project_root = await self.generator.generate()
        result = ScaffoldResult(
            project_path=project_root,
            files=list(self.generator.written),
        )
        if not install:
            return result

        install_result = await install_packages(self.config, project_root)
        return result.model_copy(update={"install": install_result})

    def report(self, result: ScaffoldResult) -> None:
        """Print the completion message and next steps for *result*."""
        install_result = result.install
        if install_result is not None and not install_result.success:
            print_error(
                f"npm install exited with status {install_result.returncode}."
            )
            tail = install_result.stderr.splitlines()[-_STDERR_TAIL_LINES:]
            for line in tail:
                console.print(f"  {line}", style="dim", markup=False, highlight=False)
            print_warning(
                f"The project files were left in {escape(str(result.project_path))}. "
                "Fix the problem above and run npm install there."
            )
            return

        print_success("Finished! 🎉")
        console.print()
        console.print("Next steps:")
        console.print(f"  cd {escape(self.config.name)}")
        if self.config.with_firebase:
            console.print("  fill in the Firebase keys in .env")
        console.print("  npm run dev")
        if self.config.for_netlify:
            console.print("  npm run build && npm run export  [dim]# static build for Netlify[/dim]")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-next-starter",
        usage="%(prog)s -n <name> [-fN] [-wF] [-wFA]",
        description="Scaffold a Next.js starter project and install its dependencies.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-next-starter -n my-site\n"
            "  create-next-starter -n my-site --forNetlify --withFirebase\n"
        ),
    )
    parser.add_argument(
        "-n", "--name",
        required=True,
        help="Project name",
    )
    parser.add_argument(
        "-fN", "--forNetlify",
        dest="for_netlify",
        action="store_true",
        help="True if hosting on Netlify.",
    )
    parser.add_argument(
        "-wF", "--withFirebase",
        dest="with_firebase",
        action="store_true",
        help="True if using Firebase services.",
    )
    parser.add_argument(
        "-wFA", "--withFontAwesome",
        dest="with_font_awesome",
        action="store_true",
        help="True if using FontAwesome.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for ``create-next-starter`` and ``python -m next_starter``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = StarterConfig.from_args(args)
    except ValidationError as exc:
        messages = "; ".join(err["msg"] for err in exc.errors())
        parser.error(messages)

    pipeline = Pipeline(config)
    try:
        result = asyncio.run(pipeline.run())
    except ScaffoldError as exc:
        print_error(str(exc))
        return 1

    pipeline.report(result)
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
