"""Jinja2 template rendering for the starter scaffold.

Provides the TemplateRenderer class which loads ``.j2`` templates from the
``next_starter/scaffolder/templates/`` directory and writes them into the
generated project.  Optional content is expressed with ``{% if %}`` blocks
keyed by the config toggles, so a template lists its blocks in the order they
appear in the output.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Renders the starter's Jinja2 templates.

    Undefined variables raise instead of rendering as empty strings, so a
    template that expects a toggle the context does not provide fails loudly.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"pages/_app.js.j2"``).
            context: Dictionary of variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        The parent directory must already exist.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(out.write_text, content, "utf-8")
        return out
