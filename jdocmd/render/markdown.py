"""Markdown rendering for parsed class records."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader

from ..models import ClassRecord

_DEFAULT_TEMPLATES = Path(__file__).with_name("templates")
_BLANK_RUNS = re.compile(r"\n{3,}")


def escape_cell(value: object) -> str:
    """Make a value safe to place inside a Markdown table cell."""
    text = str(value or "")
    text = " ".join(part.strip() for part in text.splitlines() if part.strip())
    return text.replace("|", "\\|")


class MarkdownRenderer:
    """Renders one Markdown document per :class:`ClassRecord`."""

    TEMPLATE_NAME = "class.md.j2"

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def render(self, record: ClassRecord) -> str:
        template = self._env.get_template(self.TEMPLATE_NAME)
        return self._tidy(template.render(record=record))

    @staticmethod
    def output_name(record: ClassRecord) -> str:
        return f"{record.class_name or 'Unnamed'}.md"

    @staticmethod
    def _tidy(markdown: str) -> str:
        lines = [line.rstrip() for line in markdown.replace("\r\n", "\n").split("\n")]
        collapsed = _BLANK_RUNS.sub("\n\n", "\n".join(lines))
        return collapsed.strip() + "\n"

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir is not None:
            directories.append(str(templates_dir))
        directories.append(str(_DEFAULT_TEMPLATES))
        env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        env.filters["cell"] = escape_cell
        return env


__all__ = ["MarkdownRenderer", "escape_cell"]
