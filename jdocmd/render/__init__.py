"""Document renderers for parsed class records."""

from .markdown import MarkdownRenderer, escape_cell

__all__ = ["MarkdownRenderer", "escape_cell"]
