"""Rendering and file output."""

from .renderer import MarkdownRenderer
from .writer import OutputWriter, wrap_html

__all__ = ["MarkdownRenderer", "OutputWriter", "wrap_html"]
