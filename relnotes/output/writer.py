"""Persist release documents as Markdown, HTML and PDF files."""

import io
import logging
from pathlib import Path
from typing import Optional, Union

from xhtml2pdf import pisa

from ..models import StageResult


PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
{page_rule}
body {{
  font-family: Helvetica, Arial, sans-serif;
  font-size: {font_size};
  line-height: 1.5;
  color: #24292e;
}}
.markdown-body {{
  max-width: 980px;
  margin: 0 auto;
  padding: {padding};
}}
.markdown-body h1 {{ border-bottom: 1px solid #eaecef; padding-bottom: 0.3em; }}
.markdown-body code {{
  font-family: Courier, monospace;
  background-color: #f6f8fa;
  padding: 0.2em 0.4em;
}}
.markdown-body a {{ color: #0366d6; text-decoration: none; }}
</style>
</head>
<body>
<div class="markdown-body">
{body}
</div>
</body>
</html>
"""

SCREEN_LAYOUT = {"page_rule": "", "font_size": "16px", "padding": "45px"}
PRINT_LAYOUT = {
    "page_rule": "@page { size: a4; margin: 2cm 1.5cm; }",
    "font_size": "11px",
    "padding": "0",
}


def wrap_html(fragment: str, title: str, print_layout: bool = False) -> str:
    """Embed an HTML fragment in the release notes page template.

    Args:
        fragment: Rendered Markdown
        title: Document title
        print_layout: Use page margins and a smaller scale for PDF output
    """
    layout = PRINT_LAYOUT if print_layout else SCREEN_LAYOUT
    return PAGE_TEMPLATE.format(title=title, body=fragment, **layout)


class OutputWriter:
    """Writes sibling ``.md``/``.html``/``.pdf`` files for one release."""

    def __init__(self, root: Union[str, Path] = "releases",
                 logger: Optional[logging.Logger] = None):
        self.root = Path(root)
        self.logger = logger or logging.getLogger(__name__)

    def base_path(self, version: str) -> Path:
        """Return ``root/v{version}/v{version}`` (no extension)."""
        name = f"v{version}"
        return self.root / name / name

    def ensure_directory(self, base_path: Path) -> StageResult:
        try:
            base_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.logger.error(f"Failed to create directory {base_path.parent}: {e}")
            return StageResult("mkdir", False, str(e), base_path.parent)
        return StageResult("mkdir", True, path=base_path.parent)

    def write_document(self, base_path: Path, extension: str,
                       content: Union[str, bytes]) -> StageResult:
        """Write one output file next to its siblings.

        Args:
            base_path: Path without extension
            extension: File extension without the dot
            content: Text (written as UTF-8) or raw bytes

        Returns:
            Success or failure of this write only
        """
        path = base_path.with_name(f"{base_path.name}.{extension}")
        stage = f"write_{extension}"
        try:
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        except OSError as e:
            self.logger.error(f"Failed to write {path}: {e}")
            return StageResult(stage, False, str(e), path)

        self.logger.info(f"Wrote {path}")
        return StageResult(stage, True, path=path)

    def write_html(self, base_path: Path, fragment: str, title: str) -> StageResult:
        return self.write_document(base_path, "html", wrap_html(fragment, title))

    def write_pdf(self, base_path: Path, fragment: str, title: str) -> StageResult:
        """Render the print layout of a fragment to PDF and write it."""
        html = wrap_html(fragment, title, print_layout=True)
        buffer = io.BytesIO()
        try:
            status = pisa.CreatePDF(html, dest=buffer, encoding="utf-8")
        except Exception as e:
            self.logger.error(f"Failed to render PDF: {e}")
            return StageResult("write_pdf", False, str(e))

        if status.err:
            reason = f"{status.err} error(s) while rendering"
            self.logger.error(f"Failed to render PDF: {reason}")
            return StageResult("write_pdf", False, reason)

        return self.write_document(base_path, "pdf", buffer.getvalue())
