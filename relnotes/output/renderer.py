"""Markdown to HTML rendering through the GitHub Markdown API."""

import logging
from typing import Optional

from ..asana.client import ApiClient
from ..config import Config


class MarkdownRenderer:
    """Converts Markdown text to an HTML fragment."""

    def __init__(self, config: Config, api: Optional[ApiClient] = None,
                 mode: str = "gfm", logger: Optional[logging.Logger] = None):
        self.config = config
        self.mode = mode
        self.logger = logger or logging.getLogger(__name__)
        self.api = api or ApiClient(timeout=config.timeout, logger=self.logger)

    def render(self, markdown: str) -> Optional[str]:
        """Render Markdown to HTML.

        Returns:
            HTML fragment, or None if the rendering service failed
        """
        headers = {"Accept": "application/vnd.github+json"}
        if self.config.github_token:
            headers["Authorization"] = f"Bearer {self.config.github_token}"

        html = self.api.call(
            self.config.markdown_api_url,
            method="POST",
            headers=headers,
            body={"text": markdown, "mode": self.mode},
            parser="text",
            error_message="Failed to render Markdown to HTML",
        )
        if html is None:
            return None
        if not html.strip():
            self.logger.error("Failed to render Markdown to HTML: empty response")
            return None
        return html
