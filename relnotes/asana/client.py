"""Asana API client built on requests."""

import logging
from typing import Any, Dict, List, Optional

import requests

from ..config import Config
from ..models import Task


PARSERS = ("json", "text")
TASK_FIELDS = "id,name,projects"


class ApiClient:
    """Issues HTTP requests and turns every failure into ``None``."""

    def __init__(self, timeout: float = 30.0,
                 session: Optional[requests.Session] = None,
                 logger: Optional[logging.Logger] = None):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.logger = logger or logging.getLogger(__name__)

    def call(self, url: str, method: str = "GET",
             headers: Optional[Dict[str, str]] = None,
             body: Any = None,
             params: Optional[Dict[str, str]] = None,
             parser: str = "json",
             error_message: str = "API request failed") -> Any:
        """Send a request and parse the response body.

        Args:
            url: Absolute request URL
            method: HTTP method
            headers: Extra request headers
            body: JSON-serializable request body
            params: Query string parameters
            parser: ``"json"`` or ``"text"``
            error_message: Message logged when the request fails

        Returns:
            Parsed body, or None on network failure, non-2xx status or
            malformed JSON
        """
        if parser not in PARSERS:
            raise ValueError(f"Unknown response parser: {parser}")

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                json=body,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            self.logger.error(f"{error_message}: {e}")
            return None

        if not response.ok:
            self.logger.error(f"{error_message}: HTTP {response.status_code} {response.reason}")
            return None

        if parser == "text":
            return response.text

        try:
            return response.json()
        except ValueError as e:
            self.logger.error(f"{error_message}: invalid JSON response ({e})")
            return None


def _unwrap(payload: Any) -> Optional[List[Dict[str, Any]]]:
    """Return the record list from an Asana ``{"data": [...]}`` envelope."""
    if isinstance(payload, dict):
        payload = payload.get("data")
    if isinstance(payload, list):
        return payload
    return None


def _record_id(record: Dict[str, Any]) -> str:
    return str(record.get("gid") or record.get("id") or "")


class AsanaClient:
    """Tag resolution and task queries against the Asana REST API."""

    def __init__(self, config: Config, api: Optional[ApiClient] = None,
                 logger: Optional[logging.Logger] = None):
        """Initialize Asana client.

        Args:
            config: Configuration object containing Asana settings
            api: Underlying HTTP client, created from config when omitted
            logger: Logger instance
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.api = api or ApiClient(timeout=config.timeout, logger=self.logger)

    @property
    def base_url(self) -> str:
        return f"{self.config.api_base_url}/{self.config.api_version}"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.access_token}",
            "Accept": "application/json",
        }

    def list_tags(self) -> Optional[List[Dict[str, Any]]]:
        """List all tags visible to the token.

        The service is assumed to return the complete tag set in one page.

        Returns:
            List of tag records, or None if the request failed
        """
        payload = self.api.call(
            f"{self.base_url}/tags",
            headers=self._headers(),
            error_message="Failed to fetch tags",
        )
        if payload is None:
            return None
        tags = _unwrap(payload)
        if tags is None:
            self.logger.error("Failed to fetch tags: unexpected response shape")
        return tags

    def resolve_tag(self, name: str) -> Optional[str]:
        """Map a tag name such as ``v1.5.0`` to its Asana id.

        Args:
            name: Exact tag name

        Returns:
            Tag id, or None if the API call failed or no tag matched
        """
        tags = self.list_tags()
        if tags is None:
            return None

        for tag in tags:
            if tag.get("name") == name:
                tag_id = _record_id(tag)
                self.logger.debug(f"Resolved tag {name} to {tag_id}")
                return tag_id

        self.logger.error(f"Tag '{name}' not found")
        return None

    def query_tasks(self, tag_id: str) -> Optional[List[Task]]:
        """Query tasks carrying a tag, restricted to the configured project.

        The tag query may span projects, so membership is checked here.

        Args:
            tag_id: Asana tag id

        Returns:
            Tasks in the configured project, or None if the request failed
        """
        payload = self.api.call(
            f"{self.base_url}/tasks",
            headers=self._headers(),
            params={"tag": tag_id, "opt_fields": TASK_FIELDS},
            error_message=f"Failed to fetch tasks for tag {tag_id}",
        )
        if payload is None:
            return None

        records = _unwrap(payload)
        if records is None:
            self.logger.error(f"Failed to fetch tasks for tag {tag_id}: unexpected response shape")
            return None

        project_id = str(self.config.project_id)
        tasks = []
        for record in records:
            project_ids = frozenset(_record_id(p) for p in record.get("projects") or [])
            if project_id not in project_ids:
                self.logger.debug(f"Skipping task {_record_id(record)}: not in project {project_id}")
                continue
            tasks.append(Task(id=_record_id(record), name=record.get("name") or "", project_ids=project_ids))

        return tasks

    def fetch_tasks(self, tag_id: str) -> List[Task]:
        """Like ``query_tasks`` but never fails; a failed query gives no tasks."""
        return self.query_tasks(tag_id) or []
