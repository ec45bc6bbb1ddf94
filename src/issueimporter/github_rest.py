from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import requests

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
USER_AGENT = "issueimporter-rest/0.1.0"
HTTP_ERROR_STATUS = 400
HTTP_NOT_FOUND = 404
REQUEST_TIMEOUT = 30


class GitHubAPIError(RuntimeError):
    """Raised when the GitHub REST API returns an error or cannot be reached.

    ``errors`` carries the structured field errors GitHub attaches to 422
    responses (``{"resource", "field", "code", "message"}`` entries) and
    ``documentation_url`` the docs link included in most error bodies.
    ``status`` is ``None`` for transport failures.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        response_text: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        documentation_url: str | None = None,
    ):
        super().__init__(message)
        self.status = status
        self.response_text = response_text
        self.errors = errors or []
        self.documentation_url = documentation_url

    @property
    def not_found(self) -> bool:
        return self.status == HTTP_NOT_FOUND


def _error_from_response(method: str, url: str, response: requests.Response) -> GitHubAPIError:
    text = response.text
    api_message: str | None = None
    errors: list[dict[str, Any]] = []
    documentation_url: str | None = None
    try:
        data = response.json() if text else None
    except ValueError:
        data = None
    if isinstance(data, dict):
        msg = data.get("message")
        api_message = msg if isinstance(msg, str) and msg else None
        raw_errors = data.get("errors")
        if isinstance(raw_errors, list):
            errors = [entry for entry in raw_errors if isinstance(entry, dict)]
        doc = data.get("documentation_url")
        documentation_url = doc if isinstance(doc, str) else None
    message = f"GitHub API {method} {url} failed with {response.status_code}"
    if api_message:
        message = f"{message}: {api_message}"
    return GitHubAPIError(
        message,
        status=response.status_code,
        response_text=text,
        errors=errors,
        documentation_url=documentation_url,
    )


@dataclass
class GitHubRestClient:
    """Lightweight REST client scoped to a single ``owner/repo``."""

    token: str
    repo: str
    base_url: str = DEFAULT_API_URL
    session: requests.Session | None = None
    _session: requests.Session = field(init=False, repr=False)

    def __post_init__(self) -> None:  # pragma: no cover - simple wiring
        self._session = self.session or requests.Session()
        self._session.headers.setdefault("Authorization", f"Bearer {self.token}")
        self._session.headers.setdefault("Accept", "application/vnd.github+json")
        self._session.headers.setdefault("X-GitHub-Api-Version", API_VERSION)
        self._session.headers.setdefault("User-Agent", USER_AGENT)

    # ---- REST helpers -------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any | None = None,
    ) -> Any:
        url = (
            path
            if path.startswith("http")
            else f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        )
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=self._session.headers,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise GitHubAPIError(f"GitHub API {method} {url} failed: {exc}") from exc
        if response.status_code >= HTTP_ERROR_STATUS:
            raise _error_from_response(method, url, response)
        if response.text:
            try:
                return response.json()
            except ValueError:  # pragma: no cover - non-JSON success body
                return response.text
        return None

    def _paginate(
        self, path: str, *, params: dict[str, Any] | None = None
    ) -> list[Any]:
        params = dict(params or {})
        per_page = params.setdefault("per_page", 100)
        params.setdefault("page", 1)
        results: list[Any] = []
        while True:
            data = self._request("GET", path, params=params)
            if not isinstance(data, list):
                break
            results.extend(data)
            if len(data) < per_page:
                break
            params["page"] = params.get("page", 1) + 1
        return results

    # ---- Repository lookups ------------------------------------------
    def list_milestones(self, *, state: str = "all") -> list[dict[str, Any]]:
        data = self._paginate(f"/repos/{self.repo}/milestones", params={"state": state})
        return [entry for entry in data if isinstance(entry, dict)]

    def check_collaborator(self, username: str) -> None:
        """Return when ``username`` is a collaborator; raise otherwise.

        GitHub answers 204 for collaborators and 404 for everyone else, so a
        non-collaborator surfaces as ``GitHubAPIError`` with ``not_found``.
        """
        try:
            user = quote(username, safe='')
        except UnicodeEncodeError as exc:
            raise GitHubAPIError(
                f"Cannot check collaborator {username!r}: not encodable as UTF-8", status=None
            ) from exc
        self._request("GET", f"/repos/{self.repo}/collaborators/{user}")

    # ---- Issue operations --------------------------------------------
    def create_issue(
        self,
        *,
        title: str,
        body: str,
        labels: Iterable[str] | None = None,
        assignees: Iterable[str] | None = None,
        milestone: int | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": title, "body": body}
        label_list = list(labels or [])
        if label_list:
            payload["labels"] = label_list
        assignee_list = list(assignees or [])
        if assignee_list:
            payload["assignees"] = assignee_list
        if milestone:
            payload["milestone"] = milestone
        data = self._request("POST", f"/repos/{self.repo}/issues", json_body=payload)
        if not isinstance(data, dict):
            raise GitHubAPIError(
                f"GitHub API POST /repos/{self.repo}/issues returned an unexpected payload",
                response_text=str(data),
            )
        return data


__all__ = [
    "DEFAULT_API_URL",
    "GitHubAPIError",
    "GitHubRestClient",
]
