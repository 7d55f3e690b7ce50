"""Start the scraper remotely through a GitHub Actions ``workflow_dispatch``."""

from __future__ import annotations

import logging

import httpx

from app.config import Settings

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
_REQUEST_TIMEOUT = 15.0


class WorkflowDispatchError(Exception):
    """Raised when GitHub rejects or fails the dispatch request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class MissingCredentialsError(WorkflowDispatchError):
    """Raised when the token or repository coordinates are not configured."""

    pass


class WorkflowDispatcher:
    """Thin client for the one GitHub API call the trigger endpoint needs."""

    def __init__(
        self, settings: Settings, client: httpx.AsyncClient | None = None
    ) -> None:
        self.settings = settings
        self._client = client

    @property
    def dispatch_url(self) -> str:
        s = self.settings
        return (
            f"{GITHUB_API_URL}/repos/{s.github_owner}/{s.github_repo}"
            f"/actions/workflows/{s.github_workflow}/dispatches"
        )

    async def dispatch(self, restaurant_id: str = "") -> None:
        """
        Ask GitHub to run the scrape workflow.

        Args:
            restaurant_id: Restaurant to scrape; empty means all.

        Raises:
            MissingCredentialsError: No token or repository configured.
            WorkflowDispatchError: The request failed or was rejected.
        """
        s = self.settings
        if not s.github_token or not s.github_owner or not s.github_repo:
            raise MissingCredentialsError("GitHub workflow credentials not configured")

        payload = {"ref": s.github_ref, "inputs": {"restaurant": restaurant_id}}
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "Authorization": f"Bearer {s.github_token}",
        }
        try:
            if self._client is not None:
                resp = await self._client.post(
                    self.dispatch_url, json=payload, headers=headers
                )
            else:
                async with httpx.AsyncClient(timeout=_REQUEST_TIMEOUT) as client:
                    resp = await client.post(
                        self.dispatch_url, json=payload, headers=headers
                    )
        except httpx.HTTPError as exc:
            raise WorkflowDispatchError(f"GitHub API request failed: {exc}") from exc

        if resp.is_error:
            logger.error("GitHub API error: %d %s", resp.status_code, resp.text)
            raise WorkflowDispatchError(
                f"GitHub API returned {resp.status_code}", status_code=resp.status_code
            )
        logger.info("Dispatched %s on %s", s.github_workflow, s.github_ref)
