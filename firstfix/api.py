"""Client for the FirstFix backend: issue search and starter kits."""

import logging
from typing import Optional

import requests

from .config import API_BASE, SEARCH_PATH, STARTER_KIT_PATH
from .errors import TransportError
from .models import IssueTarget, SearchResultCard
from .starter_kit import StarterKitPayload, assemble

logger = logging.getLogger(__name__)


class FirstFixClient:
    """Handles all communication with the FirstFix backend.

    No retries and no timeout of its own: a failure is reported once and the
    user re-triggers the action.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or API_BASE).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def _get(self, path: str, params: dict, failure: str) -> dict:
        url = f"{self.base_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning("%s: %s", failure, e)
            raise TransportError(f"{failure}: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.warning("%s: HTTP %d from %s", failure, response.status_code, url)
            raise TransportError(f"{failure}: {response.status_code}", status=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"{failure}: invalid JSON response", status=response.status_code) from e
        if not isinstance(data, dict):
            logger.warning("%s: expected a JSON object from %s, got %s", failure, url, type(data).__name__)
            raise TransportError(f"{failure}: invalid JSON response", status=response.status_code)
        return data

    def search_issues(self, skills: str) -> list[SearchResultCard]:
        """Search beginner-friendly issues; order is the backend's relevance order."""
        data = self._get(SEARCH_PATH, {"skills": skills}, "Search failed")
        items = data.get("items") or []
        cards = [SearchResultCard.from_api(item) for item in items]
        logger.info("Search for %r returned %d items", skills, len(cards))
        return cards

    def get_starter_kit(self, owner: str, repo: str, number: int | str) -> dict:
        """Raw starter-kit body; may carry an ``error`` field."""
        params = {"owner": owner, "repo": repo, "number": str(number)}
        return self._get(STARTER_KIT_PATH, params, "Starter kit failed")

    def fetch_starter_kit(self, target: IssueTarget) -> StarterKitPayload:
        raw = self.get_starter_kit(target.owner, target.repo, target.number)
        return assemble(raw, target)
