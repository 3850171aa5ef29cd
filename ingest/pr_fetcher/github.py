from __future__ import annotations
import logging
import time
import requests
from typing import Any, Callable, Dict, Iterator, Optional, Tuple
from .config import Settings

# search/issues never returns more than this many results for one query
SEARCH_RESULT_CAP = 1000
SECONDARY_RETRY_AFTER = 60
# wait used when a primary rate limit arrives without X-RateLimit-Reset
RESET_UNKNOWN_RETRY_AFTER = 5

log = logging.getLogger(__name__)

# (retry_after_seconds, "METHOD /path") -> True to retry
RateLimitHandler = Callable[[int, str], bool]


def default_on_rate_limit(retry_after: int, request: str) -> bool:
    log.warning("Request quota exhausted for request %s", request)
    log.info("Retrying after %s seconds!", retry_after)
    return True


def default_on_secondary_rate_limit(retry_after: int, request: str) -> bool:
    log.warning("Secondary rate limit detected for request %s", request)
    return True


class GitHubClient:
    def __init__(
        self,
        settings: Settings,
        on_rate_limit: RateLimitHandler = default_on_rate_limit,
        on_secondary_rate_limit: RateLimitHandler = default_on_secondary_rate_limit,
    ):
        self.settings = settings
        self.on_rate_limit = on_rate_limit
        self.on_secondary_rate_limit = on_secondary_rate_limit
        self.s = self._new_session(settings.token)

    @staticmethod
    def _new_session(token: str) -> requests.Session:
        s = requests.Session()
        s.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })
        if token:
            s.headers["Authorization"] = f"Bearer {token}"
        return s

    def set_token(self, token: str) -> None:
        """Swap in a fresh session carrying ``token``; the old one is discarded."""
        self.s = self._new_session(token)

    def _throttle(self, resp: requests.Response) -> Optional[Tuple[RateLimitHandler, int]]:
        if resp.status_code not in (403, 429):
            return None
        if resp.headers.get("X-RateLimit-Remaining") == "0":
            reset = resp.headers.get("X-RateLimit-Reset")
            if reset is None:
                return self.on_rate_limit, RESET_UNKNOWN_RETRY_AFTER
            return self.on_rate_limit, max(0, int(reset) - int(time.time()))
        if "Retry-After" in resp.headers or "secondary rate limit" in resp.text.lower():
            retry_after = int(resp.headers.get("Retry-After", SECONDARY_RETRY_AFTER))
            return self.on_secondary_rate_limit, retry_after
        return None

    def _warn_deprecated(self, method: str, path: str, resp: requests.Response) -> None:
        if "Deprecation" not in resp.headers:
            return
        sunset = resp.headers.get("Sunset")
        suffix = f" It is scheduled to be removed on {sunset}" if sunset else ""
        log.warning('"%s %s" is deprecated.%s', method, path, suffix)

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.settings.api_base}{path}"
        request = f"{method} {path}"
        # no retry cap: the handlers decide when to give up
        while True:
            resp = self.s.request(method, url, timeout=self.settings.timeout, **kwargs)
            self._warn_deprecated(method, path, resp)
            throttled = self._throttle(resp)
            if throttled is None:
                break
            handler, retry_after = throttled
            if not handler(retry_after, request):
                break
            time.sleep(retry_after)
        resp.raise_for_status()
        return resp

    def search_issues(self, query: str, per_page: int = 100) -> Iterator[Dict[str, Any]]:
        page = 1
        while True:
            params = {"q": query, "per_page": per_page, "page": page}
            data = self._request("GET", "/search/issues", params=params).json() or {}
            items = data.get("items") or []
            log.info("Page %d: Found %d results", page, len(items))
            if not items:
                break
            for it in items:
                yield it
            seen = page * per_page
            total = data.get("total_count")
            if seen >= SEARCH_RESULT_CAP or (total is not None and seen >= total):
                break
            page += 1
            if self.settings.sleep_between_pages:
                time.sleep(self.settings.sleep_between_pages)

    def get_rate_limit(self) -> Dict[str, Any]:
        return self._request("GET", "/rate_limit").json()

    def get_authenticated_user(self) -> Dict[str, Any]:
        return self._request("GET", "/user").json()
