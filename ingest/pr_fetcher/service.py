import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .github import GitHubClient, log as github_log
from .extract import build_search_query, flatten_pr
from .logs import filtered, search_deprecation_filter
from .utility import is_pull_request

log = logging.getLogger(__name__)

# core quota GitHub grants to requests without a token
UNAUTHENTICATED_LIMIT = 60


class FetchError(RuntimeError):
    pass


@dataclass
class RateLimitStatus:
    limit: int
    used: int
    remaining: int
    reset: int
    reset_date: datetime = field(default_factory=datetime.now)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def minutes_until_reset(self) -> int:
        return round((self.reset - time.time()) / 60)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "limit": self.limit,
            "used": self.used,
            "remaining": self.remaining,
            "reset": self.reset,
            "reset_date": self.reset_date.isoformat(),
            "error": self.error,
        }


@dataclass
class AuthResult:
    ok: bool
    login: Optional[str] = None
    limit: Optional[int] = None
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


def format_rate_limit(status: RateLimitStatus) -> str:
    return "\n".join([
        "=== GitHub API Rate Limit Status ===",
        f"Limit: {status.limit}",
        f"Used: {status.used}",
        f"Remaining: {status.remaining}",
        f"Reset at: {status.reset_date:%Y-%m-%d %H:%M:%S}",
        f"Time until reset: {status.minutes_until_reset} minutes",
        "====================================",
    ])


def check_rate_limit(client: GitHubClient, verbose: bool = False) -> RateLimitStatus:
    """
    Read the core quota. Never raises: on failure the error is logged and a
    zeroed status with ``error`` set comes back, so ``status.ok`` tells an
    exhausted quota apart from a failed check.
    """
    try:
        core = client.get_rate_limit()["resources"]["core"]
        status = RateLimitStatus(
            limit=core["limit"],
            used=core["used"],
            remaining=core["remaining"],
            reset=core["reset"],
            reset_date=datetime.fromtimestamp(core["reset"]),
        )
    except Exception as e:
        log.error("Error checking rate limit: %s", e)
        return RateLimitStatus(limit=0, used=0, remaining=0, reset=0, error=str(e))

    if verbose:
        print(format_rate_limit(status))
    return status


def test_auth(client: GitHubClient, token: Optional[str] = None) -> AuthResult:
    if token:
        client.set_token(token)

    limit = None
    try:
        core = client.get_rate_limit()["resources"]["core"]
        limit = core["limit"]
        log.info("Rate limit info: limit=%s remaining=%s", limit, core["remaining"])
        if limit == UNAUTHENTICATED_LIMIT:
            log.warning("Rate limit is only %d, suggesting unauthenticated access", limit)
            log.warning("Check your token and authentication method")

        login = client.get_authenticated_user()["login"]
    except Exception as e:
        log.error("Authentication failed: %s", e)
        return AuthResult(ok=False, limit=limit, error=str(e))

    log.info("Successfully authenticated as %s", login)
    return AuthResult(ok=True, login=login, limit=limit)


def fetch_pull_requests(
    client: GitHubClient,
    owner: str,
    repo: str,
    state: str = "all",
    limit: int = 1000,
    author: Optional[str] = None,
    token: Optional[str] = None,
) -> List[Dict[str, Any]]:
    if token:
        client.set_token(token)

    try:
        check_rate_limit(client, verbose=False)

        log.info(
            "Fetching PRs for %s/%s%s%s", owner, repo,
            f" with state: {state}" if state != "all" else "",
            f" by author: {author}" if author else "",
        )
        query = build_search_query(owner, repo, state, author)

        prs: List[Dict[str, Any]] = []
        if limit > 0:
            with filtered(github_log, search_deprecation_filter()):
                for item in client.search_issues(query, per_page=client.settings.per_page):
                    if not is_pull_request(item):
                        continue
                    prs.append(flatten_pr(item))
                    if len(prs) >= limit:
                        break
    except Exception as e:
        log.error("Error fetching pull requests: %s", e)
        raise FetchError(f"Failed to fetch pull requests: {e}") from e

    log.info("Total PRs found: %d", len(prs))
    return prs
