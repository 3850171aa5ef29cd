import logging
from datetime import datetime
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)

NOT_MERGED = "Not merged"
UNKNOWN = "Unknown"
NOT_AVAILABLE = "Not available"


def _is_sentinel(value: Optional[str]) -> bool:
    return not value or value in (NOT_MERGED, UNKNOWN) or NOT_AVAILABLE in value


def format_date(value: Optional[str]) -> Optional[str]:
    """Render an ISO-8601 timestamp as DD/MM/YYYY; sentinels and junk pass through."""
    if _is_sentinel(value):
        return value
    try:
        # fromisoformat() before 3.11 does not accept a trailing Z
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        log.warning("Could not parse date: %s", value)
        return value
    return f"{parsed.day:02d}/{parsed.month:02d}/{parsed.year}"


def is_pull_request(item: Dict[str, Any]) -> bool:
    # search/issues mixes issues and PRs; only PRs carry a pull_request object
    return bool(item.get("pull_request"))
