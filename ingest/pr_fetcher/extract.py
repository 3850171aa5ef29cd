from typing import Dict, Any, Optional
from .utility import NOT_MERGED, UNKNOWN, format_date

FIELDS = [
    "number","title","author","created_at","merged_at","url"
]

def build_search_query(owner: str, repo: str, state: str = "all", author: Optional[str] = None) -> str:
    parts = ["type:pr", f"repo:{owner}/{repo}"]
    if author:
        parts.append(f"author:{author}")
    if state != "all":
        parts.append(f"state:{state}")
    return " ".join(parts)

def _merged_at(item: Dict[str, Any]) -> str:
    # closed_at on a closed item counts as merged, even when it was closed unmerged
    if item.get("closed_at") and item.get("state") == "closed":
        return format_date(item["closed_at"])
    return NOT_MERGED

def flatten_pr(item: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "number": item["number"],
        "title": (item.get("title") or "").replace("\n", " ").strip(),
        "author": (item.get("user") or {}).get("login") or UNKNOWN,
        "created_at": format_date(item.get("created_at") or UNKNOWN),
        "merged_at": _merged_at(item),
        "url": item["html_url"],
    }
