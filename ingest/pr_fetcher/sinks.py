import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, TextIO

def _cell(v: Any) -> str:
    return "" if v is None else str(v)

def render_table(rows: Sequence[Dict[str, Any]], out: Optional[TextIO] = None):
    out = out or sys.stdout
    if not rows:
        print("No data to display", file=out)
        return

    keys = list(rows[0].keys())
    widths = {k: max([len(k)] + [len(_cell(r.get(k))) for r in rows]) for k in keys}

    print("".join(f"| {k.ljust(widths[k])} " for k in keys) + "|", file=out)
    print("".join(f"| {'-' * widths[k]} " for k in keys) + "|", file=out)
    for r in rows:
        print("".join(f"| {_cell(r.get(k)).ljust(widths[k])} " for k in keys) + "|", file=out)

def _csv_field(v: Any) -> str:
    if v is None:
        return ""
    # URLs and anything with a comma get quoted, everything else is written bare
    if isinstance(v, str) and ("," in v or "http" in v):
        return '"' + v.replace('"', '""') + '"'
    return str(v)

def write_csv(rows: Sequence[Dict[str, Any]], path, fieldnames: Optional[List[str]] = None):
    rows = list(rows)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    headers = list(fieldnames or (rows[0].keys() if rows else []))
    lines = [",".join(headers)]
    for r in rows:
        lines.append(",".join(_csv_field(r.get(h)) for h in headers))
    with open(path, "w", newline="", encoding="utf-8") as f:
        f.write("\n".join(lines))

def csv_filename(owner: str, repo: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    stamp = now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"
    return f"{owner}_{repo}_prs_{stamp.replace(':', '-').replace('.', '-')}.csv"
