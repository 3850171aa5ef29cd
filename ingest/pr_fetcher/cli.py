import argparse, sys
from pathlib import Path
from .config import Settings
from .github import GitHubClient
from .logs import configure_logging
from .sinks import csv_filename, render_table, write_csv
from .extract import FIELDS
from .service import FetchError, check_rate_limit, fetch_pull_requests, test_auth

__version__ = "1.0.0"

def non_negative_int(value):
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid limit: {value!r} is not a number")
    if n < 0:
        raise argparse.ArgumentTypeError(f"invalid limit: {n} is negative")
    return n

def build_parser(s: Settings) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="pr-fetcher", description="A tool to fetch GitHub repository data")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("--log-level", default=s.log_level, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    sub = ap.add_subparsers(dest="command")

    prs = sub.add_parser("prs", help="Fetch pull requests from a GitHub repository")
    prs.add_argument("--owner", required=True, help="Repository owner (organization or username)")
    prs.add_argument("--repo", required=True, help="Repository name")
    prs.add_argument("--state", choices=["open","closed","all"], default=s.state, help="PR state")
    prs.add_argument("--limit", type=non_negative_int, default=s.limit, help="Limit the number of PRs returned")
    prs.add_argument("--author", default=None, help="Filter PRs by author")
    prs.add_argument("--format", choices=["table","csv"], default="table", help="Output format")
    prs.add_argument("--path", default=s.output_dir, help="Directory to save the CSV file in")

    sub.add_parser("rate-limit", help="Check GitHub API rate limit status")
    sub.add_parser("test-auth", help="Test GitHub API authentication")
    return ap

def run_prs(client: GitHubClient, args) -> int:
    try:
        rows = fetch_pull_requests(
            client, args.owner, args.repo,
            state=args.state, limit=args.limit, author=args.author,
        )
        if not rows:
            print("No pull requests found")
            return 0

        if args.format == "csv":
            out_path = Path(args.path) / csv_filename(args.owner, args.repo)
            write_csv(rows, out_path, fieldnames=FIELDS)
            print(f"CSV exported to {out_path}")
        else:
            render_table(rows)
    except (FetchError, OSError) as e:
        print(f"Error fetching pull requests: {e}", file=sys.stderr)
        return 1
    return 0

def run_rate_limit(client: GitHubClient, args) -> int:
    status = check_rate_limit(client, verbose=True)
    if not status.ok:
        print(f"Error checking rate limit: {status.error}", file=sys.stderr)
        return 1
    return 0

def run_test_auth(client: GitHubClient, args) -> int:
    result = test_auth(client)
    if not result:
        print(f"Error testing authentication: {result.error}", file=sys.stderr)
        return 1
    return 0

COMMANDS = {
    "prs": run_prs,
    "rate-limit": run_rate_limit,
    "test-auth": run_test_auth,
}

def main(argv=None) -> int:
    s = Settings()
    ap = build_parser(s)
    args = ap.parse_args(argv)

    if not args.command:
        ap.print_help()
        return 0

    configure_logging(args.log_level)
    client = GitHubClient(s)
    return COMMANDS[args.command](client, args)

if __name__ == "__main__":
    sys.exit(main())
