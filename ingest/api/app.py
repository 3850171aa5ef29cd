from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
from pathlib import Path

from ingest.pr_fetcher.config import Settings
from ingest.pr_fetcher.extract import FIELDS
from ingest.pr_fetcher.github import GitHubClient
from ingest.pr_fetcher.sinks import csv_filename, write_csv
from ingest.pr_fetcher.service import FetchError, check_rate_limit, fetch_pull_requests, test_auth

app = FastAPI(title="PR Fetcher API")

# Where to save by default, shared with the CLI
OUTPUT_DIR = Path(Settings().output_dir).resolve()

class FetchRequest(BaseModel):
    owner: str = Field(..., min_length=1, examples=["octocat"])
    repo: str  = Field(..., min_length=1, examples=["hello-world"])
    state: str = Field("all", pattern="^(open|closed|all)$")
    limit: int = Field(1000, ge=0)
    author: str | None = None
    filename: str | None = None  # optional override for output file name

class FetchResponse(BaseModel):
    saved_path: str
    rows: int
    owner: str
    repo: str
    state: str

class AuthResponse(BaseModel):
    authenticated: bool
    login: str | None = None
    limit: int | None = None
    error: str | None = None

@app.post("/fetch_prs", response_model=FetchResponse)
def fetch_prs(req: FetchRequest):
    client = GitHubClient(Settings())

    # pick output file under OUTPUT_DIR
    if req.filename:
        out = OUTPUT_DIR / Path(req.filename).name
        if not out.name.endswith(".csv"):
            out = out.with_suffix(".csv")
    else:
        out = OUTPUT_DIR / csv_filename(req.owner, req.repo)

    try:
        rows = fetch_pull_requests(
            client, req.owner, req.repo,
            state=req.state, limit=req.limit, author=req.author,
        )
        write_csv(rows, out, fieldnames=FIELDS)
    except (FetchError, OSError) as e:
        raise HTTPException(status_code=500, detail=str(e))
    return FetchResponse(saved_path=str(out), rows=len(rows), owner=req.owner, repo=req.repo, state=req.state)

@app.get("/rate_limit")
def rate_limit():
    status = check_rate_limit(GitHubClient(Settings()))
    if not status.ok:
        raise HTTPException(status_code=502, detail=f"Rate limit check failed: {status.error}")
    return status.as_dict()

@app.get("/test_auth", response_model=AuthResponse)
def auth():
    result = test_auth(GitHubClient(Settings()))
    return AuthResponse(authenticated=result.ok, login=result.login, limit=result.limit, error=result.error)
