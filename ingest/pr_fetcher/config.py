import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    token: str = os.getenv("GITHUB_TOKEN", "")
    api_base: str = os.getenv("GITHUB_API_URL", "https://api.github.com")
    per_page: int = int(os.getenv("PER_PAGE", "100"))
    limit: int = int(os.getenv("LIMIT", "1000"))
    state: str = os.getenv("STATE", "all")  # open|closed|all
    output_dir: str = os.getenv("OUTPUT_DIR", "./output")
    timeout: float = float(os.getenv("REQUEST_TIMEOUT", "30"))
    sleep_between_pages: float = float(os.getenv("SLEEP_BETWEEN_PAGES", "0"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
