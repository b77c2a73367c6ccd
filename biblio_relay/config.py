import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from biblio_relay.logging_utils import resolve_level


def find_project_root(start: Path) -> Optional[Path]:
    for parent in [start, *start.parents]:
        if (parent / "pyproject.toml").exists():
            return parent
    return None


PROJECT_ROOT = find_project_root(Path(__file__).resolve())

ENV_PATH = PROJECT_ROOT / ".env" if PROJECT_ROOT else None

KNL_ENDPOINT = "https://lod.nl.go.kr/sparql"
JPSEARCH_ENDPOINT = "https://jpsearch.go.jp/rdf/sparql"
NDL_ENDPOINT = "https://id.ndl.go.jp/auth/ndla/sparql"

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Accept",
}


class RelaySettings(BaseModel):
    """
    Read-only startup configuration shared by every request the relay handles.
    """

    model_config = ConfigDict(frozen=True)

    host: str = "127.0.0.1"
    port: int = 8001
    user_agent: str = "KNL-Proxy/1.0"
    accept: str = "application/sparql-results+json"
    default_content_type: str = "application/json"
    cors_headers: Dict[str, str] = Field(default_factory=lambda: dict(CORS_HEADERS))
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, value: Optional[str]) -> str:
        return resolve_level(value)

    @property
    def public_url(self) -> str:
        return f"http://localhost:{self.port}"

    def outbound_headers(self) -> Dict[str, str]:
        return {"Accept": self.accept, "User-Agent": self.user_agent}


def load_env() -> bool:
    """
    Load the optional project `.env` file. Only LOG_LEVEL is read from it, and
    a file that sets nothing (empty or comments only) is accepted.
    """

    if ENV_PATH is None or not ENV_PATH.exists():
        return False
    load_dotenv(ENV_PATH)
    return True


def load_settings() -> RelaySettings:
    load_env()
    return RelaySettings(log_level=os.getenv("LOG_LEVEL"))


if __name__ == "__main__":
    print(f"Project root: {PROJECT_ROOT}")
    print(f"Env path: {ENV_PATH}")
    print(load_settings())
