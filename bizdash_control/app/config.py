from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


DEFAULT_BASE_URL = "http://localhost:3000/"


@dataclass(frozen=True)
class AppConfig:
    base_url: str
    timeout_seconds: float
    verify_ssl: bool
    access_token: str | None = None

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "AppConfig":
        _load_dotenv(env_file)
        config = cls(
            base_url=os.getenv("BIZDASH_BASE_URL", DEFAULT_BASE_URL).strip(),
            timeout_seconds=float(os.getenv("BIZDASH_TIMEOUT_SECONDS", "30")),
            verify_ssl=os.getenv("BIZDASH_VERIFY_SSL", "true").lower() == "true",
            access_token=os.getenv("BIZDASH_ACCESS_TOKEN") or None,
        )
        config.validate()
        return config

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("BIZDASH_BASE_URL must not be empty")
        if self.timeout_seconds <= 0:
            raise ValueError("BIZDASH_TIMEOUT_SECONDS must be greater than 0")


def _load_dotenv(path: str) -> None:
    dotenv_path = Path(path)
    if not dotenv_path.exists():
        return
    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())
