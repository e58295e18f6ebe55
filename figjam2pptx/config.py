"""
config.py: Environment configuration for the exporter.

Values come from environment variables, optionally seeded from a .env file
in the working directory.
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_PREFIX = "FIGJAM2PPTX_"

# Deepest container nesting accepted for MAX_DEPTH
MAX_DEPTH_LIMIT = 100


# Load .env file if it exists
def _load_dotenv(env_path: Path | None = None) -> None:
    env_path = env_path or Path.cwd() / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()
                    if key and value and key not in os.environ:
                        os.environ[key] = value


def _env(name: str, default: str) -> str:
    return os.environ.get(ENV_PREFIX + name, default)


class Settings:
    """Exporter settings loaded from environment variables."""

    def __init__(self):
        # Extraction
        self.max_depth: int = int(_env("MAX_DEPTH", "100"))

        # Output
        self.default_format: str = _env("DEFAULT_FORMAT", "json").lower()
        self.json_indent: int = int(_env("JSON_INDENT", "2"))
        self.dpi: int = int(_env("DPI", "96"))

        # Logging
        self.log_level: str = _env("LOG_LEVEL", "WARNING").upper()

        if not 1 <= self.max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(
                f"{ENV_PREFIX}MAX_DEPTH must be between 1 and {MAX_DEPTH_LIMIT}, got {self.max_depth}"
            )
        if self.dpi < 1:
            raise ValueError(f"{ENV_PREFIX}DPI must be positive, got {self.dpi}")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    _load_dotenv()
    return Settings()
