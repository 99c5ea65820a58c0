"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://api.airmap.com/elevation/v1/ele/"


@dataclass(frozen=True, slots=True)
class Settings:
    """Application settings populated from environment variables."""

    api_url: str = DEFAULT_API_URL
    api_key: str | None = None
    api_key_header: str = "X-API-Key"
    connect_timeout: float = 10.0
    read_timeout: float = 10.0
    max_workers: int = 8

    @property
    def timeout(self) -> tuple[float, float]:
        """Connect and read timeouts in the form ``requests`` expects."""
        return (self.connect_timeout, self.read_timeout)

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables.

        Returns:
            A frozen Settings instance with values from the environment.
        """
        return cls(
            api_url=os.getenv("ELEVATION_API_URL", DEFAULT_API_URL),
            api_key=os.getenv("ELEVATION_API_KEY") or None,
            api_key_header=os.getenv("ELEVATION_API_KEY_HEADER", "X-API-Key"),
            connect_timeout=float(os.getenv("ELEVATION_CONNECT_TIMEOUT", "10")),
            read_timeout=float(os.getenv("ELEVATION_READ_TIMEOUT", "10")),
            max_workers=int(os.getenv("MAX_WORKERS", "8")),
        )
