"""Runtime settings — explicit root path plus GitHub access, read from env vars."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_BUNDLES_DIR = "Bundles"
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_GITHUB_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    """Configuration injected into the services.

    Services never look at the process working directory; ``root_path`` is
    the single source of truth for where ``<bundles_dir>/<module>`` lives.
    """

    root_path: Path
    bundles_dir: str = DEFAULT_BUNDLES_DIR
    github_token: str | None = None
    github_api_url: str = DEFAULT_GITHUB_API_URL
    github_timeout: float = DEFAULT_GITHUB_TIMEOUT

    @property
    def bundles_path(self) -> Path:
        return self.root_path / self.bundles_dir

    @classmethod
    def from_env(
        cls,
        root_path: str | Path | None = None,
        github_token: str | None = None,
    ) -> Settings:
        """Build settings from explicit arguments, falling back to env vars.

        Reads:
            BUNDLESYNC_ROOT            — working root (default: current directory)
            BUNDLESYNC_BUNDLES_DIR     — bundles directory name (default: Bundles)
            GITHUB_TOKEN / GH_TOKEN    — GitHub access token
            BUNDLESYNC_GITHUB_API_URL  — API base URL
            BUNDLESYNC_GITHUB_TIMEOUT  — request timeout in seconds
        """
        root = root_path or os.environ.get("BUNDLESYNC_ROOT") or os.getcwd()
        token = github_token or os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN")
        return cls(
            root_path=Path(root),
            bundles_dir=os.environ.get("BUNDLESYNC_BUNDLES_DIR", DEFAULT_BUNDLES_DIR),
            github_token=token or None,
            github_api_url=os.environ.get("BUNDLESYNC_GITHUB_API_URL", DEFAULT_GITHUB_API_URL),
            github_timeout=_env_float("BUNDLESYNC_GITHUB_TIMEOUT", DEFAULT_GITHUB_TIMEOUT),
        )


def _env_float(key: str, default: float) -> float:
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default
