"""
Configuration for the Mano engine.

Tuning thresholds are untuned heuristics kept in one frozen dataclass so
tests and experiments can swap them without touching module state.
Deployment settings come from the environment (and an optional .env file).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Thresholds:
    """Heuristic cut-offs used by the decision functions and the extractor."""
    # Length policy
    quick_question_max_chars: int = 50
    complex_query_min_chars: int = 200
    # Approach selector: "early in the conversation"
    socratic_history_limit: int = 3
    # Most recent turns used for prompt history and heuristics
    history_window: int = 10
    # Suggestion extractor
    grouping_proximity_chars: int = 200
    split_groups_on_prose: bool = True
    preview_max_chars: int = 50


DEFAULT_THRESHOLDS = Thresholds()


def load_dotenv(start: Optional[Path] = None) -> None:
    """Load the first .env found into os.environ (only vars not already set)."""
    here = start or Path.cwd()
    for parent in [here] + list(Path(__file__).resolve().parents):
        env_path = parent / ".env"
        if env_path.exists():
            for line in env_path.read_text().splitlines():
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" in line:
                    key, value = line.split("=", 1)
                    key, value = key.strip(), value.strip()
                    if key and key not in os.environ:
                        os.environ[key] = value
            break


@dataclass(frozen=True)
class AnalyticsSettings:
    """
    Where pipeline reports go.

    Configure via environment variables:
        POSTHOG_KEY: project API key (analytics disabled when empty)
        POSTHOG_HOST: capture host (default: EU cloud)
        MANO_ANALYTICS_TIMEOUT: request timeout in seconds
        MANO_ENVIRONMENT: "environment" property on every event
    """
    api_key: str = ""
    host: str = "https://eu.posthog.com"
    timeout: float = 3.0
    environment: str = "edge_function"

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls, read_dotenv: bool = True) -> "AnalyticsSettings":
        if read_dotenv:
            load_dotenv()
        timeout_raw = os.environ.get("MANO_ANALYTICS_TIMEOUT", "").strip()
        try:
            timeout = float(timeout_raw) if timeout_raw else cls.timeout
        except ValueError:
            timeout = cls.timeout
        return cls(
            api_key=os.environ.get("POSTHOG_KEY", "").strip(),
            host=os.environ.get("POSTHOG_HOST", cls.host).strip().rstrip("/") or cls.host,
            timeout=timeout,
            environment=os.environ.get("MANO_ENVIRONMENT", cls.environment).strip() or cls.environment,
        )
