"""
Server-side analytics via PostHog's capture endpoint.

Tracking is disabled when no POSTHOG_KEY is configured and never raises:
analytics must not affect the reply the user sees.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

from ..core.config import AnalyticsSettings

logger = logging.getLogger(__name__)


class AnalyticsClient:
    """Fire-and-forget event sink."""

    def __init__(
        self,
        settings: Optional[AnalyticsSettings] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings if settings is not None else AnalyticsSettings.from_env()
        self.session = session or requests.Session()

    @property
    def is_enabled(self) -> bool:
        return self.settings.enabled

    def track(
        self,
        distinct_id: str,
        event: str,
        properties: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """Send one event. Returns True when the capture endpoint accepted it."""
        if not self.is_enabled:
            return False

        body = {
            "api_key": self.settings.api_key,
            "event": event,
            "distinct_id": distinct_id,
            "properties": {
                **(properties or {}),
                "environment": self.settings.environment,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        }
        try:
            resp = self.session.post(
                f"{self.settings.host}/capture/",
                json=body,
                timeout=self.settings.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"[Analytics] Tracking '{event}' failed: {e}")
            return False

        if resp.status_code >= 400:
            logger.warning(f"[Analytics] Capture rejected '{event}' ({resp.status_code}): {resp.text[:200]}")
            return False
        return True

    def __call__(self, distinct_id: str, event: str, properties: Dict[str, Any]) -> None:
        self.track(distinct_id, event, properties)
