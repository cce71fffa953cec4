# Project: aqi-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
client.py — Fetch air-quality readings and the signed-in user from the
air-data service.

Both endpoints take a bearer token:
    GET {api_url}/api/airdata  → [{"date": ..., "aqi": ..., "pm25": ...}, ...]
    GET {api_url}/api/user     → {"name": ..., "profilePic": ...}
"""

import requests

from aqi_insights.records import MeasurementRecord, load_records
from aqi_insights.utils import with_retry

DEFAULT_TIMEOUT_SECONDS = 15
AUTH_FAILURE_STATUSES = (401, 403)


class SessionExpiredError(Exception):
    """Raised when the service rejects the bearer token."""


def _get_json(api_url: str, endpoint: str, token: str, timeout: float):
    """GET an endpoint with the bearer token, retrying transient failures.

    Raises:
        SessionExpiredError: On HTTP 401/403 (never retried).
        RuntimeError: If all retry attempts fail.
    """
    url = f"{api_url.rstrip('/')}{endpoint}"
    headers = {"Authorization": f"Bearer {token}"}

    def _call():
        r = requests.get(url, headers=headers, timeout=timeout)
        if r.status_code in AUTH_FAILURE_STATUSES:
            raise SessionExpiredError(f"Session rejected by {endpoint} (HTTP {r.status_code})")
        r.raise_for_status()
        return r.json()

    return with_retry(_call, label=f"air-data service {endpoint}", no_retry=(SessionExpiredError,))


def fetch_air_data(
    api_url: str,
    token: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> list[MeasurementRecord]:
    """Fetch all air-quality readings visible to the session.

    Returns:
        Validated records in the order the service returned them.

    Raises:
        SessionExpiredError: If the token is rejected.
        RuntimeError: If all retries fail.
        MalformedRecordError: If any returned reading is invalid.
    """
    payload = _get_json(api_url, "/api/airdata", token, timeout)
    if not isinstance(payload, list):
        raise RuntimeError(f"Unexpected /api/airdata payload: expected a list, got {type(payload).__name__}")
    return load_records(payload)


def fetch_user(
    api_url: str,
    token: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> dict:
    """Fetch the signed-in user's profile.

    Returns:
        Dict with keys name (str) and profile_pic (str or None).
    """
    payload = _get_json(api_url, "/api/user", token, timeout)
    if not isinstance(payload, dict):
        raise RuntimeError(f"Unexpected /api/user payload: expected an object, got {type(payload).__name__}")
    return {
        "name": payload.get("name") or "Unknown user",
        "profile_pic": payload.get("profilePic"),
    }
