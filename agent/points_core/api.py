"""
Points API calls — account read and point grant.

Both calls are blocking (run from cycle worker threads, never from the
main thread) and raise typed RemoteError subclasses on failure.
No call is retried here; read retries live in the session adapter only.
"""

import requests
from requests.utils import quote

from .config import log, server_url
from .constants import API_TIMEOUT_READ, API_TIMEOUT_GRANT
from .errors import NetworkError, ProtocolError, DecodeError
from .models import AccountSnapshot
from . import http_client


class AccountClient:
    """Client for /api/getUser and /api/addPointGame."""

    def __init__(self, base_url=None, session=None):
        self.base_url = (base_url or server_url()).rstrip("/")
        self.session = session or http_client.create_session()

    def close(self):
        self.session.close()

    # ─── Account read ────────────────────────────────────────

    def fetch_account(self, uid):
        """GET /api/getUser/{uid} → AccountSnapshot."""
        url = f"{self.base_url}/api/getUser/{quote(uid, safe='')}"
        try:
            resp = self.session.get(url, timeout=API_TIMEOUT_READ)
        except requests.RequestException as e:
            log.warning("Account read network error: %s", e)
            raise NetworkError(f"Error fetching user data: {e}") from e

        self._check_status(resp, "Error fetching user data")
        snapshot = AccountSnapshot.from_json(self._decode(resp, "Error fetching user data"))
        log.debug("Account read OK | uid=%s | points=%s", snapshot.uid, snapshot.points)
        return snapshot

    # ─── Point grant ─────────────────────────────────────────

    def grant_points(self, uid, email, device_id):
        """POST /api/addPointGame. Returns the decoded body (has `message`)."""
        url = f"{self.base_url}/api/addPointGame"
        payload = {"uid": uid, "email": email, "deviceId": device_id}
        headers = {"Content-Type": "application/json; charset=UTF-8"}
        try:
            resp = self.session.post(url, json=payload, headers=headers, timeout=API_TIMEOUT_GRANT)
        except requests.RequestException as e:
            log.warning("Point grant network error: %s", e)
            raise NetworkError(f"Error adding points: {e}") from e

        self._check_status(resp, "Error adding points")
        data = self._decode(resp, "Error adding points")
        if not isinstance(data, dict):
            raise DecodeError(f"Error adding points: expected a JSON object, got {type(data).__name__}")
        log.info("Point grant OK | uid=%s | message=%s", uid, data.get("message", ""))
        return data

    # ─── Helpers ─────────────────────────────────────────────

    @staticmethod
    def _check_status(resp, context):
        if 200 <= resp.status_code < 300:
            return
        log.warning("%s: HTTP %d — %s", context, resp.status_code, resp.text[:200])
        raise ProtocolError(f"{context}: HTTP {resp.status_code}: {resp.reason}", resp.status_code)

    @staticmethod
    def _decode(resp, context):
        try:
            return resp.json()
        except ValueError as e:
            log.warning("%s: undecodable body — %s", context, resp.text[:200])
            raise DecodeError(f"{context}: invalid JSON response ({e})") from e
