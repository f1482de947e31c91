"""POAP vendor client - credentialed REST calls via httpx."""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

import httpx

from poap_minter.errors import ConfigurationError, VendorError, VendorErrorKind
from poap_minter.models.config import PLACEHOLDER, MinterConfig
from poap_minter.models.poap import (
    ClaimCode,
    ClaimRecord,
    Credential,
    EventDetails,
    TokenDetails,
)
from poap_minter.poap.auth import CredentialCache

log = logging.getLogger(__name__)

T = TypeVar("T")


def _vendor_message(resp: httpx.Response) -> str | None:
    """Pull the human-readable message out of a vendor error body."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return None


def _build(action: str, builder: Callable[[Any], T], data: Any, shape: type) -> T:
    """Build a model from a 2xx body, raising VendorError on an unexpected shape."""
    if not isinstance(data, shape):
        raise VendorError(
            f"Failed to {action}: expected a JSON {shape.__name__}, "
            f"got {type(data).__name__}"
        )
    try:
        return builder(data)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise VendorError(f"Failed to {action}: malformed response ({exc!r})") from exc


class PoapClient:
    """Talks to the POAP API (api.poap.tech) and its OAuth issuer.

    Every call carries the bearer credential from the shared
    CredentialCache plus the X-API-Key header. Failures are raised as
    VendorError with a classified kind.
    """

    def __init__(self, cfg: MinterConfig, cache: CredentialCache | None = None) -> None:
        self._cfg = cfg
        self._api_base = cfg.api_base.rstrip("/")
        self._auth_base = cfg.auth_base.rstrip("/")
        self._timeout = cfg.request_timeout
        self._cache = cache or CredentialCache()

    def _require_credentials(self) -> None:
        missing = [
            name for name in ("api_key", "client_id", "client_secret")
            if not getattr(self._cfg, name) or getattr(self._cfg, name) == PLACEHOLDER
        ]
        if missing:
            raise ConfigurationError(
                "POAP vendor credentials are not configured: " + ", ".join(missing)
            )

    # ── Credential ───────────────────────────────────────

    async def get_credential(self) -> Credential:
        """Return the cached credential, requesting a new one if expired."""
        self._require_credentials()

        cached = self._cache.get()
        if cached is not None:
            return cached

        log.info("Requesting new POAP access token")
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(
                    f"{self._auth_base}/oauth/token",
                    json={
                        "audience": self._cfg.audience,
                        "grant_type": "client_credentials",
                        "client_id": self._cfg.client_id,
                        "client_secret": self._cfg.client_secret,
                    },
                )
        except httpx.HTTPError as exc:
            raise VendorError(f"Failed to get POAP access token: {exc}") from exc

        if resp.status_code >= 400:
            raise VendorError(
                f"Failed to get POAP access token: {resp.status_code} {resp.text[:200]}",
                VendorErrorKind.TRANSPORT,
                resp.status_code,
            )

        try:
            data = resp.json()
            token = data["access_token"]
            expires_in = float(data.get("expires_in", 0))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            log.error("Malformed POAP token response: %r", exc)
            raise VendorError(
                f"Failed to get POAP access token: malformed token response ({exc!r})"
            ) from exc
        if not isinstance(token, str) or not token:
            raise VendorError("Failed to get POAP access token: empty access_token")

        return self._cache.store(
            token=token,
            expires_in=expires_in,
            safety_margin=self._cfg.token_safety_margin,
        )

    # ── Transport ────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        action: str,
        *,
        params: dict | None = None,
        json: dict | None = None,
        allow_not_found: bool = False,
    ) -> Any:
        """Issue a credentialed request and return the decoded JSON body.

        With ``allow_not_found`` a 404 returns None instead of raising.
        """
        credential = await self.get_credential()
        headers = {
            "X-API-Key": self._cfg.api_key,
            "Authorization": f"Bearer {credential.token}",
            "Accept": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.request(
                    method, f"{self._api_base}{path}",
                    params=params, json=json, headers=headers,
                )
        except httpx.HTTPError as exc:
            log.error("POAP %s failed: %s", action, exc)
            raise VendorError(f"Failed to {action}: {exc}") from exc

        if allow_not_found and resp.status_code == 404:
            return None

        if resp.status_code >= 400:
            message = _vendor_message(resp) or (
                f"Failed to {action}: {resp.status_code} {resp.text[:200]}"
            )
            error = VendorError.from_message(message, resp.status_code)
            log.warning(
                "POAP %s rejected (%d, %s): %s",
                action, resp.status_code, error.kind.value, message,
            )
            raise error

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise VendorError(f"Failed to {action}: invalid JSON response") from exc

    # ── Pool operations ──────────────────────────────────

    async def list_codes(self, event_id: int, secret_code: str) -> list[ClaimCode]:
        """POST /event/{id}/qr-codes - pool snapshot for an event."""
        data = await self._request(
            "POST", f"/event/{event_id}/qr-codes", "get QR codes",
            json={"secret_code": secret_code},
        )
        if data is None:
            return []
        return _build(
            "get QR codes",
            lambda items: [ClaimCode.from_api(item) for item in items],
            data, list,
        )

    async def check_code_status(self, qr_hash: str) -> ClaimRecord:
        """GET /actions/claim-qr - claim status of one QR hash."""
        data = await self._request(
            "GET", "/actions/claim-qr", "check QR code status",
            params={"qr_hash": qr_hash},
        )
        return _build(
            "check QR code status", ClaimRecord.from_api,
            data if data is not None else {"qr_hash": qr_hash}, dict,
        )

    async def redeem_code(self, qr_hash: str, address: str) -> ClaimRecord:
        """POST /actions/claim-qr - mint the POAP behind a QR hash to an address."""
        data = await self._request(
            "POST", "/actions/claim-qr", "claim POAP",
            json={
                "qr_hash": qr_hash,
                "address": address,
                "sendEmail": True,
                "secret": "NOT_REQUIRED_ANYMORE",
            },
        )
        log.info("Redeemed QR %s for %s", qr_hash, address)
        return _build(
            "claim POAP", ClaimRecord.from_api,
            data if data is not None else {"qr_hash": qr_hash, "claimed": True}, dict,
        )

    async def request_more_codes(self, event_id: int, requested_codes: int = 25) -> None:
        """POST /redeem-requests - ask for more codes in an event's pool."""
        await self._request(
            "POST", "/redeem-requests", "request more codes",
            json={"event_id": event_id, "requested_codes": requested_codes},
        )
        log.info("Requested %d more codes for event %d", requested_codes, event_id)

    # ── Lookups ──────────────────────────────────────────

    async def get_event(self, event_id: int) -> EventDetails:
        data = await self._request("GET", f"/events/id/{event_id}", "get event details")
        return _build("get event details", EventDetails.from_api, data, dict)

    async def get_token(self, token_id: int) -> TokenDetails:
        data = await self._request("GET", f"/token/{token_id}", "get token details")
        return _build("get token details", TokenDetails.from_api, data, dict)

    async def scan_address_for_event(self, address: str, event_id: int) -> TokenDetails | None:
        """GET /actions/scan/{address}/{event_id} - POAP held for an event.

        The endpoint answers with either a list or a single object.
        """
        data = await self._request(
            "GET", f"/actions/scan/{address}/{event_id}", "scan address",
            allow_not_found=True,
        )
        if isinstance(data, list):
            data = data[0] if data else None
        if data is None or data == {}:
            return None
        token = _build("scan address", TokenDetails.from_api, data, dict)
        if token.id is None:
            log.warning("Scan for %s / event %d returned a POAP without token id", address, event_id)
        return token
