"""HTTP API - mint, event and token endpoints served with aiohttp."""

from __future__ import annotations

import logging
from dataclasses import asdict

from aiohttp import web

from poap_minter.errors import PoapMinterError
from poap_minter.interfaces.vendor import PoapVendor
from poap_minter.mint.presenter import MintPresenter
from poap_minter.mint.service import MintService

log = logging.getLogger(__name__)


class MinterRoutes:
    """Request handlers. Every failure is answered as ``{"error": ...}``."""

    def __init__(
        self,
        service: MintService,
        vendor: PoapVendor,
        presenter: MintPresenter,
    ) -> None:
        self._service = service
        self._vendor = vendor
        self._presenter = presenter

    async def mint(self, request: web.Request) -> web.Response:
        """POST /api/poap/mint  {"personalityType": ..., "address": ...}"""
        try:
            body = await request.json()
        except ValueError:
            return web.json_response({"error": "Invalid JSON body"}, status=400)
        if not isinstance(body, dict):
            return web.json_response({"error": "Invalid JSON body"}, status=400)

        result = await self._service.mint(
            body.get("personalityType", ""), body.get("address", ""),
        )
        payload, status = self._presenter.to_response(result)
        return web.json_response(payload, status=status)

    async def event(self, request: web.Request) -> web.Response:
        """GET /api/poap/event/{event_id}"""
        try:
            event_id = int(request.match_info["event_id"])
        except ValueError:
            return web.json_response({"error": "Invalid event ID"}, status=400)

        try:
            event = await self._vendor.get_event(event_id)
        except PoapMinterError as exc:
            log.error("Error fetching event details: %s", exc)
            return web.json_response({"error": str(exc)}, status=500)
        return web.json_response(asdict(event))

    async def token(self, request: web.Request) -> web.Response:
        """GET /api/poap/token/{token_id}"""
        try:
            token_id = int(request.match_info["token_id"])
        except ValueError:
            return web.json_response({"error": "Invalid token ID"}, status=400)

        try:
            token = await self._vendor.get_token(token_id)
        except PoapMinterError as exc:
            log.error("Error fetching token details: %s", exc)
            return web.json_response({"error": str(exc)}, status=500)
        return web.json_response(asdict(token))


def create_app(
    service: MintService,
    vendor: PoapVendor,
    presenter: MintPresenter | None = None,
) -> web.Application:
    routes = MinterRoutes(service, vendor, presenter or MintPresenter())
    app = web.Application()
    app.router.add_post("/api/poap/mint", routes.mint)
    app.router.add_get("/api/poap/event/{event_id}", routes.event)
    app.router.add_get("/api/poap/token/{token_id}", routes.token)
    return app
