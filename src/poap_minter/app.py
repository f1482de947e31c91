"""Component wiring - builds the mint stack from a MinterConfig."""

from __future__ import annotations

import logging

from aiohttp import web

from poap_minter.api.server import create_app
from poap_minter.interfaces.delay import SettleDelay
from poap_minter.interfaces.vendor import PoapVendor
from poap_minter.mint.delay import FixedSettleDelay
from poap_minter.mint.mapping import EventMapping
from poap_minter.mint.orchestrator import ClaimOrchestrator
from poap_minter.mint.presenter import MintPresenter
from poap_minter.mint.recovery import OwnershipRecovery
from poap_minter.mint.service import MintService
from poap_minter.models.config import MinterConfig
from poap_minter.poap.auth import CredentialCache
from poap_minter.poap.client import PoapClient

log = logging.getLogger(__name__)


class MinterApp:
    """Owns one long-lived instance of every mint component.

    ``vendor`` and ``delay`` can be swapped (tests use an in-memory vendor
    and a zero delay).
    """

    def __init__(
        self,
        cfg: MinterConfig,
        vendor: PoapVendor | None = None,
        delay: SettleDelay | None = None,
    ) -> None:
        self.cfg = cfg
        self.credentials = CredentialCache()
        self.vendor: PoapVendor = vendor or PoapClient(cfg, self.credentials)
        self.delay: SettleDelay = delay or FixedSettleDelay(cfg.claim.settle_delay)

        self.mapping = EventMapping.from_config(cfg)
        self.presenter = MintPresenter()
        self.orchestrator = ClaimOrchestrator(
            self.vendor,
            self.delay,
            claim_rounds=cfg.claim.claim_rounds,
            requested_codes=cfg.claim.requested_codes,
        )
        self.recovery = OwnershipRecovery(self.vendor, self.mapping, self.presenter)
        self.service = MintService(
            self.mapping, self.orchestrator, self.recovery, self.presenter,
        )

    def web_app(self) -> web.Application:
        return create_app(self.service, self.vendor, self.presenter)


def run_server(cfg: MinterConfig, host: str | None = None, port: int | None = None) -> None:
    """Entry point for serving the HTTP API."""
    app = MinterApp(cfg)
    host = host or cfg.host
    port = port or cfg.port
    log.info("Starting POAP minter API on %s:%d", host, port)
    log.info("  POAP API: %s", cfg.api_base)
    log.info(
        "  Claim rounds: %d, settle delay: %.1fs",
        cfg.claim.claim_rounds, cfg.claim.settle_delay,
    )
    web.run_app(app.web_app(), host=host, port=port, print=None)
