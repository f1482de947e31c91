"""HTTP API for the quiz frontend."""

from poap_minter.api.server import MinterRoutes, create_app

__all__ = ["MinterRoutes", "create_app"]
