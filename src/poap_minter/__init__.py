"""poap_minter - mints a personality quiz's POAP to the player's wallet."""

__version__ = "0.1.0"
