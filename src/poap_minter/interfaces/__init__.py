"""Protocol interfaces for poap_minter components."""

from poap_minter.interfaces.delay import SettleDelay
from poap_minter.interfaces.vendor import PoapVendor

__all__ = ["PoapVendor", "SettleDelay"]
