"""POAP vendor access: credential cache and REST client."""

from poap_minter.poap.auth import CredentialCache
from poap_minter.poap.client import PoapClient

__all__ = ["CredentialCache", "PoapClient"]
