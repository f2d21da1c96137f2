"""Remote ledger sources."""

from monzoledger.client.base import LedgerSource
from monzoledger.client.monzo import MonzoClient

__all__ = ["LedgerSource", "MonzoClient"]
