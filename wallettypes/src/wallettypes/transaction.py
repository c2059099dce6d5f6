"""
Wallet transaction history entries.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wallettypes.bitcoin import TXID_PATTERN, ConfirmationTime, Transaction


class TransactionDetails(BaseModel):
    """
    A wallet-relevant transaction.

    Entries sort by confirmation status (confirmed before unconfirmed, then
    by height) and then by txid in internal byte order (the reverse of the
    display hex), giving a deterministic history listing.
    Equality still compares every field.
    """

    model_config = ConfigDict(frozen=True)

    transaction: Transaction | None = None  # None if pruned or never fetched
    txid: str = Field(..., pattern=TXID_PATTERN)
    received: int = Field(..., ge=0, description="Sum of owned outputs (sats)")
    sent: int = Field(..., ge=0, description="Sum of owned inputs (sats)")
    fee: int | None = Field(default=None, ge=0)  # None = unknown, not zero
    confirmation_time: ConfirmationTime = Field(default_factory=ConfirmationTime.unconfirmed)

    @field_validator("txid")
    @classmethod
    def normalize_txid(cls, v: str) -> str:
        return v.lower()

    @property
    def net(self) -> int:
        """Net value flow into the wallet (negative when spending)."""
        return self.received - self.sent

    @property
    def is_confirmed(self) -> bool:
        return self.confirmation_time.is_confirmed

    def sort_key(self) -> tuple[tuple[int, int, int], bytes]:
        # Txids compare in internal byte order, the reverse of the display hex
        return (self.confirmation_time.sort_key(), bytes.fromhex(self.txid)[::-1])

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, TransactionDetails):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, TransactionDetails):
            return NotImplemented
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, TransactionDetails):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, TransactionDetails):
            return NotImplemented
        return self.sort_key() >= other.sort_key()


def sort_transactions(transactions: Iterable[TransactionDetails]) -> list[TransactionDetails]:
    """Return transactions in history order."""
    return sorted(transactions, key=TransactionDetails.sort_key)
