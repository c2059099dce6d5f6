"""
Bitcoin primitives consumed by the wallet types.

These are supplied by the transaction, PSBT and chain-state layers; only the
fields the wallet types read are modelled here. Txids are RPC-style hex
(big-endian display order), scripts are hex strings.
"""

from __future__ import annotations

import hashlib
import struct
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

HEX_PATTERN = r"^([0-9a-fA-F]{2})*$"
TXID_PATTERN = r"^[0-9a-fA-F]{64}$"


def varint(n: int) -> bytes:
    """Encode integer as Bitcoin varint."""
    if n < 0xFD:
        return bytes([n])
    elif n <= 0xFFFF:
        return bytes([0xFD]) + struct.pack("<H", n)
    elif n <= 0xFFFFFFFF:
        return bytes([0xFE]) + struct.pack("<I", n)
    else:
        return bytes([0xFF]) + struct.pack("<Q", n)


class OutPoint(BaseModel):
    """Location of a transaction output: txid and output index."""

    model_config = ConfigDict(frozen=True)

    txid: str = Field(..., pattern=TXID_PATTERN)
    vout: int = Field(..., ge=0, le=0xFFFFFFFF)

    @field_validator("txid")
    @classmethod
    def normalize_txid(cls, v: str) -> str:
        return v.lower()

    def serialize(self) -> bytes:
        # txid is in RPC format (big-endian), reversed for raw tx
        return bytes.fromhex(self.txid)[::-1] + struct.pack("<I", self.vout)

    def __str__(self) -> str:
        return f"{self.txid}:{self.vout}"

    @classmethod
    def from_str(cls, s: str) -> OutPoint:
        """Parse the ``txid:vout`` form."""
        parts = s.split(":")
        if len(parts) != 2:
            raise ValueError(f"Invalid outpoint format: {s}")
        return cls(txid=parts[0], vout=int(parts[1]))


class TxOut(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: int = Field(..., ge=0, description="Output value in sats")
    script_pubkey: str = Field(..., pattern=HEX_PATTERN)

    def serialize(self) -> bytes:
        script = bytes.fromhex(self.script_pubkey)
        return struct.pack("<Q", self.value) + varint(len(script)) + script


class TxIn(BaseModel):
    model_config = ConfigDict(frozen=True)

    previous_output: OutPoint
    script_sig: str = Field(default="", pattern=HEX_PATTERN)
    sequence: int = Field(default=0xFFFFFFFF, ge=0, le=0xFFFFFFFF)

    def serialize(self) -> bytes:
        script = bytes.fromhex(self.script_sig)
        return (
            self.previous_output.serialize()
            + varint(len(script))
            + script
            + struct.pack("<I", self.sequence)
        )


class Transaction(BaseModel):
    """
    A Bitcoin transaction without witness data.

    Witnesses do not contribute to the txid, so they are not carried here.
    """

    model_config = ConfigDict(frozen=True)

    version: int = 2
    inputs: tuple[TxIn, ...] = ()
    outputs: tuple[TxOut, ...] = ()
    lock_time: int = Field(default=0, ge=0, le=0xFFFFFFFF)

    def serialize(self) -> bytes:
        """Legacy (non-witness) serialization."""
        result = struct.pack("<i", self.version)
        result += varint(len(self.inputs))
        for inp in self.inputs:
            result += inp.serialize()
        result += varint(len(self.outputs))
        for out in self.outputs:
            result += out.serialize()
        result += struct.pack("<I", self.lock_time)
        return result

    def txid(self) -> str:
        """Double SHA256 of the legacy serialization, in display order."""
        digest = hashlib.sha256(hashlib.sha256(self.serialize()).digest()).digest()
        return digest[::-1].hex()


class PsbtInput(BaseModel):
    """
    The PSBT input fields needed to spend an output we do not own.

    ``non_witness_utxo`` is the full previous transaction (required for
    legacy inputs), ``witness_utxo`` is just the spent output (enough for
    segwit inputs).
    """

    model_config = ConfigDict(frozen=True)

    non_witness_utxo: Transaction | None = None
    witness_utxo: TxOut | None = None


class ConfirmationTime(BaseModel):
    """
    Confirmation status of a transaction.

    Confirmed: ``height`` is the block height and ``time`` the block timestamp.
    Unconfirmed: ``height`` is None and ``time`` is when the transaction was
    last seen in the mempool.

    Ordering: every confirmed status comes before every unconfirmed one.
    Confirmed statuses order by (height, time), unconfirmed ones by last seen.
    """

    model_config = ConfigDict(frozen=True)

    height: int | None = Field(default=None, ge=0, le=0xFFFFFFFF)
    time: int = Field(default=0, ge=0)

    @classmethod
    def confirmed(cls, height: int, time: int) -> ConfirmationTime:
        return cls(height=height, time=time)

    @classmethod
    def unconfirmed(cls, last_seen: int = 0) -> ConfirmationTime:
        return cls(height=None, time=last_seen)

    @property
    def is_confirmed(self) -> bool:
        return self.height is not None

    @property
    def last_seen(self) -> int | None:
        return None if self.is_confirmed else self.time

    def sort_key(self) -> tuple[int, int, int]:
        if self.height is not None:
            return (0, self.height, self.time)
        return (1, 0, self.time)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, ConfirmationTime):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, ConfirmationTime):
            return NotImplemented
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, ConfirmationTime):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, ConfirmationTime):
            return NotImplemented
        return self.sort_key() >= other.sort_key()
