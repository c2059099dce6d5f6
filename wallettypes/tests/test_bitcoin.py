"""
Tests for wallettypes.bitcoin
"""

import pytest
from pydantic import ValidationError

from wallettypes.bitcoin import ConfirmationTime, OutPoint, Transaction, TxIn, TxOut, varint

GENESIS_COINBASE_TXID = "4a5e1e4baab89f3a32518a88c31bc87f618f76673e2cc77ab2127b7afdeda33b"
GENESIS_SCRIPT_SIG = (
    "04ffff001d0104455468652054696d65732030332f4a616e2f32303039204368616e63656c6c6f72"
    "206f6e206272696e6b206f66207365636f6e64206261696c6f757420666f722062616e6b73"
)
GENESIS_SCRIPT_PUBKEY = (
    "4104678afdb0fe5548271967f1a67130b7105cd6a828e03909a67962e0ea1f61deb649f6bc3f4cef38"
    "c4f35504e51ec112de5c384df7ba0b8d578a4c702b6bf11d5fac"
)


def genesis_coinbase() -> Transaction:
    return Transaction(
        version=1,
        inputs=[
            TxIn(
                previous_output=OutPoint(txid="00" * 32, vout=0xFFFFFFFF),
                script_sig=GENESIS_SCRIPT_SIG,
            )
        ],
        outputs=[TxOut(value=5_000_000_000, script_pubkey=GENESIS_SCRIPT_PUBKEY)],
        lock_time=0,
    )


class TestOutPoint:
    def test_str_roundtrip(self) -> None:
        op = OutPoint(txid="ab" * 32, vout=3)
        assert str(op) == "ab" * 32 + ":3"
        assert OutPoint.from_str(str(op)) == op

    def test_txid_normalized(self) -> None:
        assert OutPoint(txid="AB" * 32, vout=0).txid == "ab" * 32

    def test_invalid_txid(self) -> None:
        with pytest.raises(ValidationError):
            OutPoint(txid="abc", vout=0)

    def test_negative_vout(self) -> None:
        with pytest.raises(ValidationError):
            OutPoint(txid="ab" * 32, vout=-1)

    def test_invalid_str(self) -> None:
        with pytest.raises(ValueError, match="Invalid outpoint format"):
            OutPoint.from_str("ab" * 32)

    def test_serialize_reverses_txid(self) -> None:
        op = OutPoint(txid="00" * 31 + "01", vout=1)
        assert op.serialize() == b"\x01" + b"\x00" * 31 + b"\x01\x00\x00\x00"


class TestTxOut:
    def test_negative_value_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TxOut(value=-1, script_pubkey="00")

    def test_odd_hex_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TxOut(value=1, script_pubkey="001")


class TestTransaction:
    def test_genesis_txid(self) -> None:
        assert genesis_coinbase().txid() == GENESIS_COINBASE_TXID

    def test_genesis_serialization_size(self) -> None:
        assert len(genesis_coinbase().serialize()) == 204

    def test_json_roundtrip(self) -> None:
        tx = genesis_coinbase()
        assert Transaction.model_validate_json(tx.model_dump_json()) == tx


def test_varint():
    assert varint(0xFC) == b"\xfc"
    assert varint(0xFD) == b"\xfd\xfd\x00"
    assert varint(0x10000) == b"\xfe\x00\x00\x01\x00"
    assert varint(0x100000000) == b"\xff\x00\x00\x00\x00\x01\x00\x00\x00"


class TestConfirmationTime:
    def test_confirmed(self) -> None:
        ct = ConfirmationTime.confirmed(height=100, time=1_600_000_000)
        assert ct.is_confirmed
        assert ct.last_seen is None

    def test_unconfirmed(self) -> None:
        ct = ConfirmationTime.unconfirmed(last_seen=42)
        assert not ct.is_confirmed
        assert ct.last_seen == 42
        assert ConfirmationTime() == ConfirmationTime.unconfirmed()

    def test_confirmed_before_unconfirmed(self) -> None:
        confirmed = ConfirmationTime.confirmed(height=900_000, time=1_800_000_000)
        unconfirmed = ConfirmationTime.unconfirmed(last_seen=0)
        assert confirmed < unconfirmed
        assert unconfirmed > confirmed

    def test_confirmed_by_height_then_time(self) -> None:
        a = ConfirmationTime.confirmed(height=100, time=500)
        b = ConfirmationTime.confirmed(height=100, time=600)
        c = ConfirmationTime.confirmed(height=101, time=1)
        assert a < b < c

    def test_unconfirmed_by_last_seen(self) -> None:
        assert ConfirmationTime.unconfirmed(1) < ConfirmationTime.unconfirmed(2)
