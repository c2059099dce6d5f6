"""
Test configuration for wallettypes tests.
"""

from __future__ import annotations

import pytest

from wallettypes.bitcoin import ConfirmationTime, OutPoint, Transaction, TxIn, TxOut
from wallettypes.keychain import KeychainKind
from wallettypes.utxo import LocalUtxo

# P2WPKH scriptPubKey (OP_0 <20-byte-pubkeyhash>)
P2WPKH_SCRIPT = "0014" + "ab" * 20


@pytest.fixture
def sample_outpoint() -> OutPoint:
    return OutPoint(txid="aa" * 32, vout=1)


@pytest.fixture
def sample_txout() -> TxOut:
    return TxOut(value=100_000, script_pubkey=P2WPKH_SCRIPT)


@pytest.fixture
def prev_tx() -> Transaction:
    """Previous transaction with three outputs of distinct value."""
    return Transaction(
        version=2,
        inputs=[TxIn(previous_output=OutPoint(txid="11" * 32, vout=0))],
        outputs=[
            TxOut(value=10_000, script_pubkey=P2WPKH_SCRIPT),
            TxOut(value=20_000, script_pubkey=P2WPKH_SCRIPT),
            TxOut(value=30_000, script_pubkey="0014" + "cd" * 20),
        ],
    )


@pytest.fixture
def local_utxo(sample_outpoint: OutPoint, sample_txout: TxOut) -> LocalUtxo:
    return LocalUtxo(
        outpoint=sample_outpoint,
        txout=sample_txout,
        keychain=KeychainKind.EXTERNAL,
        derivation_index=5,
        confirmation_time=ConfirmationTime.confirmed(height=800_000, time=1_690_000_000),
    )
