"""
wallettypes - Value types shared by Bitcoin wallet components

Provides fee rates, keychain kinds, UTXO models and transaction history
entries consumed by coin selection, transaction building and balance views.
"""

__version__ = "0.1.0"

from wallettypes.bitcoin import (
    ConfirmationTime,
    OutPoint,
    PsbtInput,
    Transaction,
    TxIn,
    TxOut,
)
from wallettypes.constants import (
    DEFAULT_MIN_RELAY_FEE_SAT_PER_VB,
    SATS_PER_BTC,
    WITNESS_SCALE_FACTOR,
)
from wallettypes.fee_rate import (
    DEFAULT_MIN_RELAY_FEE,
    FeeRate,
    InvalidFeeRateError,
    vbytes,
)
from wallettypes.keychain import KeychainKind
from wallettypes.transaction import TransactionDetails, sort_transactions
from wallettypes.utxo import (
    ForeignUtxo,
    LocalUtxo,
    MissingUtxoDataError,
    Utxo,
    WeightedUtxo,
)

__all__ = [
    "ConfirmationTime",
    "DEFAULT_MIN_RELAY_FEE",
    "DEFAULT_MIN_RELAY_FEE_SAT_PER_VB",
    "FeeRate",
    "ForeignUtxo",
    "InvalidFeeRateError",
    "KeychainKind",
    "LocalUtxo",
    "MissingUtxoDataError",
    "OutPoint",
    "PsbtInput",
    "SATS_PER_BTC",
    "Transaction",
    "TransactionDetails",
    "TxIn",
    "TxOut",
    "Utxo",
    "WITNESS_SCALE_FACTOR",
    "WeightedUtxo",
    "sort_transactions",
    "vbytes",
]
