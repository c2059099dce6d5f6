"""
Unspent output models used by coin selection.

A Utxo is either local (owned by this wallet, full output data known) or
foreign (owned by someone else, described by PSBT input data).
"""

from __future__ import annotations

from typing import Annotated, Literal

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, RootModel, model_validator

from wallettypes.bitcoin import ConfirmationTime, OutPoint, PsbtInput, TxOut
from wallettypes.fee_rate import FeeRate
from wallettypes.keychain import KeychainKind


class MissingUtxoDataError(RuntimeError):
    """A foreign UTXO carries neither the previous transaction nor the spent output."""

    pass


class LocalUtxo(BaseModel):
    """An unspent output owned by the wallet."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["local"] = "local"
    outpoint: OutPoint
    txout: TxOut
    keychain: KeychainKind
    is_spent: bool = False
    derivation_index: int = Field(..., ge=0, le=0xFFFFFFFF)
    confirmation_time: ConfirmationTime = Field(default_factory=ConfirmationTime.unconfirmed)


class ForeignUtxo(BaseModel):
    """An unspent output owned by another wallet, described by its PSBT input."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["foreign"] = "foreign"
    outpoint: OutPoint
    psbt_input: PsbtInput

    @model_validator(mode="after")
    def check_utxo_data(self) -> ForeignUtxo:
        prev_tx = self.psbt_input.non_witness_utxo
        if prev_tx is None and self.psbt_input.witness_utxo is None:
            raise ValueError("Foreign UTXO needs non_witness_utxo or witness_utxo")
        if prev_tx is not None and self.outpoint.vout >= len(prev_tx.outputs):
            raise ValueError(
                f"Outpoint index {self.outpoint.vout} out of range for previous "
                f"transaction with {len(prev_tx.outputs)} outputs"
            )
        return self


class Utxo(RootModel[Annotated[LocalUtxo | ForeignUtxo, Field(discriminator="kind")]]):
    """
    An unspent transaction output, local or foreign.

    Serializes as the wrapped variant with a ``kind`` tag.
    """

    model_config = ConfigDict(frozen=True)

    @classmethod
    def local(cls, local_utxo: LocalUtxo) -> Utxo:
        return cls(local_utxo)

    @classmethod
    def foreign(cls, outpoint: OutPoint, psbt_input: PsbtInput) -> Utxo:
        return cls(ForeignUtxo(outpoint=outpoint, psbt_input=psbt_input))

    @property
    def is_local(self) -> bool:
        return isinstance(self.root, LocalUtxo)

    def outpoint(self) -> OutPoint:
        """Get the location of the UTXO."""
        return self.root.outpoint

    def txout(self) -> TxOut:
        """
        Get the output being spent.

        Foreign UTXOs resolve from the full previous transaction when present,
        falling back to the witness output.

        Raises:
            MissingUtxoDataError: foreign UTXO built without either field
                (only possible by bypassing validation)
        """
        utxo = self.root
        if isinstance(utxo, LocalUtxo):
            return utxo.txout

        prev_tx = utxo.psbt_input.non_witness_utxo
        if prev_tx is not None:
            return prev_tx.outputs[utxo.outpoint.vout]

        if utxo.psbt_input.witness_utxo is not None:
            return utxo.psbt_input.witness_utxo

        logger.error(f"Foreign UTXO {utxo.outpoint} has no previous output data")
        raise MissingUtxoDataError(f"Foreign UTXO {utxo.outpoint} has no previous output data")


class WeightedUtxo(BaseModel):
    """
    A Utxo with the weight its input adds once satisfied.

    ``satisfaction_weight`` is the weight of the witness data and scriptSig in
    weight units, used to keep the fee rate when coin selection adds the input.
    """

    model_config = ConfigDict(frozen=True)

    satisfaction_weight: int = Field(..., ge=0)
    utxo: Utxo

    def input_fee(self, fee_rate: FeeRate) -> int:
        """Fee in sats for the satisfaction weight at ``fee_rate``."""
        return fee_rate.fee_wu(self.satisfaction_weight)
