"""
Fee rate value type.

A FeeRate is stored as satoshis per virtual byte in IEEE-754 single
precision, matching the precision Bitcoin wallets have historically used for
fee estimates. Three external unit conventions are accepted:

- sat/vB   (wallet UIs, mempool explorers)
- sat/kwu  (weight based, 1000 wu = 250 vB)
- BTC/kvB  (Bitcoin Core ``estimatesmartfee``)

Absolute fees are always rounded up so a transaction never lands below the
rate it was built for.
"""

from __future__ import annotations

import math
import struct

from loguru import logger
from pydantic import BaseModel, ConfigDict, field_validator

from wallettypes.constants import (
    DEFAULT_MIN_RELAY_FEE_SAT_PER_VB,
    SAT_PER_VB_PER_BTC_PER_KVB,
    VBYTES_PER_KWU,
    WITNESS_SCALE_FACTOR,
)

# Smallest positive normal float32
F32_MIN_NORMAL = 1.1754943508222875e-38

# Absolute fees saturate at the unsigned 64-bit maximum
MAX_FEE_SATS = 2**64 - 1


class InvalidFeeRateError(ValueError):
    """Raised when a fee rate is negative, NaN, infinite or subnormal."""

    pass


def to_f32(value: float) -> float:
    """Round a Python float to the nearest float32 value."""
    try:
        return struct.unpack("<f", struct.pack("<f", float(value)))[0]
    except OverflowError:
        # Beyond float32 (or float) range: saturate to a signed infinity
        return math.inf if value > 0 else -math.inf


def vbytes(weight_units: int) -> int:
    """
    Convert transaction weight to virtual bytes.

    vbytes = ceil(weight_units / 4) per BIP141. Never rounds down, so fee
    estimates never undercount size.
    """
    if weight_units < 0:
        raise ValueError(f"Weight must be non-negative, got {weight_units}")
    return (weight_units + WITNESS_SCALE_FACTOR - 1) // WITNESS_SCALE_FACTOR


def is_valid_sat_per_vb(value: float) -> bool:
    """Check the stored-value invariant: normal or +0.0, never negative."""
    if math.isnan(value) or math.isinf(value):
        return False
    if math.copysign(1.0, value) < 0:
        return False
    return value == 0.0 or value >= F32_MIN_NORMAL


def _check_sat_per_vb(value: float) -> float:
    if not is_valid_sat_per_vb(value):
        logger.error(f"Refusing to build fee rate from {value!r} sat/vB")
        raise InvalidFeeRateError(
            f"Fee rate must be a normal non-negative number or +0.0, got {value!r} sat/vB"
        )
    return value


class FeeRate(BaseModel):
    """
    Fee rate in satoshis per virtual byte.

    Build instances with the unit constructors (``from_sat_per_vb``,
    ``from_sat_per_kvb``, ``from_sat_per_kwu``, ``from_btc_per_kvb``,
    ``from_vb``, ``from_wu``). ``FeeRate()`` is the default minimum relay fee.

    Invalid values raise InvalidFeeRateError. Callers must validate numbers
    coming from outside (RPC responses, user input) before converting.
    """

    model_config = ConfigDict(frozen=True)

    sat_per_vb: float = DEFAULT_MIN_RELAY_FEE_SAT_PER_VB

    @field_validator("sat_per_vb")
    @classmethod
    def validate_sat_per_vb(cls, v: float) -> float:
        return _check_sat_per_vb(to_f32(v))

    @classmethod
    def _new_checked(cls, value: float) -> FeeRate:
        return cls.model_construct(sat_per_vb=_check_sat_per_vb(to_f32(value)))

    @classmethod
    def from_sat_per_kwu(cls, sat_per_kwu: float) -> FeeRate:
        return cls._new_checked(to_f32(sat_per_kwu) / VBYTES_PER_KWU)

    @classmethod
    def from_sat_per_kvb(cls, sat_per_kvb: float) -> FeeRate:
        return cls._new_checked(to_f32(sat_per_kvb) / 1000)

    @classmethod
    def from_btc_per_kvb(cls, btc_per_kvb: float) -> FeeRate:
        """Build from BTC/kvB, the unit Bitcoin Core's fee estimator returns."""
        return cls._new_checked(to_f32(btc_per_kvb) * SAT_PER_VB_PER_BTC_PER_KVB)

    @classmethod
    def from_sat_per_vb(cls, sat_per_vb: float) -> FeeRate:
        return cls._new_checked(sat_per_vb)

    @classmethod
    def default_min_relay_fee(cls) -> FeeRate:
        return DEFAULT_MIN_RELAY_FEE

    @classmethod
    def from_wu(cls, fee: int, wu: int) -> FeeRate:
        """Fee rate paid by ``fee`` sats over a transaction of ``wu`` weight units."""
        return cls.from_vb(fee, vbytes(wu))

    @classmethod
    def from_vb(cls, fee: int, vbytes: int) -> FeeRate:
        """Fee rate paid by ``fee`` sats over a transaction of ``vbytes`` vbytes."""
        if vbytes == 0:
            # Division by zero size: inf for a positive fee, NaN for zero
            rate = math.nan if fee == 0 else math.copysign(math.inf, fee)
        else:
            rate = to_f32(fee) / to_f32(vbytes)
        return cls.from_sat_per_vb(rate)

    def as_sat_per_vb(self) -> float:
        return self.sat_per_vb

    def sat_per_kwu(self) -> float:
        return to_f32(self.sat_per_vb * VBYTES_PER_KWU)

    def sat_per_kvb(self) -> float:
        return to_f32(self.sat_per_vb * 1000)

    def btc_per_kvb(self) -> float:
        return to_f32(self.sat_per_vb / SAT_PER_VB_PER_BTC_PER_KVB)

    def fee_wu(self, wu: int) -> int:
        """Absolute fee in sats for a transaction of ``wu`` weight units."""
        return self.fee_vb(vbytes(wu))

    def fee_vb(self, vbytes: int) -> int:
        """Absolute fee in sats for a transaction of ``vbytes`` vbytes, rounded up."""
        if vbytes < 0:
            raise ValueError(f"Size must be non-negative, got {vbytes} vbytes")
        fee = to_f32(self.sat_per_vb * to_f32(vbytes))
        # Saturate like a float to u64 cast: NaN and negatives give 0, overflow gives the max
        if math.isnan(fee) or fee <= 0:
            return 0
        if math.isinf(fee):
            return MAX_FEE_SATS
        return min(math.ceil(fee), MAX_FEE_SATS)

    def __sub__(self, other: FeeRate) -> FeeRate:
        # Intermediate arithmetic, not re-validated
        if not isinstance(other, FeeRate):
            return NotImplemented
        return FeeRate.model_construct(sat_per_vb=to_f32(self.sat_per_vb - other.sat_per_vb))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FeeRate):
            return NotImplemented
        return self.sat_per_vb < other.sat_per_vb

    def __le__(self, other: object) -> bool:
        if not isinstance(other, FeeRate):
            return NotImplemented
        return self.sat_per_vb <= other.sat_per_vb

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, FeeRate):
            return NotImplemented
        return self.sat_per_vb > other.sat_per_vb

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, FeeRate):
            return NotImplemented
        return self.sat_per_vb >= other.sat_per_vb

    def __str__(self) -> str:
        return f"{self.sat_per_vb:g} sat/vB"


DEFAULT_MIN_RELAY_FEE = FeeRate()
