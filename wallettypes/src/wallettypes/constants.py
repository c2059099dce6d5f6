"""
Bitcoin size and fee constants.

Sizes follow BIP141 weight accounting:
- 1 virtual byte (vbyte) = 4 weight units (wu)
- 1000 wu = 250 vbytes
"""

from __future__ import annotations

# Weight units per virtual byte (BIP141 WITNESS_SCALE_FACTOR)
WITNESS_SCALE_FACTOR = 4

# Satoshis in one bitcoin
SATS_PER_BTC = 100_000_000

# vbytes in 1000 weight units
VBYTES_PER_KWU = 1000 // WITNESS_SCALE_FACTOR  # 250

# Unit conversion for BTC/kvB -> sat/vB: 1e8 sats per BTC / 1000 vbytes
SAT_PER_VB_PER_BTC_PER_KVB = SATS_PER_BTC // 1000  # 100_000

# Bitcoin Core default minimum relay fee, in sat/vB
DEFAULT_MIN_RELAY_FEE_SAT_PER_VB = 1.0
