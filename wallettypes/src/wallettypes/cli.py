"""
Wallet types CLI - Convert fee rates between units and compute absolute fees.
"""

from __future__ import annotations

import sys

import typer
from loguru import logger

from wallettypes.config import get_settings
from wallettypes.fee_rate import FeeRate, InvalidFeeRateError

app = typer.Typer(
    name="wallet-types",
    help="Bitcoin wallet fee rate tools",
    add_completion=False,
)

FEE_UNITS = ("sat/vB", "sat/kvB", "sat/kwu", "BTC/kvB")


def setup_logging(level: str = "INFO") -> None:
    """Configure loguru logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )


def parse_fee_rate(value: float, unit: str) -> FeeRate:
    """Build a FeeRate from a number in one of FEE_UNITS."""
    if unit == "sat/vB":
        return FeeRate.from_sat_per_vb(value)
    elif unit == "sat/kvB":
        return FeeRate.from_sat_per_kvb(value)
    elif unit == "sat/kwu":
        return FeeRate.from_sat_per_kwu(value)
    elif unit == "BTC/kvB":
        return FeeRate.from_btc_per_kvb(value)
    raise ValueError(f"Unknown fee unit: {unit} (expected one of {', '.join(FEE_UNITS)})")


def format_fee_rate(fee_rate: FeeRate) -> str:
    lines = [
        "=== Fee Rate ===",
        f"sat/vB:  {fee_rate.as_sat_per_vb():g}",
        f"sat/kvB: {fee_rate.sat_per_kvb():g}",
        f"sat/kwu: {fee_rate.sat_per_kwu():g}",
        f"BTC/kvB: {fee_rate.btc_per_kvb():.8f}",
    ]
    return "\n".join(lines)


def _load_fee_rate(value: float, unit: str | None) -> FeeRate:
    unit = unit or get_settings().fee_unit
    try:
        return parse_fee_rate(value, unit)
    except InvalidFeeRateError as e:
        logger.error(f"Invalid fee rate: {e}")
        raise typer.Exit(1)
    except ValueError as e:
        logger.error(str(e))
        raise typer.Exit(1)


@app.command()
def convert(
    value: float = typer.Argument(..., help="Fee rate value"),
    unit: str | None = typer.Option(None, "--unit", "-u", help="Unit of VALUE"),
    log_level: str | None = typer.Option(None, "--log-level", "-l"),
) -> None:
    """Show a fee rate in every supported unit."""
    setup_logging(log_level or get_settings().log_level)

    fee_rate = _load_fee_rate(value, unit)
    logger.debug(f"Parsed fee rate: {fee_rate}")
    print(format_fee_rate(fee_rate))


@app.command()
def fee(
    rate: float = typer.Argument(..., help="Fee rate value"),
    vbytes: int | None = typer.Option(None, "--vbytes", help="Transaction size in vbytes"),
    weight: int | None = typer.Option(None, "--weight", help="Transaction weight in wu"),
    unit: str | None = typer.Option(None, "--unit", "-u", help="Unit of RATE"),
    log_level: str | None = typer.Option(None, "--log-level", "-l"),
) -> None:
    """Compute the absolute fee for a transaction size."""
    setup_logging(log_level or get_settings().log_level)

    if (vbytes is None) == (weight is None):
        logger.error("Exactly one of --vbytes or --weight is required")
        raise typer.Exit(1)

    fee_rate = _load_fee_rate(rate, unit)
    try:
        if vbytes is not None:
            amount = fee_rate.fee_vb(vbytes)
        else:
            amount = fee_rate.fee_wu(weight)
    except ValueError as e:
        logger.error(str(e))
        raise typer.Exit(1)

    print(f"Fee: {amount:,} sats at {fee_rate}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
