from typing import Optional

from booking_schemas import Costs

TAX_RATE = 0.15
SERVICE_FEE = 25.0

# Nightly rate estimate per price-tier character ("$$" -> 50)
TIER_RATE = 25.0
DEFAULT_NIGHTLY_RATE = 15.0


def compute_costs(nightly_rate: Optional[float], nights: Optional[int]) -> Costs:
    """
    Price a stay: room total, 15% taxes and a flat service fee.

    With no room selected yet (rate or nights unknown) only the service fee
    is charged, so a payment screen rendered early still shows a total.
    """
    if not nightly_rate or not nights:
        return Costs(room_total=0.0, taxes=0.0, fees=SERVICE_FEE, total=SERVICE_FEE)

    room_total = nightly_rate * nights
    taxes = room_total * TAX_RATE
    return Costs(
        room_total=room_total,
        taxes=taxes,
        fees=SERVICE_FEE,
        total=room_total + taxes + SERVICE_FEE,
    )


def stay_total(nightly_rate: float, nights: int) -> float:
    return nightly_rate * nights


def estimate_nightly_rate(price_tier: Optional[str]) -> float:
    # listings only carry a "$".."$$$$" tier, not a rate
    if not price_tier:
        return DEFAULT_NIGHTLY_RATE
    return len(price_tier) * TIER_RATE


def format_currency(amount: float) -> str:
    return f"${amount:,.2f}"
