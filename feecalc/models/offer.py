from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class ManagementFeeBasis(Enum):
    COMMITTED = "committed"
    INVESTED = "invested"
    NAV = "nav"


@dataclass(frozen=True)
class HurdleTier:
    """Carry band selected by realized gross multiple: [moic_floor, moic_ceiling)."""
    moic_floor: Decimal
    moic_ceiling: Decimal
    carry_rate: Decimal  # Percent, e.g. Decimal("25")
    id: str = ""

    def contains(self, moic: Decimal) -> bool:
        return self.moic_floor <= moic < self.moic_ceiling


@dataclass(frozen=True)
class Offer:
    id: str
    name: str
    color: str = "#6366f1"

    # Pricing
    price_per_share: Decimal = Decimal("100")

    # Recurring fees (percent units: Decimal("2") = 2%)
    management_fee_percent: Decimal = Decimal("0")
    management_fee_basis: ManagementFeeBasis = ManagementFeeBasis.COMMITTED
    admin_fee: Decimal = Decimal("0")  # Annual, flat unless admin_fee_is_percent
    admin_fee_is_percent: bool = False

    # One-time fees
    setup_fee: Decimal = Decimal("0")
    setup_fee_is_percent: bool = False
    placement_fee_percent: Decimal = Decimal("0")

    # Performance terms
    carry_percent: Decimal = Decimal("0")
    hurdle_rate_percent: Decimal = Decimal("0")  # Compounds annually
    catch_up_percent: Decimal = Decimal("0")
    hurdle_tiers: tuple[HurdleTier, ...] = ()
