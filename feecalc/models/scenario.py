from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum


class PriceMode(Enum):
    PER_SHARE = "pps"
    VALUATION = "valuation"


@dataclass(frozen=True)
class Scenario:
    """Shared exit assumptions applied to every offer."""
    investment_amount: Decimal
    exit_price_per_share: Decimal
    time_horizon: int  # Years until exit

    # Valuation mode: exit price derived from company valuation / share count
    price_mode: PriceMode = PriceMode.PER_SHARE
    exit_valuation: Decimal = Decimal("0")
    shares_outstanding: Decimal = Decimal("1000000")

    @property
    def exit_price(self) -> Decimal:
        """Exit price per share used by the engine, whatever the entry mode."""
        if self.price_mode is PriceMode.VALUATION:
            if self.shares_outstanding <= 0:
                return Decimal("0")
            return self.exit_valuation / self.shares_outstanding
        return self.exit_price_per_share

    def with_exit_price(self, price: Decimal) -> "Scenario":
        """Per-share clone of this scenario with the exit price substituted."""
        return replace(self, exit_price_per_share=price, price_mode=PriceMode.PER_SHARE)
