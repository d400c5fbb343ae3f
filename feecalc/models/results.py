from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class FeeBreakdown:
    setup_fee: Decimal = Decimal("0")
    placement_fee: Decimal = Decimal("0")
    total_management_fees: Decimal = Decimal("0")
    total_admin_fees: Decimal = Decimal("0")
    carry: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return (
            self.setup_fee
            + self.placement_fee
            + self.total_management_fees
            + self.total_admin_fees
            + self.carry
        )


@dataclass(frozen=True)
class CalculationResult:
    offer_id: str
    offer_name: str
    offer_color: str

    # Position
    shares_acquired: Decimal = Decimal("0")
    upfront_fees: Decimal = Decimal("0")
    total_cash_outlay: Decimal = Decimal("0")

    # Gross
    gross_exit_value: Decimal = Decimal("0")
    gross_profit: Decimal = Decimal("0")
    gross_moic: Decimal = Decimal("0")

    # Net of all fees and carry
    net_exit_value: Decimal = Decimal("0")
    net_return: Decimal = Decimal("0")
    net_moic: Decimal = Decimal("0")
    net_irr: Decimal | None = None  # None = no IRR (no sign change / no root)

    # Fees
    total_fees: Decimal = Decimal("0")
    effective_fee_rate: Decimal = Decimal("0")  # total fees / gross profit
    break_even_price: Decimal = Decimal("0")
    fee_breakdown: FeeBreakdown = field(default_factory=FeeBreakdown)


@dataclass(frozen=True)
class SensitivityResult:
    """Reduced result kept per offer at each sampled exit price."""
    net_return: Decimal
    net_moic: Decimal
    net_irr: Decimal | None


@dataclass(frozen=True)
class SensitivityPoint:
    exit_price: Decimal
    results: dict[str, SensitivityResult] = field(default_factory=dict)


@dataclass(frozen=True)
class ComparisonRow:
    label: str
    key: str
    values: list[str]  # Formatted, one per offer in display order
    best_index: int | None = None  # None = tie or single offer
    highlight: bool = False
    delta: str | None = None  # Only when comparing exactly two offers


@dataclass(frozen=True)
class ComparisonTable:
    offer_names: list[str] = field(default_factory=list)
    rows: list[ComparisonRow] = field(default_factory=list)
