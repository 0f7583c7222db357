from typing import Callable, Optional, Protocol

from pydantic import BaseModel, ConfigDict

from .schemas import LineItem, Product, SellerStats


class RevenuePolicy(Protocol):
    def __call__(self, item: LineItem, product: Product) -> float: ...


class BonusPolicy(Protocol):
    def __call__(self, index: int, total: int, seller: SellerStats) -> float: ...


class ReportOptions(BaseModel):
    """The two pluggable calculations a report run needs."""

    model_config = ConfigDict(frozen=True)

    calculate_revenue: Optional[Callable[[LineItem, Product], float]] = None
    calculate_bonus: Optional[Callable[[int, int, SellerStats], float]] = None


def calculate_simple_revenue(item: LineItem, _product: Product) -> float:
    """Revenue of one line item: full price with the percentage discount applied."""
    discount_decimal = item.discount / 100
    full_price = item.sale_price * item.quantity
    return full_price * (1 - discount_decimal)


def calculate_bonus_by_profit(index: int, total: int, seller: SellerStats) -> float:
    """
    Bonus for the seller at zero-based `index` of the profit ranking.
    The checks run in this order; for small rankings an earlier tier wins.
    """
    if index == 0:
        bonus_percent = 0.15
    elif index in (1, 2):
        bonus_percent = 0.10
    elif index < total - 1:
        bonus_percent = 0.05
    else:
        # Last place
        bonus_percent = 0.0

    return seller.profit * bonus_percent


DEFAULT_OPTIONS = ReportOptions(
    calculate_revenue=calculate_simple_revenue,
    calculate_bonus=calculate_bonus_by_profit,
)
