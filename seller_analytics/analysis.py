"""
Seller performance analysis: validation, indexing, aggregation, ranking and
formatting of one report run. Everything here works on in-memory data only;
loading and saving belong to the pipeline layer.
"""

import logging
from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from pydantic import ValidationError

from .errors import InvalidInputError, MissingPolicyError, UnknownReferenceError
from .policies import BonusPolicy, RevenuePolicy
from .schemas import (
    Product,
    PurchaseRecord,
    ReportEntry,
    SalesDataset,
    Seller,
    SellerId,
    SellerStats,
    TopProduct,
)

logger = logging.getLogger(__name__)

REQUIRED_COLLECTIONS = ("customers", "products", "sellers", "purchase_records")
TOP_PRODUCTS_LIMIT = 10


def _field(source: Any, name: str) -> Any:
    """Reads `name` from either a mapping or an attribute-style object."""
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def round_money(value: float) -> float:
    """Rounds half-up to exactly 2 decimals (on the float's exact decimal value)."""
    rounded = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    # Adding 0.0 turns a negative zero into a plain zero.
    return float(rounded) + 0.0


# --- 1. Validation ---


def validate_input(data: Any, options: Any) -> tuple[RevenuePolicy, BonusPolicy]:
    """
    Checks the four collections and the two policies.
    Returns the (revenue, bonus) callables on success.
    """
    if data is None:
        raise InvalidInputError("no input data supplied")

    for name in REQUIRED_COLLECTIONS:
        collection = _field(data, name)
        if collection is None:
            raise InvalidInputError(f"'{name}' is missing")
        if not _is_sequence(collection):
            raise InvalidInputError(f"'{name}' must be a sequence")
        if len(collection) == 0:
            raise InvalidInputError(f"'{name}' is empty")

    calculate_revenue = _field(options, "calculate_revenue")
    calculate_bonus = _field(options, "calculate_bonus")
    if not callable(calculate_revenue) or not callable(calculate_bonus):
        missing = [
            name
            for name, func in (
                ("calculate_revenue", calculate_revenue),
                ("calculate_bonus", calculate_bonus),
            )
            if not callable(func)
        ]
        raise MissingPolicyError(", ".join(missing))

    return calculate_revenue, calculate_bonus


def parse_dataset(data: Any) -> SalesDataset:
    """Validates the raw collections against the schemas."""
    if isinstance(data, SalesDataset):
        return data
    try:
        return SalesDataset.model_validate(
            {name: list(_field(data, name)) for name in REQUIRED_COLLECTIONS}
        )
    except ValidationError as e:
        raise InvalidInputError(f"malformed records: {e.error_count()} error(s)\n{e}") from e


# --- 2. Indexes ---


def build_product_index(products: Iterable[Product]) -> dict[str, Product]:
    # A repeated sku keeps the last product seen.
    return {product.sku: product for product in products}


def build_seller_index(sellers: Iterable[Seller]) -> dict[SellerId, SellerStats]:
    return {
        seller.id: SellerStats(
            id=seller.id,
            name=f"{seller.first_name} {seller.last_name}",
        )
        for seller in sellers
    }


# --- 3. Aggregation ---


def aggregate_sales(
    purchase_records: Iterable[PurchaseRecord],
    product_index: Mapping[str, Product],
    seller_index: Mapping[SellerId, SellerStats],
    calculate_revenue: RevenuePolicy,
) -> Mapping[SellerId, SellerStats]:
    """
    Adds every purchase record to its seller's running totals.
    Sales count grows once per record; revenue, profit and sold quantities per item.
    """
    for record in purchase_records:
        seller_stats = seller_index.get(record.seller_id)
        if seller_stats is None:
            raise UnknownReferenceError("seller", record.seller_id, _receipt_context(record))

        seller_stats.sales_count += 1

        for item in record.items:
            product = product_index.get(item.sku)
            if product is None:
                raise UnknownReferenceError("product", item.sku, _receipt_context(record))

            item_revenue = calculate_revenue(item, product)
            item_cost = product.purchase_price * item.quantity

            seller_stats.revenue += item_revenue
            seller_stats.profit += item_revenue - item_cost

            sold = seller_stats.products_sold
            sold[item.sku] = sold.get(item.sku, 0) + item.quantity

    return seller_index


def _receipt_context(record: PurchaseRecord) -> str | None:
    if record.receipt_id is None:
        return None
    return f"receipt {record.receipt_id}"


def merge_seller_stats(
    target: dict[SellerId, SellerStats], shard: Mapping[SellerId, SellerStats]
) -> dict[SellerId, SellerStats]:
    """Folds a separately aggregated shard into `target` by adding its totals."""
    for seller_id, stats in shard.items():
        merged = target.get(seller_id)
        if merged is None:
            target[seller_id] = stats.model_copy(deep=True)
            continue
        merged.revenue += stats.revenue
        merged.profit += stats.profit
        merged.sales_count += stats.sales_count
        for sku, quantity in stats.products_sold.items():
            merged.products_sold[sku] = merged.products_sold.get(sku, 0) + quantity
    return target


# --- 4. Ranking ---


def rank_sellers(
    seller_index: Mapping[SellerId, SellerStats], calculate_bonus: BonusPolicy
) -> list[SellerStats]:
    """
    Orders sellers by profit, highest first, and assigns each its bonus.
    Equal profits keep the seller input order, so bonus tiers are deterministic.
    """
    ranked = sorted(seller_index.values(), key=lambda s: s.profit, reverse=True)
    total = len(ranked)
    for index, seller in enumerate(ranked):
        seller.bonus = calculate_bonus(index, total, seller)
        logger.debug(
            f"  > #{index + 1} {seller.name}: profit={seller.profit:.2f} bonus={seller.bonus:.2f}"
        )
    return ranked


# --- 5. Formatting ---


def top_products(products_sold: Mapping[str, int], limit: int = TOP_PRODUCTS_LIMIT) -> list[TopProduct]:
    ordered = sorted(products_sold.items(), key=lambda pair: pair[1], reverse=True)
    return [TopProduct(sku=sku, quantity=quantity) for sku, quantity in ordered[:limit]]


def format_report(
    ranked_sellers: Iterable[SellerStats], top_limit: int = TOP_PRODUCTS_LIMIT
) -> list[ReportEntry]:
    return [
        ReportEntry(
            seller_id=seller.id,
            name=seller.name,
            revenue=round_money(seller.revenue),
            profit=round_money(seller.profit),
            sales_count=seller.sales_count,
            top_products=top_products(seller.products_sold, top_limit),
            bonus=round_money(seller.bonus),
        )
        for seller in ranked_sellers
    ]


# --- Entry point ---


def analyze_sales_data(
    data: Any, options: Any, top_limit: int = TOP_PRODUCTS_LIMIT
) -> list[ReportEntry]:
    """
    Builds the profit-ranked seller report.

    `data` holds customers, products, sellers and purchase_records (a mapping,
    an attribute object or a SalesDataset). `options` exposes
    `calculate_revenue(item, product)` and `calculate_bonus(index, total, seller)`.
    Raises InvalidInputError, MissingPolicyError or UnknownReferenceError;
    no partial report is ever returned.
    """
    calculate_revenue, calculate_bonus = validate_input(data, options)
    dataset = parse_dataset(data)

    logger.info(
        f"Analyzing {len(dataset.purchase_records)} purchase records "
        f"for {len(dataset.sellers)} sellers and {len(dataset.products)} products."
    )

    product_index = build_product_index(dataset.products)
    seller_index = build_seller_index(dataset.sellers)

    aggregate_sales(dataset.purchase_records, product_index, seller_index, calculate_revenue)
    ranked = rank_sellers(seller_index, calculate_bonus)
    report = format_report(ranked, top_limit)

    logger.info(f"✅ Seller report built ({len(report)} sellers).")
    return report
