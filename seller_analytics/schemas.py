from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

SellerId = Union[int, str]


class Customer(BaseModel):
    """Only the collection itself is required; the report never reads customer fields."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    id: Optional[Union[int, str]] = None
    first_name: str = ""
    last_name: str = ""
    phone: Optional[str] = None
    email: Optional[str] = None


class Product(BaseModel):
    """A catalogue card. `purchase_price` is the cost basis used for profit."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    sku: str
    purchase_price: float
    sale_price: Optional[float] = None
    name: Optional[str] = None
    category: Optional[str] = None
    vendor: Optional[str] = None


class Seller(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: SellerId
    first_name: str
    last_name: str
    start_date: Optional[str] = None
    position: Optional[str] = None


class LineItem(BaseModel):
    """One product line inside a receipt. `discount` is a percentage (10 means 10%)."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    sku: str
    quantity: int
    discount: float = 0
    sale_price: float


class PurchaseRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    seller_id: SellerId
    items: list[LineItem]
    receipt_id: Optional[Union[int, str]] = None
    date: Optional[str] = None
    customer_id: Optional[Union[int, str]] = None
    total_amount: Optional[float] = None
    total_discount: Optional[float] = None


class SalesDataset(BaseModel):
    """The four raw collections one report run consumes."""

    model_config = ConfigDict(frozen=True)

    customers: list[Customer]
    products: list[Product]
    sellers: list[Seller]
    purchase_records: list[PurchaseRecord]


class SellerStats(BaseModel):
    """
    Running totals for one seller during a single report run.
    Mutated by the aggregation step, read by ranking and formatting.
    """

    id: SellerId
    name: str
    revenue: float = 0.0
    profit: float = 0.0
    sales_count: int = 0
    products_sold: dict[str, int] = Field(default_factory=dict)
    bonus: float = 0.0


class TopProduct(BaseModel):
    model_config = ConfigDict(frozen=True)

    sku: str
    quantity: int


class ReportEntry(BaseModel):
    """
    Defines the data contract for a single seller row in the final report.
    Money fields are already rounded to 2 decimals.
    """

    model_config = ConfigDict(frozen=True)

    seller_id: SellerId
    name: str
    revenue: float
    profit: float
    sales_count: int = Field(..., ge=0)
    top_products: list[TopProduct] = Field(default_factory=list)
    bonus: float
