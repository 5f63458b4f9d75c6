# Overview: Application entities and their internal JSON shape.

"""
Application entities.

Every entity round-trips through the internal camelCase JSON shape used by
the device-local store and the HTTP API (`to_dict` / `from_dict`). The
cloud store uses its own snake_case column names; translation lives in
posgo.storage.mapping, never here.

from_dict is tolerant: missing keys take defaults and numeric fields are
coerced, since documents may come from older local copies or from remote
rows whose numeric columns arrive as strings/decimals.
"""

from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass, field
from typing import Any

from .constants import ALL_ROLES, DEFAULT_SETTINGS, ROLE_CASHIER, ROLE_SUPER_ADMIN


SHIFT_OPEN = "OPEN"
SHIFT_CLOSED = "CLOSED"

MOVEMENT_OPEN = "OPEN"
MOVEMENT_CLOSE = "CLOSE"
MOVEMENT_IN = "IN"
MOVEMENT_OUT = "OUT"

PAYMENT_CASH = "cash"


def new_id() -> str:
    return str(uuid.uuid4())


def _num(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _int(value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        return int(round(float(value)))
    except (TypeError, ValueError):
        return default


def _opt_num(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return _num(value)


@dataclass
class Variant:
    id: str
    name: str
    price: float = 0.0
    stock: int = 0

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "price": self.price, "stock": self.stock}

    @classmethod
    def from_dict(cls, data: dict) -> "Variant":
        return cls(
            id=str(data.get("id") or new_id()),
            name=data.get("name") or "",
            price=_num(data.get("price")),
            stock=_int(data.get("stock")),
        )


@dataclass
class PackComponent:
    product_id: str
    product_name: str = ""
    quantity: int = 1

    def to_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PackComponent":
        return cls(
            product_id=str(data.get("productId") or ""),
            product_name=data.get("productName") or "",
            quantity=max(1, _int(data.get("quantity"), 1)),
        )


@dataclass
class Product:
    """
    Catalog product.

    Exactly one of three shapes is active: plain, with variants, or pack.
    For variant products `stock` is derived (sum of variant stocks); for
    packs it counts sellable pack units and is unrelated to component stock.
    """
    id: str
    name: str
    price: float = 0.0
    stock: int = 0
    category: str = "General"
    barcode: str | None = None
    has_variants: bool = False
    variants: list[Variant] = field(default_factory=list)
    is_pack: bool = False
    pack_items: list[PackComponent] = field(default_factory=list)
    images: list[str] = field(default_factory=list)

    def variant(self, variant_id: str | None) -> Variant | None:
        if not variant_id:
            return None
        for v in self.variants:
            if v.id == variant_id:
                return v
        return None

    def variant_stock_total(self) -> int:
        return sum(v.stock for v in self.variants)

    def copy(self) -> "Product":
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "stock": self.stock,
            "category": self.category,
            "barcode": self.barcode,
            "hasVariants": self.has_variants,
            "variants": [v.to_dict() for v in self.variants],
            "isPack": self.is_pack,
            "packItems": [p.to_dict() for p in self.pack_items],
            "images": list(self.images),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        variants = [Variant.from_dict(v) for v in (data.get("variants") or [])]
        pack_items = [PackComponent.from_dict(p) for p in (data.get("packItems") or [])]
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            price=_num(data.get("price")),
            stock=_int(data.get("stock")),
            category=data.get("category") or "General",
            barcode=data.get("barcode") or None,
            has_variants=bool(data.get("hasVariants")) or bool(variants),
            variants=variants,
            is_pack=bool(data.get("isPack")),
            pack_items=pack_items,
            images=list(data.get("images") or []),
        )


@dataclass
class CartItem:
    """Product snapshot at add-to-cart time, priced with the selected variant."""
    product: Product
    quantity: int = 1
    discount: float = 0.0
    selected_variant_id: str | None = None
    selected_variant_name: str | None = None

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def price(self) -> float:
        return self.product.price

    @property
    def key(self) -> tuple[str, str | None]:
        return (self.product.id, self.selected_variant_id)

    def to_dict(self) -> dict:
        data = self.product.to_dict()
        data.update({
            "quantity": self.quantity,
            "discount": self.discount,
            "selectedVariantId": self.selected_variant_id,
            "selectedVariantName": self.selected_variant_name,
        })
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        return cls(
            product=Product.from_dict(data),
            quantity=max(1, _int(data.get("quantity"), 1)),
            discount=_num(data.get("discount")),
            selected_variant_id=data.get("selectedVariantId") or None,
            selected_variant_name=data.get("selectedVariantName") or None,
        )


@dataclass
class PaymentSplit:
    method: str
    amount: float

    def to_dict(self) -> dict:
        return {"method": self.method, "amount": self.amount}

    @classmethod
    def from_dict(cls, data: dict) -> "PaymentSplit":
        return cls(method=str(data.get("method") or PAYMENT_CASH), amount=_num(data.get("amount")))


@dataclass
class Transaction:
    """Completed sale. Written once at checkout and never modified."""
    id: str
    date: str
    items: list[CartItem]
    subtotal: float
    tax: float
    discount: float
    total: float
    payment_method: str
    payments: list[PaymentSplit]
    shift_id: str | None
    profit: float = 0.0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "items": [i.to_dict() for i in self.items],
            "subtotal": self.subtotal,
            "tax": self.tax,
            "discount": self.discount,
            "total": self.total,
            "paymentMethod": self.payment_method,
            "payments": [p.to_dict() for p in self.payments],
            "profit": self.profit,
            "shiftId": self.shift_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        return cls(
            id=str(data.get("id") or ""),
            date=data.get("date") or "",
            items=[CartItem.from_dict(i) for i in (data.get("items") or [])],
            subtotal=_num(data.get("subtotal")),
            tax=_num(data.get("tax")),
            discount=_num(data.get("discount")),
            total=_num(data.get("total")),
            payment_method=data.get("paymentMethod") or PAYMENT_CASH,
            payments=[PaymentSplit.from_dict(p) for p in (data.get("payments") or [])],
            shift_id=data.get("shiftId") or None,
            profit=_num(data.get("profit")),
        )


@dataclass
class CashShift:
    id: str
    start_time: str
    start_amount: float
    status: str = SHIFT_OPEN
    end_time: str | None = None
    end_amount: float | None = None
    total_sales_cash: float = 0.0
    total_sales_digital: float = 0.0

    @property
    def is_open(self) -> bool:
        return self.status == SHIFT_OPEN

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "startAmount": self.start_amount,
            "endAmount": self.end_amount,
            "status": self.status,
            "totalSalesCash": self.total_sales_cash,
            "totalSalesDigital": self.total_sales_digital,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CashShift":
        return cls(
            id=str(data.get("id") or ""),
            start_time=data.get("startTime") or "",
            start_amount=_num(data.get("startAmount")),
            status=data.get("status") or SHIFT_OPEN,
            end_time=data.get("endTime") or None,
            end_amount=_opt_num(data.get("endAmount")),
            total_sales_cash=_num(data.get("totalSalesCash")),
            total_sales_digital=_num(data.get("totalSalesDigital")),
        )


@dataclass
class CashMovement:
    id: str
    shift_id: str
    type: str
    amount: float
    description: str
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "shiftId": self.shift_id,
            "type": self.type,
            "amount": self.amount,
            "description": self.description,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CashMovement":
        return cls(
            id=str(data.get("id") or ""),
            shift_id=str(data.get("shiftId") or ""),
            type=data.get("type") or MOVEMENT_IN,
            amount=_num(data.get("amount")),
            description=data.get("description") or "",
            timestamp=data.get("timestamp") or "",
        )


@dataclass
class StoreSettings:
    name: str = DEFAULT_SETTINGS["name"]
    currency: str = DEFAULT_SETTINGS["currency"]
    tax_rate: float = DEFAULT_SETTINGS["taxRate"]
    prices_include_tax: bool = DEFAULT_SETTINGS["pricesIncludeTax"]
    address: str = DEFAULT_SETTINGS["address"]
    phone: str = DEFAULT_SETTINGS["phone"]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "currency": self.currency,
            "taxRate": self.tax_rate,
            "pricesIncludeTax": self.prices_include_tax,
            "address": self.address,
            "phone": self.phone,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "StoreSettings":
        merged = dict(DEFAULT_SETTINGS)
        merged.update({k: v for k, v in (data or {}).items() if v is not None})
        return cls(
            name=merged["name"],
            currency=merged["currency"],
            tax_rate=_num(merged["taxRate"]),
            prices_include_tax=bool(merged["pricesIncludeTax"]),
            address=merged["address"],
            phone=merged["phone"],
        )


@dataclass
class PurchaseItem:
    product_id: str
    quantity: int
    cost: float = 0.0
    product_name: str = ""
    variant_id: str | None = None

    def to_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "quantity": self.quantity,
            "cost": self.cost,
            "variantId": self.variant_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PurchaseItem":
        return cls(
            product_id=str(data.get("productId") or ""),
            quantity=_int(data.get("quantity")),
            cost=_num(data.get("cost")),
            product_name=data.get("productName") or "",
            variant_id=data.get("variantId") or None,
        )


@dataclass
class Purchase:
    id: str
    date: str
    supplier_id: str | None
    total: float
    items: list[PurchaseItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "supplierId": self.supplier_id,
            "total": self.total,
            "items": [i.to_dict() for i in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Purchase":
        return cls(
            id=str(data.get("id") or ""),
            date=data.get("date") or "",
            supplier_id=data.get("supplierId") or None,
            total=_num(data.get("total")),
            items=[PurchaseItem.from_dict(i) for i in (data.get("items") or [])],
        )


@dataclass
class Customer:
    id: str
    name: str
    phone: str | None = None
    email: str | None = None

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "phone": self.phone, "email": self.email}

    @classmethod
    def from_dict(cls, data: dict) -> "Customer":
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            phone=data.get("phone") or None,
            email=data.get("email") or None,
        )


@dataclass
class Supplier:
    id: str
    name: str
    contact: str | None = None
    phone: str | None = None

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "contact": self.contact, "phone": self.phone}

    @classmethod
    def from_dict(cls, data: dict) -> "Supplier":
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            contact=data.get("contact") or None,
            phone=data.get("phone") or None,
        )


@dataclass
class UserProfile:
    id: str
    email: str
    name: str = ""
    role: str = ROLE_CASHIER
    store_id: str | None = None

    @property
    def is_super_admin(self) -> bool:
        return self.role == ROLE_SUPER_ADMIN

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
            "storeId": self.store_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        return cls(
            id=str(data.get("id") or ""),
            email=data.get("email") or "",
            name=data.get("name") or "",
            # Unknown roles from older sessions fall back to the least privileged
            role=data.get("role") if data.get("role") in ALL_ROLES else ROLE_CASHIER,
            store_id=data.get("storeId") or None,
        )
