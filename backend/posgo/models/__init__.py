from .tenancy import Store, Profile, Lead
from .catalog import Product, ProductImage
from .sales import Transaction, Purchase
from .registers import CashShift, CashMovement
from .parties import Customer, Supplier
from .local import LocalEntry

__all__ = [
    "Store", "Profile", "Lead",
    "Product", "ProductImage",
    "Transaction", "Purchase",
    "CashShift", "CashMovement",
    "Customer", "Supplier",
    "LocalEntry",
]
