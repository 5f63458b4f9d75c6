# Overview: Static catalog data, default store settings, and reserved identifiers.

from __future__ import annotations

# Shared demo template scope in the cloud store. Globally readable,
# writable only by a super-admin identity.
DEMO_TEMPLATE_STORE_ID = "00000000-0000-0000-0000-000000000000"

ROLE_ADMIN = "admin"
ROLE_CASHIER = "cashier"
ROLE_SUPER_ADMIN = "superadmin"
ALL_ROLES = {ROLE_ADMIN, ROLE_CASHIER, ROLE_SUPER_ADMIN}

# Device-local document keys (demo mode + session bookkeeping)
LOCAL_KEYS = {
    "session": "posgo_session",
    "products": "posgo_products",
    "transactions": "posgo_transactions",
    "purchases": "posgo_purchases",
    "settings": "posgo_settings",
    "customers": "posgo_customers",
    "suppliers": "posgo_suppliers",
    "shifts": "posgo_shifts",
    "movements": "posgo_movements",
    "active_shift": "posgo_active_shift",
    "demo_template": "posgo_demo_template",
}

CATEGORIES = ["General", "Bebidas", "Alimentos", "Limpieza", "Cuidado Personal", "Snacks", "Otros"]

DEFAULT_SETTINGS = {
    "name": "Mi Bodega Demo",
    "currency": "S/",
    "taxRate": 0.18,  # IGV
    "pricesIncludeTax": True,
    "address": "Av. Larco 123, Miraflores",
    "phone": "999-000-123",
}

# Last-resort catalog when neither the cloud template nor its local cache is available.
SEED_PRODUCTS = [
    # Bebidas
    {"id": "1", "name": "Inca Kola 600ml", "price": 3.50, "category": "Bebidas", "stock": 45, "barcode": "77501000"},
    {"id": "2", "name": "Coca Cola 600ml", "price": 3.50, "category": "Bebidas", "stock": 50, "barcode": "77501001"},
    {"id": "3", "name": "Agua San Mateo 1L", "price": 2.50, "category": "Bebidas", "stock": 24, "barcode": "77502000"},
    {"id": "4", "name": "Cerveza Pilsen 650ml", "price": 7.00, "category": "Bebidas", "stock": 120, "barcode": "77503000"},
    {"id": "5", "name": "Sporade Tropical", "price": 2.80, "category": "Bebidas", "stock": 15, "barcode": "77504000"},
    # Snacks
    {"id": "6", "name": "Papas Lays Clásicas", "price": 2.00, "category": "Snacks", "stock": 30, "barcode": "75010001"},
    {"id": "7", "name": "Doritos Queso", "price": 2.20, "category": "Snacks", "stock": 25, "barcode": "75010002"},
    {"id": "8", "name": "Galleta Oreo Paquete", "price": 1.50, "category": "Snacks", "stock": 60, "barcode": "76223000"},
    {"id": "9", "name": "Chocman", "price": 1.20, "category": "Snacks", "stock": 40, "barcode": "77505000"},
    # Alimentos
    {"id": "10", "name": "Arroz Costeño 750g", "price": 4.80, "category": "Alimentos", "stock": 20, "barcode": "77506000"},
    {"id": "11", "name": "Aceite Primor 1L", "price": 11.50, "category": "Alimentos", "stock": 18, "barcode": "77507000"},
    {"id": "12", "name": "Leche Gloria Azul", "price": 4.20, "category": "Alimentos", "stock": 36, "barcode": "77508000"},
    {"id": "13", "name": "Atún Florida Filete", "price": 6.50, "category": "Alimentos", "stock": 50, "barcode": "77509000"},
    # Limpieza & cuidado
    {"id": "14", "name": "Detergente Bolivar 900g", "price": 14.50, "category": "Limpieza", "stock": 12, "barcode": "77510000"},
    {"id": "15", "name": "Papel Hig. Suave (pack 4)", "price": 6.00, "category": "Limpieza", "stock": 15, "barcode": "77511000"},
    {"id": "16", "name": "Shampoo H&S 400ml", "price": 18.90, "category": "Cuidado Personal", "stock": 8, "barcode": "77512000"},
    # Variant product
    {
        "id": "17",
        "name": "Panetón D'Onofrio",
        "price": 28.00,
        "category": "Alimentos",
        "stock": 30,
        "barcode": "77513000",
        "hasVariants": True,
        "variants": [
            {"id": "v1", "name": "Caja", "price": 28.00, "stock": 20},
            {"id": "v2", "name": "Lata", "price": 32.00, "stock": 5},
            {"id": "v3", "name": "Bolsa (Chocoton)", "price": 29.50, "stock": 5},
        ],
    },
]

MAX_PRODUCT_IMAGES = 2
