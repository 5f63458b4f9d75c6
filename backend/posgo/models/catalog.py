from __future__ import annotations

from ..extensions import db


class Product(db.Model):
    """
    Remote product row.

    DESIGN: variants and pack components are JSON columns on the product
    row, not child tables. Older rows may hold them as encoded strings;
    the read path normalizes both shapes (see posgo.storage.mapping).
    """
    __tablename__ = "products"
    __table_args__ = (
        db.Index("ix_products_store_barcode", "store_id", "barcode"),
    )

    id = db.Column(db.String(64), primary_key=True)
    store_id = db.Column(db.String(36), db.ForeignKey("stores.id"), nullable=False, index=True)

    name = db.Column(db.String(255), nullable=False)
    price = db.Column(db.Float, nullable=False, default=0)
    stock = db.Column(db.Integer, nullable=False, default=0)
    category = db.Column(db.String(64), nullable=True)
    barcode = db.Column(db.String(64), nullable=True)  # not unique

    has_variants = db.Column(db.Boolean, nullable=False, default=False)
    variants = db.Column(db.JSON, nullable=True)
    is_pack = db.Column(db.Boolean, nullable=False, default=False)
    pack_items = db.Column(db.JSON, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())


class ProductImage(db.Model):
    """Encoded product image (at most two per product), replaced wholesale on save."""
    __tablename__ = "product_images"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.String(64), nullable=False, index=True)
    store_id = db.Column(db.String(36), db.ForeignKey("stores.id"), nullable=False, index=True)
    image_data = db.Column(db.Text, nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
