# app/shared/database/models.py
from decimal import Decimal

from sqlalchemy import (
    Column, Integer, String, DateTime, Text,
    Numeric, ForeignKey, CheckConstraint
)
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()

# Límites de las columnas: Numeric(10, 2) para precios, Numeric(12, 2) para
# totales e Integer de 32 bits para cantidades
MAX_PRICE = Decimal("99999999.99")
MAX_TOTAL = Decimal("9999999999.99")
MAX_QUANTITY = 2**31 - 1


# =====================================================
# CATÁLOGO
# =====================================================

class Product(Base):
    """Producto del catálogo; quantity es el stock actual"""
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
    )

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text)
    category = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)


# =====================================================
# VENTAS
# =====================================================

class Sale(Base):
    """Venta; inmutable una vez registrada"""
    __tablename__ = "sales"
    __table_args__ = (
        CheckConstraint("total >= 0", name="ck_sales_total_non_negative"),
    )

    id = Column(String(64), primary_key=True)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    customer = Column(String(255), nullable=False)
    total = Column(Numeric(12, 2), nullable=False)

    # Relationships
    items = relationship(
        "SaleItem",
        back_populates="sale",
        cascade="all, delete-orphan",
        order_by="SaleItem.id",
    )


class SaleItem(Base):
    """
    Línea de venta. product_id, name y price son una foto del producto
    al momento de la venta: no hay FK a products.
    """
    __tablename__ = "sale_items"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_sale_items_quantity_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    sale_id = Column(String(64), ForeignKey("sales.id"), nullable=False, index=True)
    product_id = Column(String(64), nullable=False)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)

    sale = relationship("Sale", back_populates="items")

    @property
    def subtotal(self):
        return self.price * self.quantity
