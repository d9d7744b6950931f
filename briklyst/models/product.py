from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import relationship

from briklyst.core.database import Base


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (Index("ix_products_storefront_created", "storefront_id", "created_at"),)

    id = Column(Integer, primary_key=True)
    storefront_id = Column(Integer, ForeignKey("storefronts.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False, default=0)
    image_url = Column(Text, nullable=True)
    affiliate_url = Column(Text, nullable=False)
    clicks = Column(Integer, nullable=False, default=0)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    storefront = relationship("Storefront", back_populates="products")
