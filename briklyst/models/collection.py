from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func

from briklyst.core.database import Base


class Collection(Base):
    __tablename__ = "collections"
    __table_args__ = (UniqueConstraint("storefront_id", "name", name="uq_collections_storefront_name"),)

    id = Column(Integer, primary_key=True)
    storefront_id = Column(Integer, ForeignKey("storefronts.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    slug = Column(String(140), nullable=False)
    description = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
