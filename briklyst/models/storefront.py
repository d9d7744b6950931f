from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from briklyst.core.database import Base


class Storefront(Base):
    __tablename__ = "storefronts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    title = Column(String(160), nullable=False)
    description = Column(Text, nullable=True)
    domain = Column(String(255), unique=True, nullable=True)
    logo_url = Column(Text, nullable=True)
    banner_url = Column(Text, nullable=True)

    # Cache of the last resolved presentation, rewritten by every settings/theme write.
    primary_color = Column(String(32), nullable=False, default="#000000")
    accent_color = Column(String(32), nullable=False, default="#666666")
    background_color = Column(String(32), nullable=False, default="#ffffff")
    text_color = Column(String(32), nullable=False, default="#000000")
    font_family = Column(String(120), nullable=False, default="Inter")
    theme_id = Column(String(64), nullable=False, default="bubblegum-pop")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User")
    settings = relationship(
        "StorefrontSettings",
        back_populates="storefront",
        uselist=False,
        cascade="all, delete-orphan",
    )
    products = relationship(
        "Product",
        back_populates="storefront",
        cascade="all, delete-orphan",
        order_by="Product.created_at.desc()",
    )

    @property
    def username(self) -> str:
        return self.user.name if self.user is not None else ""
