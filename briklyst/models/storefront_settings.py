from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import relationship

from briklyst.core.database import Base


class StorefrontSettings(Base):
    __tablename__ = "storefront_settings"
    __table_args__ = (
        UniqueConstraint("user_id", name="ux_storefront_settings_user_id"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    storefront_id = Column(Integer, ForeignKey("storefronts.id", ondelete="CASCADE"), nullable=False, index=True)

    template_id = Column(String(64), nullable=True)
    theme_id = Column(String(64), nullable=True)
    template_overrides = Column(JSON, nullable=True)
    branding_assets = Column(JSON, nullable=True)
    layout = Column(JSON, nullable=True)
    typography = Column(JSON, nullable=True)
    sections = Column(JSON, nullable=True)
    custom_css = Column(Text, nullable=True)
    social_links = Column(JSON, nullable=True)
    collab_highlights = Column(JSON, nullable=True)
    subscriber_block = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    storefront = relationship("Storefront", back_populates="settings")
