from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from briklyst.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # name doubles as the public username used in storefront URLs
    name = Column(String(80), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    weekly_report = Column(Boolean, nullable=False, default=False)
    click_alerts = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
