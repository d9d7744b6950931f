from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from briklyst.core.database import Base


class EmailCampaign(Base):
    __tablename__ = "email_campaigns"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    template_id = Column(Integer, ForeignKey("email_templates.id", ondelete="SET NULL"), nullable=True)
    subject = Column(String(200), nullable=False)
    html = Column(Text, nullable=False)
    # "all" or a subscriber tag
    segment = Column(String(60), nullable=False)
    scheduled_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(16), nullable=False)
    recipients = Column(Integer, nullable=False, default=0)
    opens = Column(Integer, nullable=False, default=0)
    clicks = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
