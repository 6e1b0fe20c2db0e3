"""SQLAlchemy ORM models for members, monthly credits and export audit"""

import uuid
from sqlalchemy import Column, String, Integer, Numeric, DateTime, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class Member(Base):
    """Society member (only the fields the export needs)"""

    __tablename__ = "members"

    id = Column(Text, primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    iban = Column(Text, nullable=True)

    credits = relationship("Credit", back_populates="member", cascade="all, delete-orphan")


class Credit(Base):
    """A member's accumulated debt for one month"""

    __tablename__ = "credits"

    id = Column(Text, primary_key=True, default=_new_id)
    member_id = Column(Text, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    month = Column(String(7), nullable=False, index=True)  # YYYY-MM
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(Text, nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    member = relationship("Member", back_populates="credits")


class SepaExport(Base):
    """Audit record of a produced SEPA Direct Debit file"""

    __tablename__ = "sepa_export"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    message_id = Column(Text, nullable=False, unique=True)
    payment_id = Column(Text, nullable=False)
    month = Column(String(7), nullable=False, index=True)
    filename = Column(Text, nullable=False)
    transaction_count = Column(Integer, nullable=False)
    control_sum = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
