from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, LargeBinary, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .db import Base


class OrganizationalUnit(Base):
    __tablename__ = "organizational_units"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)

    accounts = relationship("Account", back_populates="organizational_unit", order_by="Account.display_name")


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(String, unique=True, nullable=False)
    display_name = Column(String, nullable=False)
    organizational_unit_id = Column(Integer, ForeignKey("organizational_units.id"), nullable=False)
    logon_hours = Column(LargeBinary(21), nullable=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    organizational_unit = relationship("OrganizationalUnit", back_populates="accounts")
