"""SQLAlchemy ORM mapping of the ledger's transactions table (read-only)"""

from sqlalchemy import Column, Float, Integer, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class LedgerTransaction(Base):
    """Row of the transaction ledger owned by the administration dashboard"""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    # Stored as text by the ledger owner; validated on ingestion
    date = Column(Text, nullable=False, index=True)
    type = Column(Text, nullable=False)
    description = Column("desc", Text, nullable=False, default="")
    amount = Column(Float, nullable=False)
    category = Column(Text, nullable=False, default="")
    attachments = Column(Text, nullable=False, default="[]")
