from sqlalchemy import Column, String, UniqueConstraint
from sqlalchemy.sql import func

from common.db.base import Base, BigIntegerType, UTCDateTime


class BankItemEntity(Base):
    """A linked bank institution and the access token for it."""

    __tablename__ = "bank_items"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    item_id = Column(String(255), nullable=False, unique=True)
    customer_id = Column(String(255), nullable=False, index=True)
    institution_id = Column(String(255), nullable=False)
    institution_name = Column(String(255), nullable=True)
    access_token = Column(String(255), nullable=False)

    created_at = Column(UTCDateTime, server_default=func.now())

    __table_args__ = (
        UniqueConstraint(
            "customer_id", "institution_id", name="uq_bank_item_customer_institution"
        ),
    )
