from sqlalchemy import Column, String
from sqlalchemy.sql import func

from common.db.base import Base, BigIntegerType, UTCDateTime


class AccountEntity(Base):
    """Account row, inserted at signup by the auth backend."""

    __tablename__ = "accounts"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    account_id = Column(String(64), nullable=False, unique=True, index=True)
    email = Column(String(320), nullable=True)
    customer_id = Column(String(255), nullable=True, unique=True, index=True)

    created_at = Column(UTCDateTime, server_default=func.now())
