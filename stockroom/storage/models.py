"""
SQLAlchemy models for Stockroom.

Users own credentials; providers supply products. IDs are UUID strings.
"""

from sqlalchemy import (
    Column,
    String,
    Text,
    Float,
    DateTime,
    ForeignKey,
    Index,
)
from sqlalchemy.orm import declarative_base, relationship

from stockroom.core.utils import generate_id, utc_now

Base = declarative_base()


class User(Base):
    """User accounts"""
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True, default=generate_id)
    username = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=utc_now)


class Provider(Base):
    """Companies that supply products"""
    __tablename__ = 'providers'

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default='')
    phone = Column(String(50), nullable=False, default='')
    address = Column(String(255), nullable=False, default='')
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    products = relationship(
        "Product",
        back_populates="provider",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index('idx_providers_name', 'name'),
    )


class Product(Base):
    """Products offered by a provider"""
    __tablename__ = 'products'

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default='')
    price = Column(Float, nullable=False)
    provider_id = Column(
        String(36),
        ForeignKey('providers.id', ondelete='CASCADE'),
        nullable=False,
    )
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    provider = relationship("Provider", back_populates="products")

    __table_args__ = (
        Index('idx_products_provider_id', 'provider_id'),
        Index('idx_products_name', 'name'),
    )
