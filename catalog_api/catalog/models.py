"""SQLAlchemy models for product catalog.

Defines the Product table for persistent storage.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import JSON, DateTime, Float, Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from catalog_api.infrastructure.database import Base


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: Unique product identifier (UUID string).
        name: Product name, target of text search.
        price: Non-negative price in major currency units.
        images: Ordered list of image URIs.
        category: Optional category label.
        created_at: Creation timestamp (UTC).
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        Index("ix_products_category", "category"),
        Index("ix_products_price", "price"),
        Index("ix_products_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, name={self.name[:30]})>"

    @classmethod
    def create(
        cls,
        name: str,
        price: float,
        images: list[str] | None = None,
        category: str | None = None,
        created_at: datetime | None = None,
        product_id: str | None = None,
    ) -> "Product":
        """Build a product with identity and timestamp assigned up front.

        Column defaults only fire on flush, so records kept outside a
        session (in-memory store, tests) need them set explicitly.

        Returns:
            New transient Product.
        """
        return cls(
            id=product_id or str(uuid4()),
            name=name,
            price=price,
            images=list(images or []),
            category=category,
            created_at=created_at or utcnow(),
        )
