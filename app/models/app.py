from enum import Enum

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONList, TimestampMixin
from .decorators.types import EnumValueType

DEFAULT_TAGS = ["New", "Community"]


class Category(Enum):
    DEFI = "DeFi"
    NFT = "NFT"
    TOKENS = "Tokens"
    INFRASTRUCTURE = "Infrastructure"
    TOOLS = "Tools"
    SOCIAL = "Social"
    WALLET = "Wallet"
    EVENTS = "Events"


class App(Base, TimestampMixin):
    """A listed application."""

    __tablename__ = "apps"

    name: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    description: Mapped[str] = mapped_column(sa.Text(), nullable=False)
    url: Mapped[str] = mapped_column(sa.String(500), nullable=False)
    category: Mapped[Category] = mapped_column(
        EnumValueType(Category, missing_fails_on_load=False), nullable=False, index=True
    )
    tags: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)
    added_at: Mapped[int] = mapped_column(sa.BigInteger(), nullable=False, index=True, comment="Epoch milliseconds")
    clicks: Mapped[int] = mapped_column(sa.Integer(), nullable=False, default=0, server_default="0")
    featured: Mapped[bool] = mapped_column(
        sa.Boolean(), nullable=False, default=False, server_default=sa.false(), index=True
    )
    approved: Mapped[bool] = mapped_column(sa.Boolean(), nullable=False, default=False, server_default=sa.false())

    def __repr__(self) -> str:
        return f"<App(name='{self.name}', category='{category_label(self.category)}', approved={self.approved})>"


def category_label(category: Category | str) -> str:
    """Display label of a stored category, including labels outside the Category enum."""
    return category.value if isinstance(category, Category) else category
