"""Shopping cart of resolved variant lines."""

from __future__ import annotations

import logging

from pydantic import Field, ValidationError

from bean_variants.schema import WireModel

logger = logging.getLogger(__name__)


class CartVariation(WireModel):
    """Facet labels of a cart line, stored as display text only."""

    weight: str | None = None
    beans: str | None = None
    additions: str | None = None


class CartItem(WireModel):
    id: str
    product_id: str
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    image: str | None = None
    variation: CartVariation = Field(default_factory=CartVariation)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    def same_line(self, other: CartItem) -> bool:
        return self.product_id == other.product_id and self.variation == other.variation


class Cart(WireModel):
    """Cart lines keyed by product and facet labels."""

    items: list[CartItem] = Field(default_factory=list)

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total_price(self) -> float:
        return sum(item.line_total for item in self.items)

    def add_item(self, item: CartItem) -> CartItem:
        """Add a line, merging quantities into an identical existing line."""
        for existing in self.items:
            if existing.same_line(item):
                existing.quantity += item.quantity
                return existing
        self.items.append(item)
        return item

    def remove_item(self, item_id: str) -> None:
        self.items = [item for item in self.items if item.id != item_id]

    def update_item_quantity(self, item_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(item_id)
            return
        for item in self.items:
            if item.id == item_id:
                item.quantity = quantity

    def get(self, item_id: str) -> CartItem | None:
        return next((item for item in self.items if item.id == item_id), None)

    def clear(self) -> None:
        self.items = []

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str | None) -> Cart:
        """Restore a saved cart. Unreadable data yields an empty cart."""
        if not raw:
            return cls()
        try:
            return cls.model_validate_json(raw)
        except ValidationError:
            logger.error("failed to parse saved cart, starting empty")
            return cls()
