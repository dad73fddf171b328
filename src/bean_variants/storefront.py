"""Product page session: selection state, resolution, quantity and purchase."""

from __future__ import annotations

import logging

from bean_variants import pricing
from bean_variants.cart import Cart, CartItem, CartVariation
from bean_variants.exceptions import NoMatchingVariantError, OutOfStockError
from bean_variants.localization import Translator
from bean_variants.notifications import Notifier
from bean_variants.resolver import Resolution, ResolverConfig, VariantResolver
from bean_variants.schema import Facet, PricedItem, Product, SelectionState, Variant
from bean_variants.stock import available_stock, clamp_quantity, is_out_of_stock

CHECKOUT_PATH = "/checkout"


class ProductView:
    """State of one product page view.

    The catalog is read once; the selection changes only through `select`, and
    every change re-resolves the variant.
    """

    def __init__(
        self,
        product: Product,
        *,
        translator: Translator | None = None,
        notifier: Notifier | None = None,
        resolver_config: ResolverConfig | None = None,
    ):
        self.product = product
        self.translator = translator or Translator()
        self.notifier = notifier or Notifier()
        self.resolver = VariantResolver(
            resolver_config or ResolverConfig(language=self.translator.language)
        )
        self.logger = logging.getLogger(__name__)
        self.selection: SelectionState = self.resolver.initial_selection(self.catalog)
        self.quantity = 1
        self.resolution: Resolution = self.resolver.resolve(self.selection, self.catalog)

    @property
    def catalog(self) -> list[Variant]:
        return self.product.variations

    @property
    def variant(self) -> Variant | None:
        return self.resolution.variant

    @property
    def priced_item(self) -> PricedItem | None:
        """Variant when one is resolved; the product itself when it has no variations."""
        if self.variant is not None:
            return self.variant
        if not self.catalog:
            return self.product
        return None

    def select(self, facet: Facet, value: str) -> Resolution:
        self.selection.select(facet, value)
        self.resolution = self.resolver.resolve(self.selection, self.catalog)
        self.logger.debug(
            "selection %s -> %s (%s)",
            self.selection.model_dump(),
            self.variant.id if self.variant else None,
            self.resolution.method,
        )
        # Keep the quantity inside the newly selected variant's stock.
        self.set_quantity(self.quantity, notify=False)
        return self.resolution

    def set_quantity(self, requested: int, *, notify: bool = True) -> int:
        self.quantity = clamp_quantity(
            requested,
            available_stock(self.variant, self.product),
            notifier=self.notifier if notify else None,
            translator=self.translator,
        )
        return self.quantity

    def change_quantity(self, delta: int) -> int:
        return self.set_quantity(self.quantity + delta)

    @property
    def current_price(self) -> float:
        item = self.priced_item
        return pricing.current_price(item if item is not None else self.product)

    @property
    def original_price(self) -> float | None:
        item = self.priced_item
        return pricing.original_price(item if item is not None else self.product)

    @property
    def discount_percent(self) -> int:
        item = self.priced_item
        return pricing.discount_percent_label(item if item is not None else self.product)

    @property
    def is_out_of_stock(self) -> bool:
        return is_out_of_stock(self.priced_item)

    @property
    def can_purchase(self) -> bool:
        return self.priced_item is not None and not self.is_out_of_stock

    @property
    def image(self) -> str | None:
        if self.variant is not None and self.variant.image_url:
            return self.variant.image_url
        return self.product.primary_image

    def build_cart_item(self) -> CartItem:
        """Build the cart line for the current selection.

        Raises:
            NoMatchingVariantError: The product has variations but none is resolved.
            OutOfStockError: The resolved item has no stock.
        """
        item = self.priced_item
        if item is None:
            message = self.translator.t("select_variation")
            self.notifier.notify(message, "error")
            raise NoMatchingVariantError(message)
        if is_out_of_stock(item):
            message = self.translator.t("out_of_stock")
            self.notifier.notify(message, "error")
            raise OutOfStockError(message)

        variant = self.variant
        line_id = f"{self.product.id}-{variant.id}" if variant else self.product.id
        return CartItem(
            id=line_id,
            product_id=self.product.id,
            name=self.product.display_name(self.translator.language),
            price=pricing.current_price(item),
            quantity=self.quantity,
            image=self.image,
            variation=CartVariation(
                weight=self._variation_label("weight"),
                beans=self._variation_label("beans"),
                additions=self._variation_label("additions"),
            ),
        )

    def add_to_cart(self, cart: Cart) -> CartItem:
        line = self.build_cart_item()
        cart.add_item(line)
        self.notifier.notify(
            self.translator.t("added_to_cart", quantity=line.quantity, name=line.name),
            "success",
        )
        return line

    def buy_now(self, cart: Cart) -> str:
        """Add the selection to the cart and return the checkout path."""
        self.add_to_cart(cart)
        return CHECKOUT_PATH

    def _variation_label(self, facet: Facet) -> str | None:
        if self.variant is None:
            return None
        return self.resolver.label(self.variant, facet) or self.selection.get(facet) or None
