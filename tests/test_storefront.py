"""Tests for the product page session."""

import pytest

from bean_variants import Product
from bean_variants.cart import Cart
from bean_variants.exceptions import NoMatchingVariantError, OutOfStockError
from bean_variants.localization import Translator
from bean_variants.notifications import ToastQueue
from bean_variants.storefront import CHECKOUT_PATH, ProductView


def _product(**overrides) -> Product:
    data = {
        "id": "p1",
        "name": "Ethiopia Guji",
        "nameAr": "إثيوبيا غوجي",
        "price": 14.99,
        "images": ["/img/guji.jpg"],
        "variations": [
            {"id": "v1", "weight": "250g", "beans": "Arabica", "additions": "Normal", "price": 14.99, "stockQuantity": 25},
            {"id": "v2", "weight": "250g", "beans": "Arabica", "additions": "Ground", "price": 14.99, "stockQuantity": 30},
            {
                "id": "v3",
                "weight": "1kg",
                "beans": "Arabica",
                "additions": "Normal",
                "price": 50,
                "discount": 0.2,
                "stockQuantity": 0,
                "imageUrl": "/img/guji-1kg.jpg",
            },
        ],
    }
    data.update(overrides)
    return Product.model_validate(data)


def test_initial_state():
    view = ProductView(_product())

    assert view.selection.model_dump() == {"weight": "250g", "beans": "Arabica", "additions": "Normal"}
    assert view.variant.id == "v1"
    assert view.quantity == 1
    assert view.can_purchase
    assert view.resolution.options.weight == ["250g", "1kg"]


def test_select_re_resolves():
    view = ProductView(_product())

    view.select("additions", "Ground")
    assert view.variant.id == "v2"

    view.select("additions", "Whole Beans")
    assert view.variant.id == "v1-whole-beans"
    assert view.resolution.synthesized


def test_add_to_cart_builds_line_and_toasts():
    toasts = ToastQueue()
    view = ProductView(_product(), notifier=toasts)
    cart = Cart()

    view.select("additions", "Ground")
    view.set_quantity(2)
    line = view.add_to_cart(cart)

    assert line.id == "p1-v2"
    assert line.product_id == "p1"
    assert line.name == "Ethiopia Guji"
    assert line.price == 14.99
    assert line.quantity == 2
    assert line.image == "/img/guji.jpg"
    assert line.variation.model_dump() == {"weight": "250g", "beans": "Arabica", "additions": "Ground"}
    assert cart.total_items == 2
    assert toasts.toasts[-1].message == "2 × Ethiopia Guji added to cart"
    assert toasts.toasts[-1].level == "success"


def test_add_to_cart_in_arabic_uses_arabic_name():
    view = ProductView(_product(), translator=Translator("ar"))

    line = view.add_to_cart(Cart())

    assert line.name == "إثيوبيا غوجي"


def test_quantity_clamped_to_variant_stock():
    toasts = ToastQueue()
    view = ProductView(_product(), notifier=toasts)

    assert view.set_quantity(100) == 25
    assert toasts.toasts[0].level == "warning"
    assert view.change_quantity(-30) == 1


def test_out_of_stock_variant_blocks_purchase():
    toasts = ToastQueue()
    view = ProductView(_product(), notifier=toasts)

    view.select("weight", "1kg")

    assert view.variant.id == "v3"
    assert view.is_out_of_stock
    assert not view.can_purchase
    assert view.current_price == pytest.approx(40)
    assert view.original_price == 50
    assert view.discount_percent == 20
    assert view.image == "/img/guji-1kg.jpg"
    with pytest.raises(OutOfStockError):
        view.add_to_cart(Cart())
    assert toasts.toasts[-1].message == "Out of stock"


def test_no_matching_variant_blocks_purchase():
    toasts = ToastQueue()
    view = ProductView(_product(), notifier=toasts)
    cart = Cart()

    view.select("additions", "")
    view.select("beans", "Robusta")

    assert view.variant is None
    assert not view.can_purchase
    with pytest.raises(NoMatchingVariantError):
        view.add_to_cart(cart)
    assert cart.items == []
    assert toasts.toasts[-1].message == "Please select a variation"


def test_product_with_zero_discount_price_sells_at_full_price():
    view = ProductView(Product(id="p2", name="Blend", price=30, discountPrice=0, stockQuantity=3))

    assert view.current_price == 30
    assert view.original_price is None
    assert view.discount_percent == 0


def test_product_without_variations_is_sold_directly():
    view = ProductView(_product(variations=[], stockQuantity=4, discount=0.5))
    cart = Cart()

    path = view.buy_now(cart)

    assert path == CHECKOUT_PATH
    assert cart.items[0].id == "p1"
    assert cart.items[0].price == pytest.approx(7.495)
    assert cart.items[0].variation.model_dump() == {"weight": None, "beans": None, "additions": None}
