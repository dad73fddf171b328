"""Tests for quantity and stock guards."""

from bean_variants import Product, Variant, clamp_quantity, is_out_of_stock
from bean_variants.localization import Translator
from bean_variants.notifications import ToastQueue
from bean_variants.stock import available_stock


def test_clamp_quantity_caps_at_stock_and_warns():
    toasts = ToastQueue()

    quantity = clamp_quantity(100, 3, notifier=toasts)

    assert quantity == 3
    assert [(toast.message, toast.level) for toast in toasts.toasts] == [("Only 3 left", "warning")]


def test_clamp_quantity_warning_is_localized():
    toasts = ToastQueue()

    clamp_quantity(10, 2, notifier=toasts, translator=Translator("ar"))

    assert toasts.toasts[0].message == "متبقي 2 فقط"


def test_clamp_quantity_minimum_is_one():
    toasts = ToastQueue()

    assert clamp_quantity(0, 5, notifier=toasts) == 1
    assert clamp_quantity(-4, 5, notifier=toasts) == 1
    assert toasts.toasts == []


def test_clamp_quantity_within_stock_unchanged():
    assert clamp_quantity(3, 3) == 3


def test_clamp_quantity_without_stock_has_no_upper_bound():
    assert clamp_quantity(7, None) == 7
    assert clamp_quantity(7, 0) == 7


def test_is_out_of_stock():
    assert is_out_of_stock(Variant(id="v1", price=1, stock_quantity=0))
    assert is_out_of_stock(Variant(id="v1", price=1))
    assert is_out_of_stock(None)
    assert not is_out_of_stock(Variant(id="v1", price=1, stock_quantity=5))


def test_available_stock_prefers_variant():
    product = Product(id="p1", name="Blend", stock_quantity=40)
    variant = Variant(id="v1", price=1, stock_quantity=4)

    assert available_stock(variant, product) == 4
    assert available_stock(None, product) == 40
    assert available_stock(None, None) is None
