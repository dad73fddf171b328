"""Tests for schema models."""

import pytest
from pydantic import ValidationError

from bean_variants import Product, SelectionState, Variant
from bean_variants.schema import LocalizedLabel, PlainLabel


def test_variant_plain_string_facets():
    variant = Variant(id="v1", weight="250g", beans="Arabica", additions="Ground", price=10)

    assert variant.weight == PlainLabel(label="250g")
    assert variant.beans.label == "Arabica"
    assert variant.additions.kind == "plain"


def test_variant_object_facets_become_localized_labels():
    variant = Variant.model_validate(
        {
            "id": "v1",
            "weight": {"id": "w1", "name": "250g", "value": 250, "displayName": "250 g", "nameAr": "٢٥٠ غ"},
            "price": 10,
        }
    )

    assert isinstance(variant.weight, LocalizedLabel)
    assert variant.weight.name == "250g"
    assert variant.weight.display_name == "250 g"
    assert variant.weight.name_ar == "٢٥٠ غ"


def test_variant_all_facets_optional():
    variant = Variant(id="v1", price=10)

    assert variant.weight is None
    assert variant.beans is None
    assert variant.additions is None
    assert variant.stock_quantity is None


def test_variant_legacy_fields_migrate_to_new_names():
    variant = Variant.model_validate({"id": "v1", "size": "500g", "type": "Ground", "price": 20})

    assert variant.weight.label == "500g"
    assert variant.additions.label == "Ground"
    assert "size" not in variant.model_dump()


def test_variant_new_fields_win_over_legacy_fields():
    variant = Variant.model_validate(
        {"id": "v1", "weight": "1kg", "size": "500g", "additions": "Normal", "type": "Ground", "price": 20}
    )

    assert variant.weight.label == "1kg"
    assert variant.additions.label == "Normal"


def test_variant_camel_case_wire_fields():
    variant = Variant.model_validate(
        {
            "id": 7,
            "price": 20,
            "discount": 5,
            "discountType": "FIXED_AMOUNT",
            "stockQuantity": 3,
            "imageUrl": "/img/v.jpg",
        }
    )

    assert variant.id == "7"
    assert variant.discount_type == "FIXED_AMOUNT"
    assert variant.stock_quantity == 3
    assert variant.image_url == "/img/v.jpg"
    assert variant.model_dump(by_alias=True)["stockQuantity"] == 3


def test_variant_discount_type_defaults_to_percentage():
    variant = Variant.model_validate({"id": "v1", "price": 20, "discount": 0.1, "discountType": None})

    assert variant.discount_type == "PERCENTAGE"


def test_percentage_discount_must_be_a_fraction():
    with pytest.raises(ValidationError):
        Variant(id="v1", price=20, discount=15, discount_type="PERCENTAGE")


def test_negative_price_and_stock_rejected():
    with pytest.raises(ValidationError):
        Variant(id="v1", price=-1)
    with pytest.raises(ValidationError):
        Variant(id="v1", price=1, stock_quantity=-2)


def test_product_images_and_display_name():
    product = Product.model_validate(
        {
            "id": "p1",
            "name": "Ethiopia Guji",
            "nameAr": "إثيوبيا غوجي",
            "images": [{"url": "/img/a.jpg"}, "/img/b.jpg"],
            "category": {"name": "Single Origin", "nameAr": "منشأ واحد"},
            "variations": None,
        }
    )

    assert product.images == ["/img/a.jpg", "/img/b.jpg"]
    assert product.primary_image == "/img/a.jpg"
    assert product.category == "Single Origin"
    assert product.variations == []
    assert product.display_name("ar") == "إثيوبيا غوجي"
    assert product.display_name("en") == "Ethiopia Guji"


def test_product_image_url_takes_precedence():
    product = Product(id="p1", name="Blend", image_url="/img/main.jpg", images=["/img/a.jpg"])

    assert product.primary_image == "/img/main.jpg"


def test_selection_state_select():
    selection = SelectionState()

    selection.select("weight", "250g")
    selection.select("additions", "")

    assert selection.weight == "250g"
    assert selection.additions is None
    assert selection.get("beans") == ""


def test_selection_state_rejects_unknown_facet():
    with pytest.raises(ValueError):
        SelectionState().select("roast", "Dark")
