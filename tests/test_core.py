"""Tests for catalog fetching."""

import json
from urllib import error

import pytest

from bean_variants import fetch_product
from bean_variants.exceptions import CatalogFetchError
from bean_variants.sources import HttpCatalogSource, JsonFileCatalogSource

PRODUCT = {
    "id": "p1",
    "slug": "ethiopia-guji",
    "name": "Ethiopia Guji",
    "price": 14.99,
    "variations": [
        {"id": 1, "size": "250g", "type": "Ground", "price": 14.99, "stockQuantity": 5},
    ],
}


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([PRODUCT]), encoding="utf-8")
    return path


def test_fetch_product_from_file_by_slug(catalog_file):
    result = fetch_product("ethiopia-guji", source="file", path=catalog_file)

    assert result.ok
    variant = result.product.variations[0]
    assert variant.id == "1"
    assert variant.weight.label == "250g"
    assert variant.additions.label == "Ground"


def test_fetch_product_uses_env_source(monkeypatch, catalog_file):
    monkeypatch.setenv("BEAN_VARIANTS_SOURCE", "file")
    monkeypatch.setenv("CATALOG_PATH", str(catalog_file))

    result = fetch_product("p1")

    assert result.product.name == "Ethiopia Guji"


def test_fetch_product_missing_product_returns_error(catalog_file):
    result = fetch_product("missing", source="file", path=catalog_file)

    assert not result.ok
    assert result.product is None
    assert isinstance(result.error, CatalogFetchError)


def test_file_source_single_product_without_id(tmp_path):
    path = tmp_path / "one.json"
    path.write_text(json.dumps(PRODUCT), encoding="utf-8")

    assert JsonFileCatalogSource(path).fetch_product("").id == "p1"


def test_file_source_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(CatalogFetchError):
        JsonFileCatalogSource(path).fetch_product("p1")


def test_fetch_product_over_http(mocker):
    urlopen = mocker.patch("bean_variants.sources.storefront_api.request.urlopen")
    urlopen.return_value.__enter__.return_value.read.return_value = json.dumps(PRODUCT).encode("utf-8")

    result = fetch_product("p1", source="http", base_url="https://shop.example/")

    assert result.ok
    assert result.product.id == "p1"
    req = urlopen.call_args.args[0]
    assert req.full_url == "https://shop.example/api/products/p1"


def test_fetch_product_http_error_is_reported(mocker):
    mocker.patch(
        "bean_variants.sources.storefront_api.request.urlopen",
        side_effect=error.HTTPError("https://shop.example/api/products/p1", 500, "Server Error", None, None),
    )

    result = fetch_product("p1", source="http", base_url="https://shop.example")

    assert not result.ok
    assert "HTTP 500" in str(result.error)


def test_http_source_requires_base_url():
    with pytest.raises(CatalogFetchError):
        HttpCatalogSource("")


def test_fetch_product_unsupported_source():
    with pytest.raises(ValueError, match="Unsupported catalog source"):
        fetch_product("p1", source="ftp")
