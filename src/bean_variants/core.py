"""Core catalog fetch function."""

import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from bean_variants.exceptions import CatalogFetchError
from bean_variants.schema import Product
from bean_variants.sources.base import BaseCatalogSource

logger = logging.getLogger(__name__)


class CatalogResult(BaseModel):
    """Fetched product, or the error explaining why there is none."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    product: Product | None = None
    error: CatalogFetchError | None = None

    @property
    def ok(self) -> bool:
        return self.product is not None


def _timeout_from_env() -> float:
    raw = os.getenv("CATALOG_TIMEOUT_SEC")
    try:
        return float(raw) if raw else 5.0
    except ValueError:
        return 5.0


def _build_http_source(base_url: str | None) -> BaseCatalogSource:
    from bean_variants.sources.storefront_api import HttpCatalogSource

    return HttpCatalogSource(
        base_url or os.getenv("CATALOG_BASE_URL", ""),
        timeout_sec=_timeout_from_env(),
    )


def _build_file_source(path: str | Path | None) -> BaseCatalogSource:
    from bean_variants.sources.file import JsonFileCatalogSource

    resolved = path or os.getenv("CATALOG_PATH")
    if not resolved:
        raise CatalogFetchError("Catalog file path is required")
    return JsonFileCatalogSource(resolved)


def _select_source(
    source: str | None,
    base_url: str | None,
    path: str | Path | None,
) -> BaseCatalogSource:
    source_name = (source or os.getenv("BEAN_VARIANTS_SOURCE", "http")).strip().lower()
    if source_name in {"http", "api"}:
        return _build_http_source(base_url)
    if source_name in {"file", "json"}:
        return _build_file_source(path)
    raise ValueError(f"Unsupported catalog source: {source_name}")


def fetch_product(
    product_id: str,
    *,
    source: str | None = None,
    base_url: str | None = None,
    path: str | Path | None = None,
) -> CatalogResult:
    """Fetch a product and its variation catalog.

    Args:
        product_id: Product id or slug.
        source: Source name (`http` or `file`). Defaults to
            `BEAN_VARIANTS_SOURCE` env var, then `http`.
        base_url: Storefront base URL. Falls back to CATALOG_BASE_URL env var.
        path: Catalog JSON file. Falls back to CATALOG_PATH env var.

    Returns:
        CatalogResult holding the product, or the fetch error. Failures are
        never replaced with placeholder data.
    """
    try:
        catalog_source = _select_source(source, base_url, path)
        product = catalog_source.fetch_product(product_id)
    except CatalogFetchError as exc:
        logger.warning("catalog fetch failed for %s: %s", product_id, exc)
        return CatalogResult(error=exc)
    return CatalogResult(product=product)
