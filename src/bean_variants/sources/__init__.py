"""Catalog sources for bean-variants."""

from bean_variants.sources.base import BaseCatalogSource
from bean_variants.sources.file import JsonFileCatalogSource
from bean_variants.sources.storefront_api import HttpCatalogSource

__all__ = ["BaseCatalogSource", "HttpCatalogSource", "JsonFileCatalogSource"]
