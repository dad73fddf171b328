"""Base catalog source interface."""

from abc import ABC, abstractmethod

from bean_variants.schema import Product


class BaseCatalogSource(ABC):
    """Abstract base class for product catalog sources."""

    @abstractmethod
    def fetch_product(self, product_id: str) -> Product:
        """Fetch a product with its variations.

        Args:
            product_id: Product id or slug

        Returns:
            Product with legacy variation fields already migrated

        Raises:
            CatalogFetchError: The product could not be fetched or parsed
        """
        pass
