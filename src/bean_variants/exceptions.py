"""Custom exceptions for bean-variants."""


class BeanVariantsError(Exception):
    """Base exception for bean-variants."""

    pass


class CatalogFetchError(BeanVariantsError):
    """Raised when a product or its variations cannot be fetched or parsed."""

    pass


class NoMatchingVariantError(BeanVariantsError):
    """Raised when a purchase is attempted without a resolved variant."""

    pass


class OutOfStockError(BeanVariantsError):
    """Raised when a purchase is attempted on an out-of-stock item."""

    pass


class PromotionError(BeanVariantsError):
    """Raised when a promotion cannot be applied to an order."""

    def __init__(self, reason: str, message: str | None = None):
        super().__init__(message or reason)
        self.reason = reason
