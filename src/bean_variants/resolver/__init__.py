"""Variant resolution for bean-variants."""

from bean_variants.resolver.engine import (
    ResolverConfig,
    VariantResolver,
    find_duplicate_variants,
    resolve,
)
from bean_variants.resolver.types import FacetOptions, Resolution

__all__ = [
    "FacetOptions",
    "Resolution",
    "ResolverConfig",
    "VariantResolver",
    "find_duplicate_variants",
    "resolve",
]
