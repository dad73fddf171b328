"""Data models for resolver output."""

from typing import Literal

from pydantic import BaseModel, Field

from bean_variants.schema import Variant

Method = Literal["exact", "normal_synthesized", "synthesized", "catalog_fallback", "unmatched"]

SYNTHESIZED_METHODS = frozenset({"normal_synthesized", "synthesized", "catalog_fallback"})


class FacetOptions(BaseModel):
    """Display labels offered for each facet, in display order."""

    weight: list[str] = Field(default_factory=list)
    beans: list[str] = Field(default_factory=list)
    additions: list[str] = Field(default_factory=list)


class Resolution(BaseModel):
    """Outcome of resolving a selection against a variation catalog."""

    variant: Variant | None = None
    method: Method = "unmatched"
    base_variant_id: str | None = None
    options: FacetOptions = Field(default_factory=FacetOptions)

    @property
    def synthesized(self) -> bool:
        return self.method in SYNTHESIZED_METHODS
