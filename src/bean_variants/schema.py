"""Data models for bean-variants."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

DiscountType = Literal["PERCENTAGE", "FIXED_AMOUNT"]
Facet = Literal["weight", "beans", "additions"]

FACETS: tuple[Facet, ...] = ("weight", "beans", "additions")

# Older stored variations use `size` for weight and `type` for additions.
LEGACY_FACET_ALIASES = {"size": "weight", "type": "additions"}


class WireModel(BaseModel):
    """Base model speaking the storefront's camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlainLabel(WireModel):
    """Facet value given as a bare display label, e.g. "250g"."""

    kind: Literal["plain"] = "plain"
    label: str


class LocalizedLabel(WireModel):
    """Facet value given as a catalog object with English/Arabic names."""

    kind: Literal["localized"] = "localized"
    id: str | None = None
    name: str | None = None
    name_ar: str | None = None
    arabic_name: str | None = None
    display_name: str | None = None
    display_name_ar: str | None = None
    value: int | float | str | None = None


FacetValue = Annotated[PlainLabel | LocalizedLabel, Field(discriminator="kind")]


def _coerce_facet(value: Any) -> Any:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return {"kind": "plain", "label": value}
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return {"kind": "plain", "label": str(value)}
    if isinstance(value, dict) and "kind" not in value:
        return {"kind": "localized", **value}
    return value


class PricedItem(WireModel):
    """Shared price, discount and stock fields of products and variants."""

    price: float = Field(default=0.0, ge=0)
    discount: float | None = Field(default=None, ge=0)
    discount_type: DiscountType = "PERCENTAGE"
    discount_price: float | None = Field(default=None, ge=0)
    stock_quantity: int | None = Field(default=None, ge=0)

    @field_validator("discount_type", mode="before")
    @classmethod
    def _default_discount_type(cls, value: Any) -> Any:
        return value or "PERCENTAGE"

    @model_validator(mode="after")
    def _check_discount_scale(self):
        if self.discount_type == "PERCENTAGE" and self.discount is not None and self.discount > 1:
            raise ValueError(
                f"percentage discount must be a fraction between 0 and 1, got {self.discount}"
            )
        return self


class Variant(PricedItem):
    """One purchasable SKU of a product."""

    id: str
    weight: FacetValue | None = None
    beans: FacetValue | None = None
    additions: FacetValue | None = None
    sku: str | None = None
    image_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _migrate_legacy_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for legacy, current in LEGACY_FACET_ALIASES.items():
            legacy_value = data.pop(legacy, None)
            if legacy_value and not data.get(current):
                data[current] = legacy_value
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("weight", "beans", "additions", mode="before")
    @classmethod
    def _coerce_facets(cls, value: Any) -> Any:
        return _coerce_facet(value)

    def facet(self, name: Facet) -> PlainLabel | LocalizedLabel | None:
        return getattr(self, name)


class Product(PricedItem):
    """A catalog product and its variations."""

    id: str
    name: str = ""
    name_ar: str | None = None
    slug: str | None = None
    description: str | None = None
    description_ar: str | None = None
    category: str | None = None
    images: list[str] = Field(default_factory=list)
    image_url: str | None = None
    variations: list[Variant] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("images", mode="before")
    @classmethod
    def _flatten_images(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [item.get("url", "") if isinstance(item, dict) else item for item in value]
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _category_name(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return value.get("name")
        return value

    @field_validator("variations", mode="before")
    @classmethod
    def _null_variations(cls, value: Any) -> Any:
        return value or []

    def display_name(self, language: str = "en") -> str:
        if language == "ar" and self.name_ar:
            return self.name_ar
        return self.name

    @property
    def primary_image(self) -> str | None:
        if self.image_url:
            return self.image_url
        return next((image for image in self.images if image), None)


class SelectionState(BaseModel):
    """Currently chosen display label per facet."""

    weight: str | None = None
    beans: str | None = None
    additions: str | None = None

    def get(self, facet: Facet) -> str:
        return getattr(self, facet) or ""

    def select(self, facet: Facet, value: str | None) -> None:
        if facet not in FACETS:
            raise ValueError(f"Unknown facet: {facet}")
        setattr(self, facet, value or None)
