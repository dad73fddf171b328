"""Resolution engine mapping facet selections to catalog variants."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Sequence

from bean_variants.localization import NORMAL_ADDITION, facet_label, is_normal
from bean_variants.resolver.types import FacetOptions, Method, Resolution
from bean_variants.schema import FACETS, Facet, PlainLabel, SelectionState, Variant

BASE_FACETS: tuple[Facet, ...] = ("weight", "beans")


@dataclass(frozen=True)
class ResolverConfig:
    language: str = "en"
    weight_order: tuple[str, ...] = ("250g", "500g", "1kg")


class VariantResolver:
    """First-match variant resolver with "Normal" addition synthesis."""

    def __init__(self, config: ResolverConfig | None = None):
        self.config = config or ResolverConfig()
        self.logger = logging.getLogger(__name__)
        self._weight_rank = {
            label.casefold(): rank for rank, label in enumerate(self.config.weight_order)
        }

    def resolve(self, selection: SelectionState, catalog: Sequence[Variant]) -> Resolution:
        """Resolve a selection to an exact, synthesized, or absent variant.

        Args:
            selection: Current display label per facet. Empty facets match anything.
            catalog: Variations of one product, in source order.

        Returns:
            Resolution with the chosen variant (None when nothing applies), how it
            was chosen, and the facet options to display.
        """
        options = self.facet_options(catalog)

        exact = self._first_match(selection, catalog, FACETS)
        if exact is not None:
            return Resolution(variant=exact, method="exact", options=options)

        requested = selection.get("additions")
        if not requested:
            return Resolution(method="unmatched", options=options)

        method: Method = "normal_synthesized" if is_normal(requested) else "synthesized"
        base = self._first_match(selection, catalog, BASE_FACETS)
        if base is None:
            if not catalog:
                return Resolution(method="unmatched", options=options)
            base = catalog[0]
            method = "catalog_fallback"

        variant = self._synthesize(base, requested)
        self.logger.debug(
            "synthesized variant %s from %s (method=%s, additions=%r)",
            variant.id,
            base.id,
            method,
            requested,
        )
        return Resolution(variant=variant, method=method, base_variant_id=base.id, options=options)

    def facet_options(self, catalog: Sequence[Variant]) -> FacetOptions:
        if not catalog:
            return FacetOptions()

        weights = sorted(
            self._distinct_labels(catalog, "weight"),
            key=lambda label: self._weight_rank.get(label.casefold(), len(self._weight_rank)),
        )
        beans = self._distinct_labels(catalog, "beans")
        additions = [facet_label(NORMAL_ADDITION, self.config.language)]
        additions.extend(
            label for label in self._distinct_labels(catalog, "additions") if not is_normal(label)
        )
        return FacetOptions(weight=weights, beans=beans, additions=additions)

    def initial_selection(self, catalog: Sequence[Variant]) -> SelectionState:
        """Pick the first offered label per facet; additions start on Normal."""
        options = self.facet_options(catalog)
        return SelectionState(
            weight=options.weight[0] if options.weight else None,
            beans=options.beans[0] if options.beans else None,
            additions=options.additions[0] if options.additions else None,
        )

    def label(self, variant: Variant, facet: Facet) -> str:
        return facet_label(variant.facet(facet), self.config.language)

    def _first_match(
        self,
        selection: SelectionState,
        catalog: Sequence[Variant],
        facets: tuple[Facet, ...],
    ) -> Variant | None:
        for variant in catalog:
            if all(self._facet_matches(variant, facet, selection.get(facet)) for facet in facets):
                return variant
        return None

    def _facet_matches(self, variant: Variant, facet: Facet, wanted: str) -> bool:
        if not wanted:
            return True
        value = variant.facet(facet)
        if value is None:
            return True
        label = facet_label(value, self.config.language)
        if label.casefold() == wanted.casefold():
            return True
        return facet == "additions" and is_normal(label) and is_normal(wanted)

    def _distinct_labels(self, catalog: Sequence[Variant], facet: Facet) -> list[str]:
        labels: list[str] = []
        seen: set[str] = set()
        for variant in catalog:
            label = self.label(variant, facet)
            folded = label.casefold()
            if not label or folded in seen:
                continue
            seen.add(folded)
            labels.append(label)
        return labels

    def _synthesize(self, base: Variant, requested: str) -> Variant:
        if is_normal(requested):
            additions = NORMAL_ADDITION
            suffix = "normal"
        else:
            additions = PlainLabel(label=requested)
            suffix = _slugify(requested)
        return base.model_copy(update={"additions": additions, "id": f"{base.id}-{suffix}"})


def resolve(
    selection: SelectionState,
    catalog: Sequence[Variant],
    *,
    language: str = "en",
    weight_order: tuple[str, ...] | None = None,
) -> Resolution:
    """Resolve a selection against a catalog with a one-off resolver."""

    config = ResolverConfig(
        language=language,
        weight_order=weight_order if weight_order is not None else ResolverConfig.weight_order,
    )
    return VariantResolver(config).resolve(selection, catalog)


def find_duplicate_variants(
    catalog: Sequence[Variant],
    *,
    language: str = "en",
) -> dict[tuple[str, str, str], list[str]]:
    """Group variant ids sharing the same case-folded facet combination."""

    resolver = VariantResolver(ResolverConfig(language=language))
    groups: dict[tuple[str, str, str], list[str]] = {}
    for variant in catalog:
        key = tuple(resolver.label(variant, facet).casefold() for facet in FACETS)
        groups.setdefault(key, []).append(variant.id)
    return {key: ids for key, ids in groups.items() if len(ids) > 1}


def _slugify(value: str) -> str:
    slug = re.sub(r"[^\w]+", "-", value.casefold()).strip("-")
    return slug or "custom"
