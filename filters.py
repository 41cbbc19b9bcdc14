"""Manual filter state and its reconciliation with parsed query constraints."""

from __future__ import annotations

from dataclasses import dataclass, replace

from query_parser import ParsedQuery, QueryParser, parse_query

ALL_CATEGORIES = "All"


@dataclass(frozen=True)
class FilterState:
    """Filters set directly by the user, independent of query parsing."""

    category: str = ALL_CATEGORIES
    price_min: float | None = None
    price_max: float | None = None
    rating_min: float | None = None

    @property
    def category_constraint(self) -> str | None:
        return None if self.category == ALL_CATEGORIES else self.category


@dataclass(frozen=True)
class TouchedFields:
    """Fields the user changed by hand; parsed values never overwrite them."""

    category: bool = False
    price_min: bool = False
    price_max: bool = False
    rating_min: bool = False


@dataclass(frozen=True)
class AutoAppliedFilters:
    """Values copied from the last parsed query into the filter state."""

    category: str | None = None
    price_min: float | None = None
    price_max: float | None = None
    rating_min: float | None = None


@dataclass(frozen=True)
class ReconciledFilters:
    filters: FilterState
    auto_applied: AutoAppliedFilters


_NUMERIC_FIELDS = ("price_min", "price_max", "rating_min")


def apply_parsed_filters(
    parsed: ParsedQuery,
    filters: FilterState,
    touched: TouchedFields,
) -> ReconciledFilters:
    """Copy parsed constraints into untouched filter fields."""
    updates: dict[str, object] = {}

    if parsed.category and not touched.category:
        updates["category"] = parsed.category

    for name in _NUMERIC_FIELDS:
        value = getattr(parsed, name)
        if value is not None and not getattr(touched, name):
            updates[name] = value

    return ReconciledFilters(
        filters=replace(filters, **updates),
        auto_applied=AutoAppliedFilters(**updates),
    )


def revert_auto_filters(
    filters: FilterState,
    touched: TouchedFields,
    last_auto: AutoAppliedFilters,
) -> FilterState:
    """Reset fields that were auto-applied and not touched since."""
    updates: dict[str, object] = {}

    if last_auto.category is not None and not touched.category:
        updates["category"] = ALL_CATEGORIES

    for name in _NUMERIC_FIELDS:
        if getattr(last_auto, name) is not None and not getattr(touched, name):
            updates[name] = None

    return replace(filters, **updates)


def submit_query(
    query: str,
    filters: FilterState,
    touched: TouchedFields,
    last_auto: AutoAppliedFilters,
    parser: QueryParser | None = None,
) -> ReconciledFilters:
    """Reconcile filters for a submitted query; an empty query reverts auto values."""
    trimmed = (query or "").strip()
    if not trimmed:
        return ReconciledFilters(
            filters=revert_auto_filters(filters, touched, last_auto),
            auto_applied=AutoAppliedFilters(),
        )

    parsed = parser.parse(trimmed) if parser else parse_query(trimmed)
    return apply_parsed_filters(parsed, filters, touched)
