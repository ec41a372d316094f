"""
Active Filter Store
Immutable filter selection and the pure operations that produce new selections.

Every operation returns a new ActiveFilterSet; the caller owns the current
value and threads it through. Unknown facet keys are no-ops.
"""

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, FrozenSet, Mapping, Optional

from ..models.facets import MULTI_SELECT_FACETS, FacetKey, parse_facet_key
from ..models.vendor import parse_flag

logger = logging.getLogger(__name__)


class _Unset:
    """Sentinel that clears a facet in set_single."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


@dataclass(frozen=True)
class BudgetRange:
    """
    Inclusive price range; a None bound is unbounded on that side.

    A range with both bounds None imposes no constraint.
    """

    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def is_bounded(self) -> bool:
        return self.min is not None or self.max is not None

    @classmethod
    def coerce(cls, value: Any) -> Optional["BudgetRange"]:
        """Build a BudgetRange from a range, a {min, max} mapping, a pair or a range option."""
        if value is None or value is UNSET:
            return None
        if isinstance(value, BudgetRange):
            return value
        if isinstance(value, Mapping):
            return cls(min=value.get("min"), max=value.get("max"))
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(min=value[0], max=value[1])
        if hasattr(value, "min") and hasattr(value, "max"):
            return cls(min=value.min, max=value.max)
        raise TypeError(f"Cannot build a budget range from {value!r}")

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class ActiveFilterSet:
    """
    Current filter selection.

    Multi-select facets hold frozensets of option identifiers; scalar facets
    hold None when unset. Empty/None always means "no constraint".
    """

    services: FrozenSet[Any] = frozenset()
    cities: FrozenSet[Any] = frozenset()
    areas: FrozenSet[Any] = frozenset()
    budget: Optional[BudgetRange] = None
    rating: Optional[float] = None
    verified: Optional[bool] = None
    experience: Optional[float] = None

    def __post_init__(self):
        # Accept lists/tuples from callers, store frozensets
        for key in MULTI_SELECT_FACETS:
            value = getattr(self, key.value)
            if not isinstance(value, frozenset):
                object.__setattr__(self, key.value, _as_frozenset(value))
        if self.budget is not None and not isinstance(self.budget, BudgetRange):
            object.__setattr__(self, "budget", BudgetRange.coerce(self.budget))
        if self.verified is not None and not isinstance(self.verified, bool):
            flag = parse_flag(self.verified)
            if flag is None:
                logger.debug(f"Ignoring unrecognized verified value: {self.verified!r}")
            object.__setattr__(self, "verified", flag)

    def get(self, facet_key: Any) -> Any:
        """Current value for a facet (None for unknown keys)."""
        key = parse_facet_key(facet_key)
        return getattr(self, key.value) if key is not None else None

    @property
    def is_empty(self) -> bool:
        return active_count(self) == 0

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ActiveFilterSet":
        """
        Build a filter set from a UI payload.

        Example:
            ActiveFilterSet.from_dict({"cities": ["Pune"], "budget": {"min": 10000, "max": 30000}})
        """
        if not data:
            return cls()

        values = {}
        for name, value in data.items():
            key = parse_facet_key(name)
            if key is None or value is None:
                continue
            if key == FacetKey.BUDGET:
                try:
                    values["budget"] = BudgetRange.coerce(value)
                except TypeError:
                    logger.debug(f"from_dict ignored malformed budget: {value!r}")
            else:
                values[key.value] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Only facets that currently constrain results."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, frozenset):
                if value:
                    result[f.name] = sorted(value, key=str)
            elif isinstance(value, BudgetRange):
                if value.is_bounded:
                    result[f.name] = value.to_dict()
            elif value is not None:
                result[f.name] = value
        return result


def _as_frozenset(value: Any) -> FrozenSet[Any]:
    if value is None:
        return frozenset()
    if isinstance(value, (str, int, float)):
        return frozenset([value])
    return frozenset(value)


def toggle(active: ActiveFilterSet, facet_key: Any, value: Any) -> ActiveFilterSet:
    """
    Add `value` to a multi-select facet, or remove it if already selected.

    Args:
        active: Current selection
        facet_key: services, cities or areas
        value: Option identifier

    Returns:
        New ActiveFilterSet (the input itself for unknown or non multi-select keys)
    """
    key = parse_facet_key(facet_key)
    if key not in MULTI_SELECT_FACETS:
        logger.debug(f"toggle ignored for non multi-select facet: {facet_key}")
        return active

    current: FrozenSet[Any] = getattr(active, key.value)
    updated = current - {value} if value in current else current | {value}
    return replace(active, **{key.value: updated})


def set_single(active: ActiveFilterSet, facet_key: Any, value: Any) -> ActiveFilterSet:
    """
    Replace a facet's value outright; UNSET (or None) clears it.

    Scalar facets take a number (rating, experience) or a boolean marker
    (verified: True/False, 1/0, "true"/"false", "yes"/"no"). Multi-select facets
    take an iterable of identifiers and budget takes a BudgetRange. Values that
    cannot be read for their facet leave the selection unchanged.

    Returns:
        New ActiveFilterSet (the input itself for unknown keys)
    """
    key = parse_facet_key(facet_key)
    if key is None:
        logger.debug(f"set_single ignored for unknown facet: {facet_key}")
        return active

    if value is UNSET or value is None:
        cleared = frozenset() if key in MULTI_SELECT_FACETS else None
        return replace(active, **{key.value: cleared})

    if key in MULTI_SELECT_FACETS:
        return replace(active, **{key.value: _as_frozenset(value)})

    if key == FacetKey.BUDGET:
        try:
            budget = BudgetRange.coerce(value)
        except TypeError:
            logger.debug(f"set_single ignored malformed budget: {value!r}")
            return active
        return replace(active, budget=budget)

    if key == FacetKey.VERIFIED:
        flag = parse_flag(value)
        if flag is None:
            logger.debug(f"set_single ignored unrecognized verified value: {value!r}")
            return active
        return replace(active, verified=flag)

    try:
        threshold = float(value)
    except (TypeError, ValueError):
        logger.debug(f"set_single ignored non-numeric {key.value} threshold: {value!r}")
        return active
    return replace(active, **{key.value: threshold})


def set_budget(
    active: ActiveFilterSet, min_price: Optional[float] = None, max_price: Optional[float] = None
) -> ActiveFilterSet:
    """Replace the budget range. min > max is kept and simply matches nothing."""
    return replace(active, budget=BudgetRange(min=min_price, max=max_price))


def clear_all() -> ActiveFilterSet:
    """Fresh selection with every facet unset."""
    return ActiveFilterSet()


def active_count(active: Optional[ActiveFilterSet]) -> int:
    """
    Number of active selections, for the filter badge.

    Each selected multi-select option counts once, a bounded budget counts
    once and every set scalar facet counts once (verified=False included).
    """
    if active is None:
        return 0

    count = sum(len(getattr(active, key.value)) for key in MULTI_SELECT_FACETS)

    if active.budget is not None and active.budget.is_bounded:
        count += 1

    for value in (active.rating, active.verified, active.experience):
        if value is not None:
            count += 1

    return count


def replace_facet(active: ActiveFilterSet, facet_key: Any, value: Any) -> ActiveFilterSet:
    """
    Selection with one facet replaced by exactly one option.

    Multi-select facets become {value}, not the union with the current
    selection; every other facet is left as is. This is the synthetic
    selection the facet counter evaluates.
    """
    key = parse_facet_key(facet_key)
    if key is None:
        return active

    if key in MULTI_SELECT_FACETS:
        return replace(active, **{key.value: frozenset([value])})

    if key == FacetKey.BUDGET:
        try:
            budget = BudgetRange.coerce(value)
        except TypeError:
            logger.debug(f"replace_facet ignored malformed budget: {value!r}")
            return active
        return replace(active, budget=budget)

    if key == FacetKey.VERIFIED:
        flag = parse_flag(value)
        return active if flag is None else replace(active, verified=flag)

    return replace(active, **{key.value: value})