"""
Filtering over the loaded listings.

A ListingsFilter keeps the full dataset and the current filter criteria.
Changing a criterion always starts again from the full dataset; the filtered
listings, their statistics and the per-borough counts are cached until the
criteria actually change.
"""
import logging
from collections import Counter
from enum import Enum
from types import MappingProxyType
from typing import Callable, Generic, Mapping, Optional, Sequence, Tuple, TypeVar

from airbnb_viewer.models import ListingRecord
from airbnb_viewer.stats import ListingStatistics

# Upper price bound meaning "no limit"
NO_LIMIT = None

DESCRIPTION_BASE = "Listings "
CURRENCY = "£"

T = TypeVar("T")

logger = logging.getLogger(__name__)


class CacheState(Enum):
    UNSET = "unset"
    VALID = "valid"


class CacheSlot(Generic[T]):
    """A lazily filled value that is either UNSET or VALID."""

    def __init__(self, name: str):
        self.name = name
        self.state = CacheState.UNSET
        self._value: Optional[T] = None

    def get(self, compute: Callable[[], T]) -> T:
        if self.state is CacheState.UNSET:
            logger.debug(f"Recomputing {self.name}")
            self._value = compute()
            self.state = CacheState.VALID
        return self._value

    def invalidate(self) -> None:
        self.state = CacheState.UNSET
        self._value = None

    def copy(self) -> "CacheSlot[T]":
        # Cached values are immutable snapshots, so the copy shares them
        other = CacheSlot(self.name)
        other.state = self.state
        other._value = self._value
        return other


class ListingsFilter:
    """
    Holds the loaded listings and the current price and borough filters.

    Only one thread may use an instance. Use clone() to get an independent
    filter for another view.
    """

    def __init__(self, listings: Sequence[ListingRecord]):
        # Never modified; shared by every clone
        self._original_listings = listings

        self._price_filter = False
        self._price_lower = 0
        self._price_upper: Optional[int] = NO_LIMIT
        self._borough_filter: Optional[str] = None

        self._filtered_listings: CacheSlot[Tuple[ListingRecord, ...]] = CacheSlot("filtered listings")
        self._statistics: CacheSlot[ListingStatistics] = CacheSlot("statistics")
        self._properties_per_borough: CacheSlot[Mapping[str, int]] = CacheSlot("properties per borough")

    # --- Price filter ---
    def set_price_filter(self, lower: int, upper: Optional[int] = NO_LIMIT) -> None:
        """
        Only keep listings priced from `lower` to `upper`, both inclusive.
        Pass NO_LIMIT as `upper` for no upper bound.
        """
        _check_price(lower, "lower")
        if lower < 0:
            raise ValueError(f"Lower price bound must not be negative, got {lower}")
        if upper is not NO_LIMIT:
            _check_price(upper, "upper")
            if upper < lower:
                raise ValueError(f"Upper price bound {upper} is below lower price bound {lower}")

        if not self._price_filter or self._price_lower != lower or self._price_upper != upper:
            self._price_filter = True
            self._price_lower = lower
            self._price_upper = upper
            logger.info(f"Price filter set to {lower}-{'no limit' if upper is NO_LIMIT else upper}")
            self._clear_cache()

    def unset_price_filter(self) -> None:
        if self._price_filter:
            self._price_filter = False
            logger.info("Price filter removed")
            self._clear_cache()

    def get_lower_price_filter(self) -> int:
        """The lowest price allowed, or 0 if the price filter is disabled."""
        return self._price_lower if self._price_filter else 0

    def get_upper_price_filter(self) -> Optional[int]:
        """The highest price allowed, or NO_LIMIT if the price filter is disabled."""
        return self._price_upper if self._price_filter else NO_LIMIT

    # --- Borough filter ---
    def set_borough_filter(self, borough: str) -> None:
        if not isinstance(borough, str):
            raise TypeError(f"Borough must be a string, got {type(borough).__name__}")
        if borough != self._borough_filter:
            self._borough_filter = borough
            logger.info(f"Borough filter set to {borough}")
            self._clear_cache()

    def unset_borough_filter(self) -> None:
        if self._borough_filter is not None:
            self._borough_filter = None
            logger.info("Borough filter removed")
            self._clear_cache()

    def get_borough_filter(self) -> Optional[str]:
        return self._borough_filter

    # --- Derived views ---
    def get_listings(self) -> Tuple[ListingRecord, ...]:
        """The listings matching every enabled filter, in dataset order."""
        return self._filtered_listings.get(self._filter_listings)

    def get_statistics(self) -> ListingStatistics:
        return self._statistics.get(lambda: ListingStatistics.from_listings(self.get_listings()))

    def get_count_of_properties_per_borough(self) -> Mapping[str, int]:
        """
        Read-only mapping of borough name to the number of filtered listings in it.
        Boroughs without any filtered listings are absent.
        """
        return self._properties_per_borough.get(
            lambda: MappingProxyType(dict(Counter(listing.neighbourhood for listing in self.get_listings())))
        )

    def get_description(self) -> str:
        """
        Describes the listings at the current settings,
        e.g. 'Listings for Camden with prices from £100 to £200'.
        """
        description = DESCRIPTION_BASE
        if self._borough_filter is not None:
            description += f"for {self._borough_filter} "

        lower_filter = self._price_lower > 0
        upper_filter = self._price_upper is not NO_LIMIT
        if self._price_filter and (lower_filter or upper_filter):
            description += "with prices "
            if lower_filter:
                description += f"from {CURRENCY}{self._price_lower}"
                if upper_filter:
                    description += " "
            if upper_filter:
                description += f"to {CURRENCY}{self._price_upper}"
        return description

    def clone(self) -> "ListingsFilter":
        """
        An independent copy with the same criteria.
        The dataset and any cached snapshots are shared, not copied.
        """
        other = ListingsFilter.__new__(ListingsFilter)
        other._original_listings = self._original_listings
        other._price_filter = self._price_filter
        other._price_lower = self._price_lower
        other._price_upper = self._price_upper
        other._borough_filter = self._borough_filter
        other._filtered_listings = self._filtered_listings.copy()
        other._statistics = self._statistics.copy()
        other._properties_per_borough = self._properties_per_borough.copy()
        return other

    def _criteria(self) -> tuple:
        return (self._price_filter, self._price_lower, self._price_upper, self._borough_filter)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ListingsFilter):
            return NotImplemented
        return (self._original_listings is other._original_listings
                and self._criteria() == other._criteria())

    def __hash__(self) -> int:
        return hash((id(self._original_listings),) + self._criteria())

    def __repr__(self) -> str:
        return f"ListingsFilter({self.get_description().strip()!r})"

    # --- Helpers ---
    def _filter_listings(self) -> Tuple[ListingRecord, ...]:
        return tuple(listing for listing in self._original_listings if self._matches(listing))

    def _matches(self, listing: ListingRecord) -> bool:
        if self._price_filter:
            if listing.price < self._price_lower:
                return False
            if self._price_upper is not NO_LIMIT and listing.price > self._price_upper:
                return False
        if self._borough_filter is not None and listing.neighbourhood != self._borough_filter:
            return False
        return True

    def _clear_cache(self) -> None:
        self._filtered_listings.invalidate()
        self._statistics.invalidate()
        self._properties_per_borough.invalidate()


def _check_price(value: object, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name.capitalize()} price bound must be an int, got {value!r}")
