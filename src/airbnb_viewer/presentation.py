"""
Display helpers for the viewer's panels.

Nothing here draws anything: these are the pieces the panels share for
turning listings, filters and statistics into text and back.
"""
import threading
from collections import deque
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from airbnb_viewer.filters import CURRENCY, NO_LIMIT, ListingsFilter
from airbnb_viewer.models import ListingRecord
from airbnb_viewer.stats import ListingStatistics

# Display name -> ListingStatistics attribute, in carousel order
STATISTIC_NAMES = {
    "Reviews per property": "reviews_per_property",
    "Total available properties": "total_available_properties",
    "Entire homes or apartments": "entire_homes_or_apartments",
    "Most expensive borough": "most_expensive_borough",
    "Properties per borough": "properties_per_borough",
    "Total reviews per month": "total_reviews_per_month",
    "Most reviewed borough": "most_reviewed_borough",
    "Most actively reviewed borough": "most_actively_reviewed_borough",
}

NO_BOROUGH = "-"


def format_statistic(stats: ListingStatistics, name: str) -> str:
    """Text for the statistic shown as `name`. Averages and totals are rounded to 3 places."""
    value = getattr(stats, STATISTIC_NAMES[name])
    if value is None:
        return NO_BOROUGH
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)


# --- Listings table ---
SORT_OPTIONS = {
    "Host Name": lambda listing: listing.host_name,
    "Price per Night": lambda listing: listing.price,
    "Number of Reviews": lambda listing: listing.number_of_reviews,
    "Minimum Number of Nights": lambda listing: listing.minimum_nights,
}


def sort_listings(listings: Iterable[ListingRecord], sort_by: str, reverse: bool = False) -> Tuple[ListingRecord, ...]:
    if sort_by not in SORT_OPTIONS:
        raise ValueError(f"Unexpected sorting type: {sort_by}")
    return tuple(sorted(listings, key=SORT_OPTIONS[sort_by], reverse=reverse))


def describe_listing(listing: ListingRecord) -> str:
    """Property details, one field per line."""
    last_review = listing.last_review.isoformat() if listing.last_review else "Never"
    return "\n".join([
        f"ID: {listing.id}",
        f"Name: {listing.name}",
        f"Host ID: {listing.host_id}",
        f"Host Name: {listing.host_name}",
        f"Neighbourhood: {listing.neighbourhood}",
        f"Latitude: {listing.latitude}",
        f"Longitude: {listing.longitude}",
        f"Room type: {listing.room_type}",
        f"Price: {CURRENCY}{listing.price}",
        f"Minimum nights: {listing.minimum_nights}",
        f"Number of reviews: {listing.number_of_reviews}",
        f"Last review: {last_review}",
        f"Reviews per month: {listing.reviews_per_month}",
        f"Calculated host listings count: {listing.calculated_host_listings_count}",
        f"Availability 365: {listing.availability_365}",
    ])


# --- Price range menus ---
def price_menu_options(step: int = 100, maximum: int = 1000) -> Tuple[List[str], List[str]]:
    """
    The 'from' and 'to' price menus.
    The last 'to' option, e.g. '>£1000', means no upper limit.
    """
    from_options = [f"{CURRENCY}{price}" for price in range(0, maximum + 1, step)]
    to_options = [f"{CURRENCY}{price}" for price in range(step, maximum + 1, step)]
    to_options.append(f">{CURRENCY}{maximum}")
    return from_options, to_options


def parse_price_option(option: str) -> Optional[int]:
    text = option.strip()
    if text.startswith(">"):
        return NO_LIMIT
    return int(text.replace(CURRENCY, "").replace(",", ""))


def apply_price_selection(listings_filter: ListingsFilter,
                          from_option: Optional[str],
                          to_option: Optional[str]) -> bool:
    """
    Applies the menus' price range to `listings_filter`.
    Returns False without changing anything until both menus have a value.
    """
    if from_option is None or to_option is None:
        return False
    lower = parse_price_option(from_option)
    upper = parse_price_option(to_option)
    if lower is NO_LIMIT:
        raise ValueError(f"'{from_option}' is not a valid lower price")
    if upper is not NO_LIMIT and lower > upper:
        raise ValueError(f"Invalid price range: {from_option} to {to_option}")
    listings_filter.set_price_filter(lower, upper)
    return True


# --- Statistics panels ---
class Panel(Enum):
    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4


class StatisticPanels:
    """
    Which statistic each of the four panels shows.
    Statistics not on a panel wait in a queue; moving a panel forward or back
    swaps its statistic with the next one in the queue.
    """

    def __init__(self, saved: Optional[Mapping[Panel, str]] = None):
        self._lock = threading.Lock()
        self._hidden = deque(STATISTIC_NAMES)
        self._shown: Dict[Panel, str] = {}
        if saved:
            for panel, name in saved.items():
                if name not in self._hidden:
                    raise ValueError(f"Cannot restore {name!r} to {panel.name}: unknown or already shown")
                self._hidden.remove(name)
                self._shown[panel] = name
        for panel in Panel:
            if panel not in self._shown:
                self._shown[panel] = self._hidden.popleft()

    def shown(self, panel: Panel) -> str:
        with self._lock:
            return self._shown[panel]

    def forward(self, panel: Panel) -> str:
        with self._lock:
            self._hidden.append(self._shown[panel])
            self._shown[panel] = self._hidden.popleft()
            return self._shown[panel]

    def back(self, panel: Panel) -> str:
        with self._lock:
            self._hidden.appendleft(self._shown[panel])
            self._shown[panel] = self._hidden.pop()
            return self._shown[panel]

    def selection(self) -> Dict[Panel, str]:
        """A copy of the current panel selection, for restoring later."""
        with self._lock:
            return dict(self._shown)

    def render(self, stats: ListingStatistics) -> List[Tuple[str, str]]:
        """(title, value) for each panel in order."""
        with self._lock:
            return [(self._shown[panel], format_statistic(stats, self._shown[panel])) for panel in Panel]
