"""
Composition root: loads the dataset once and wires up the shared filter and
panel state that the viewer's panels are given.
"""
import argparse
import logging
import sys
from typing import List, Optional

from airbnb_viewer.boroughs import borough_shading
from airbnb_viewer.config import CONFIG_PATH, ViewerSettings, load_settings
from airbnb_viewer.filters import CURRENCY, ListingsFilter
from airbnb_viewer.loader import load_listings
from airbnb_viewer.presentation import StatisticPanels, apply_price_selection

logger = logging.getLogger(__name__)


class ViewerContext:
    """The state shared by the main window's panels."""

    def __init__(self, listings_filter: ListingsFilter,
                 panels: Optional[StatisticPanels] = None,
                 settings: Optional[ViewerSettings] = None):
        self.listings_filter = listings_filter
        self.panels = panels or StatisticPanels()
        self.settings = settings or ViewerSettings()

    @classmethod
    def from_config(cls, settings: ViewerSettings) -> "ViewerContext":
        listings = load_listings(settings.data_path, settings.rejects_path, settings.batch_size)
        return cls(ListingsFilter(listings), settings=settings)

    def borough_view(self, borough: Optional[str]) -> ListingsFilter:
        """A separate filter for one borough's listings window."""
        view = self.listings_filter.clone()
        if borough is not None:
            view.set_borough_filter(borough)
        else:
            view.unset_borough_filter()
        return view

    def pop_out(self) -> "ViewerContext":
        """A context for a pop-out window: it neither follows nor changes the main window."""
        return ViewerContext(self.listings_filter.clone(),
                             StatisticPanels(self.panels.selection()),
                             self.settings)

    def borough_shading(self, borough: str) -> float:
        counts = self.listings_filter.get_count_of_properties_per_borough()
        return borough_shading(counts, borough, self.settings.shading_max_opacity)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Summarise the Airbnb listings dataset.")
    parser.add_argument("--config", default=CONFIG_PATH)
    parser.add_argument("--data", help="Listings CSV (overrides the config)")
    parser.add_argument("--from", dest="from_price", help="Lowest price, e.g. £100")
    parser.add_argument("--to", dest="to_price", help="Highest price, e.g. £500 or '>£1000'")
    parser.add_argument("--borough")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.config)
    if args.data:
        settings = settings.model_copy(update={"data_path": args.data})
    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    context = ViewerContext.from_config(settings)
    listings_filter = context.listings_filter
    if args.from_price or args.to_price:
        apply_price_selection(listings_filter,
                              args.from_price or f"{CURRENCY}0",
                              args.to_price or f">{CURRENCY}{settings.price_max}")
    if args.borough:
        listings_filter.set_borough_filter(args.borough)

    description = listings_filter.get_description()
    logger.info(f"{description}: {len(listings_filter.get_listings())} listings")
    print(description.strip())
    for title, value in context.panels.render(listings_filter.get_statistics()):
        print(f"{title}: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
