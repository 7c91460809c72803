import threading

import pytest

from airbnb_viewer.filters import NO_LIMIT, ListingsFilter
from airbnb_viewer.presentation import (
    STATISTIC_NAMES, Panel, StatisticPanels, apply_price_selection, describe_listing,
    format_statistic, parse_price_option, price_menu_options, sort_listings,
)
from airbnb_viewer.stats import ListingStatistics


# --- Statistics ---
def test_format_statistic(simple_listings):
    stats = ListingStatistics.from_listings(simple_listings)
    assert format_statistic(stats, "Reviews per property") == "48.000"
    assert format_statistic(stats, "Total available properties") == "4"
    assert format_statistic(stats, "Most expensive borough") == "Walford"
    assert format_statistic(stats, "Properties per borough") == "2.500"
    assert format_statistic(stats, "Total reviews per month") == "1.150"

def test_format_statistic_without_listings():
    stats = ListingStatistics.from_listings([])
    assert format_statistic(stats, "Most reviewed borough") == "-"
    assert format_statistic(stats, "Reviews per property") == "0.000"

def test_format_unknown_statistic():
    with pytest.raises(KeyError):
        format_statistic(ListingStatistics(), "Cheapest borough")


# --- Listings table ---
def test_sort_listings(simple_listings):
    by_price = sort_listings(simple_listings, "Price per Night")
    assert [listing.price for listing in by_price] == [20, 20, 25, 300, 500]
    # Equal prices keep dataset order
    assert [listing.id for listing in by_price[:2]] == ["l2", "l4"]

def test_sort_listings_reversed(simple_listings):
    by_reviews = sort_listings(simple_listings, "Number of Reviews", reverse=True)
    assert [listing.number_of_reviews for listing in by_reviews] == [100, 50, 40, 25, 25]
    by_host = sort_listings(simple_listings, "Host Name")
    assert [listing.host_name for listing in by_host] == ["Blah", "Bleh", "Blih", "Bloh", "Bluh"]

def test_sort_listings_unknown_option(simple_listings):
    with pytest.raises(ValueError):
        sort_listings(simple_listings, "Colour")

def test_describe_listing(simple_listings):
    text = describe_listing(simple_listings[0]).splitlines()
    assert text[0] == "ID: l1"
    assert "Neighbourhood: Walford" in text
    assert "Price: £25" in text
    assert "Last review: 2016-12-03" in text
    assert text[-1] == "Availability 365: 20"


# --- Price menus ---
def test_price_menu_options():
    from_options, to_options = price_menu_options(100, 1000)
    assert from_options[0] == "£0"
    assert from_options[-1] == "£1000"
    assert len(from_options) == 11
    assert to_options[0] == "£100"
    assert to_options[-1] == ">£1000"
    assert len(to_options) == 11

@pytest.mark.parametrize("option, price", [("£0", 0), ("£300", 300), ("£1,000", 1000), (">£1000", NO_LIMIT)])
def test_parse_price_option(option, price):
    assert parse_price_option(option) == price

def test_apply_price_selection(simple_listings):
    listings_filter = ListingsFilter(simple_listings)
    assert apply_price_selection(listings_filter, "£100", ">£1000")
    assert listings_filter.get_lower_price_filter() == 100
    assert listings_filter.get_upper_price_filter() is NO_LIMIT
    assert [listing.id for listing in listings_filter.get_listings()] == ["l3", "l5"]

def test_apply_incomplete_price_selection(simple_listings):
    listings_filter = ListingsFilter(simple_listings)
    assert not apply_price_selection(listings_filter, "£100", None)
    assert listings_filter.get_lower_price_filter() == 0

def test_apply_inverted_price_selection(simple_listings):
    listings_filter = ListingsFilter(simple_listings)
    listings_filter.set_price_filter(0, 100)
    with pytest.raises(ValueError):
        apply_price_selection(listings_filter, "£500", "£100")
    assert listings_filter.get_upper_price_filter() == 100


# --- Statistic panels ---
def test_panels_start_with_first_four_statistics():
    panels = StatisticPanels()
    names = list(STATISTIC_NAMES)
    assert [panels.shown(panel) for panel in Panel] == names[:4]

def test_panels_forward_and_back():
    panels = StatisticPanels()
    assert panels.forward(Panel.FIRST) == "Properties per borough"
    assert panels.back(Panel.FIRST) == "Reviews per property"
    assert panels.back(Panel.SECOND) == "Most actively reviewed borough"

def test_panels_never_show_duplicates():
    panels = StatisticPanels()
    for _ in range(10):
        panels.forward(Panel.THIRD)
        panels.back(Panel.FOURTH)
        shown = list(panels.selection().values())
        assert len(set(shown)) == 4

def test_panels_restore_selection():
    panels = StatisticPanels()
    panels.forward(Panel.SECOND)
    restored = StatisticPanels(panels.selection())
    assert restored.selection() == panels.selection()
    # The hidden statistics still cycle through everything not shown
    seen = {restored.forward(Panel.FIRST) for _ in range(4)}
    assert seen.isdisjoint(set(panels.selection().values()) - {panels.shown(Panel.FIRST)})

def test_panels_reject_bad_selection():
    with pytest.raises(ValueError):
        StatisticPanels({Panel.FIRST: "Most reviewed borough", Panel.SECOND: "Most reviewed borough"})

def test_panels_render(simple_listings):
    stats = ListingStatistics.from_listings(simple_listings)
    assert StatisticPanels().render(stats) == [
        ("Reviews per property", "48.000"),
        ("Total available properties", "4"),
        ("Entire homes or apartments", "2"),
        ("Most expensive borough", "Walford"),
    ]

def test_panels_from_several_threads():
    panels = StatisticPanels()

    def spin():
        for _ in range(200):
            panels.forward(Panel.FIRST)
            panels.back(Panel.SECOND)

    threads = [threading.Thread(target=spin) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(set(panels.selection().values())) == 4
