import csv

import pytest
from airbnb_viewer.models import ListingRecord


def make_listing(id, neighbourhood, room_type, price, minimum_nights, number_of_reviews,
                 last_review, reviews_per_month, availability_365, host_name="Host"):
    return ListingRecord(
        id=id, name=f"Test {id}", host_id=1, host_name=host_name,
        neighbourhood=neighbourhood, latitude=0.0, longitude=0.0,
        room_type=room_type, price=price, minimum_nights=minimum_nights,
        number_of_reviews=number_of_reviews, last_review=last_review,
        reviews_per_month=reviews_per_month, calculated_host_listings_count=1,
        availability_365=availability_365,
    )


@pytest.fixture
def simple_listings():
    """Five made-up listings whose statistics can be worked out by hand."""
    return (
        make_listing("l1", "Walford", "Private room", 25, 2, 50, "03/12/2016", 0.2, 20, host_name="Blah"),
        make_listing("l2", "Walford", "Private room", 20, 3, 40, "05/12/2016", 0.25, 0, host_name="Bleh"),
        make_listing("l3", "Walford", "Entire home/apt", 500, 10, 25, "11/12/2016", 0.1, 60, host_name="Bluh"),
        make_listing("l4", "Leytown", "Private room", 20, 1, 100, "30/12/2016", 0.5, 150, host_name="Blih"),
        make_listing("l5", "Leytown", "Entire home/apt", 300, 5, 25, "11/09/2016", 0.1, 120, host_name="Bloh"),
    )


CSV_HEADER = ["id", "name", "host_id", "host_name", "neighbourhood", "latitude", "longitude",
              "room_type", "price", "minimum_nights", "number_of_reviews", "last_review",
              "reviews_per_month", "calculated_host_listings_count", "availability_365"]

CSV_ROWS = [
    ["13913", "Holiday London DB Room", "54730", "Alina", "Islington", "51.56802", "-0.11121",
     "Private room", "65", "1", "15", "20/02/2019", "0.15", "2", "365"],
    ["15400", "Bright Chelsea Apartment", "60302", "Philippa", "Kensington and Chelsea", "51.48796", "-0.16898",
     "Entire home/apt", "100", "3", "0", "", "", "1", "0"],
    ["17402", "Superb 3-Bed/2 Bath", "67564", "Liz", "Westminster", "51.52098", "-0.14002",
     "Entire home/apt", "300", "3", "30", "01/09/2019", "0.38", "15", "233"],
]


@pytest.fixture
def listings_csv(tmp_path):
    """A small listings file in the dataset's CSV layout."""
    path = tmp_path / "listings.csv"
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        writer.writerows(CSV_ROWS)
    return path
