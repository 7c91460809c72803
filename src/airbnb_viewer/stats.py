"""
Aggregate statistics over a collection of listings.

A ListingStatistics is a snapshot: every value is computed once, when it is
built from its listings, and it has no way to change afterwards.
"""
import logging
from typing import Iterable, Optional

import pandas as pd
from pydantic import BaseModel

from airbnb_viewer.models import ListingRecord

ENTIRE_HOME_OR_APARTMENT = "Entire home/apt"

logger = logging.getLogger(__name__)


class ListingStatistics(BaseModel):
    """
    The fixed set of statistics shown by the viewer.

    Borough rankings break exact ties in favour of the alphabetically first
    borough. They are None when there are no listings.
    """
    reviews_per_property: float = 0.0
    total_available_properties: int = 0
    entire_homes_or_apartments: int = 0
    most_expensive_borough: Optional[str] = None
    properties_per_borough: float = 0.0
    total_reviews_per_month: float = 0.0
    most_reviewed_borough: Optional[str] = None
    most_actively_reviewed_borough: Optional[str] = None

    model_config = {
        "frozen": True
    }

    @classmethod
    def from_listings(cls, listings: Iterable[ListingRecord]) -> "ListingStatistics":
        """
        Computes the statistics for `listings`.
        Listings are scanned once into a frame, then grouped by borough once.
        """
        rows = [
            (
                listing.neighbourhood,
                listing.minimum_nights * listing.price,
                listing.number_of_reviews,
                listing.reviews_per_month,
                listing.availability_365,
                listing.room_type,
            )
            for listing in listings
        ]
        if not rows:
            return cls()

        df = pd.DataFrame(rows, columns=[
            'neighbourhood', 'minimum_cost', 'number_of_reviews',
            'reviews_per_month', 'availability_365', 'room_type',
        ])
        property_count = len(df)

        # Groups come out sorted by name, and idxmax keeps the first maximum
        by_borough = df.groupby('neighbourhood', sort=True).agg(
            listings=('minimum_cost', 'size'),
            avg_minimum_cost=('minimum_cost', 'mean'),
            total_reviews=('number_of_reviews', 'sum'),
            reviews_per_month=('reviews_per_month', 'sum'),
        )
        by_borough['avg_reviews_per_month'] = by_borough['reviews_per_month'] / by_borough['listings']

        total_reviews = int(df['number_of_reviews'].sum())
        reviews_per_property = total_reviews / property_count if total_reviews > 0 else 0.0

        stats = cls(
            reviews_per_property=reviews_per_property,
            total_available_properties=int((df['availability_365'] > 0).sum()),
            entire_homes_or_apartments=int((df['room_type'] == ENTIRE_HOME_OR_APARTMENT).sum()),
            most_expensive_borough=str(by_borough['avg_minimum_cost'].idxmax()),
            properties_per_borough=property_count / len(by_borough),
            total_reviews_per_month=float(df['reviews_per_month'].sum()),
            most_reviewed_borough=str(by_borough['total_reviews'].idxmax()),
            most_actively_reviewed_borough=str(by_borough['avg_reviews_per_month'].idxmax()),
        )
        logger.debug(f"Computed statistics for {property_count} listings across {len(by_borough)} boroughs")
        return stats
