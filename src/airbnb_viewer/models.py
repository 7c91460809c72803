from pydantic import BaseModel, Field, field_validator
from typing import Optional, Any
import pandas as pd
from datetime import date

class ListingRecord(BaseModel):
    """
    Represents a single row of the Airbnb listings dataset.
    Includes validation logic to clean the raw CSV cells.
    Records are frozen: they compare by value and are never mutated after load.
    """
    # Key Identifiers
    id: str = Field(..., description="Listing ID")
    name: str = ""
    host_id: int = Field(..., ge=0)
    host_name: str = ""

    # Location
    neighbourhood: str = Field(..., description="Borough the listing is in")
    latitude: float = 0.0
    longitude: float = 0.0

    # Letting terms
    room_type: str = ""
    price: int = Field(..., ge=0)  # Per night, no currency
    minimum_nights: int = Field(1, ge=1)

    # Reviews
    number_of_reviews: int = Field(0, ge=0)
    last_review: Optional[date] = None
    reviews_per_month: float = Field(0.0, ge=0)

    calculated_host_listings_count: int = Field(0, ge=0)
    availability_365: int = Field(0, ge=0, le=365)

    # Validators
    @field_validator('last_review', mode='before')
    @classmethod
    def standardize_date(cls, v: Any) -> Optional[date]:
        """
        Converts dates from the dataset's '30/12/2016' form (or ISO '2016-12-30')
        to a date. Returns None if the listing has never been reviewed.
        """
        if v is None or isinstance(v, date):
            return v
        if pd.isna(v) or str(v).strip() == "":
            return None

        v_str = str(v).strip()
        # ISO dates must not be read day-first
        dayfirst = "/" in v_str
        try:
            dt = pd.to_datetime(v_str, dayfirst=dayfirst)
        except (ValueError, TypeError):
            raise ValueError(f"Unparseable review date: {v_str!r}")
        if pd.isna(dt):
            return None
        return dt.date()

    @field_validator('reviews_per_month', mode='before')
    @classmethod
    def missing_reviews_is_zero(cls, v: Any) -> Any:
        if v is None or (not isinstance(v, str) and pd.isna(v)) or str(v).strip() == "":
            return 0.0
        return v

    @field_validator('name', 'host_name', 'room_type', mode='before')
    @classmethod
    def blank_text(cls, v: Any) -> Any:
        # Some listings have no name or host name in the dataset
        return "" if v is None else v

    @field_validator('host_id', 'price', 'minimum_nights', 'number_of_reviews',
                     'calculated_host_listings_count', 'availability_365', mode='before')
    @classmethod
    def clean_integer(cls, v: Any) -> Any:
        """Coerces numeric strings such as ' 25 ' or '25.0' to int, leaving junk for pydantic to reject."""
        if isinstance(v, str):
            v = v.strip()
            try:
                as_float = float(v)
            except ValueError:
                return v
            if as_float.is_integer():
                return int(as_float)
        return v

    model_config = {
        "frozen": True,
        "extra": "ignore"
    }
