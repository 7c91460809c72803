import csv
import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

import pandas as pd
from pydantic import ValidationError

from airbnb_viewer.models import ListingRecord

BATCH_SIZE = 1000
DATA_DIR = "data"
LISTINGS_FILE = "airbnb-london.csv"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadReport:
    processed: int
    loaded: int
    rejected: int


def load_listings_with_report(
    path: str = os.path.join(DATA_DIR, LISTINGS_FILE),
    rejects_path: Optional[str] = None,
    batch_size: int = BATCH_SIZE,
) -> Tuple[Tuple[ListingRecord, ...], LoadReport]:
    """
    Loads every listing in the CSV at `path`, in file order.

    Rows that fail validation are skipped and, if `rejects_path` is given,
    written there with the validation error. A missing file is fatal.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Listings file {path} not found.")

    logger.info(f"Loading listings from {path}...")

    # Read everything as text and let the model do the coercion
    chunk_iterator = pd.read_csv(path, chunksize=batch_size, low_memory=False, dtype=str)

    listings = []
    total_processed = 0
    total_rejected = 0

    reject_file = open(rejects_path, 'w', newline='') if rejects_path else None
    try:
        writer = csv.writer(reject_file) if reject_file else None
        if writer:
            writer.writerow(['listing_id', 'error_message', 'raw_data'])  # Header

        for chunk in chunk_iterator:
            # Replace NaN with None so blank cells reach the validators as missing
            records = chunk.astype(object).where(pd.notnull(chunk), None).to_dict('records')

            for row in records:
                total_processed += 1
                try:
                    listings.append(ListingRecord(**row))
                except ValidationError as e:
                    total_rejected += 1
                    listing_id = row.get('id') or 'UNKNOWN'
                    logger.warning(f"Rejected listing {listing_id}: {e.error_count()} validation error(s)")
                    if writer:
                        writer.writerow([listing_id, str(e), str(row)])

            logger.debug(f"Processed: {total_processed} | Loaded: {len(listings)} | Rejected: {total_rejected}")
    finally:
        if reject_file:
            reject_file.close()

    report = LoadReport(processed=total_processed, loaded=len(listings), rejected=total_rejected)
    logger.info(f"Loading complete. Loaded: {report.loaded} | Rejected: {report.rejected}")
    return tuple(listings), report


def load_listings(path: str = os.path.join(DATA_DIR, LISTINGS_FILE),
                  rejects_path: Optional[str] = None,
                  batch_size: int = BATCH_SIZE) -> Tuple[ListingRecord, ...]:
    """Loads all listings as an immutable tuple."""
    listings, _ = load_listings_with_report(path, rejects_path, batch_size)
    return listings
