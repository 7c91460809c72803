from .models import ListingRecord
from .loader import load_listings, load_listings_with_report, LoadReport
from .stats import ListingStatistics
from .filters import ListingsFilter, NO_LIMIT
