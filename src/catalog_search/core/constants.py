"""Constants shared by the query compilation pipeline."""

from typing import Final

# Searchable resource types.
RESOURCE_ITEMS: Final[str] = "items"
RESOURCE_COLLECTIONS: Final[str] = "collections"

# General query params that are not type-specific.
BASE_QUERY_PARAMS: Final[frozenset[str]] = frozenset(
    {
        "q",
        "controller",
        "action",
        "sort_by",
        "sort_order",
        "page",
        "page_size",
        "facets",
        "fields",
        "callback",
    }
)

# Pagination.
DEFAULT_PAGE_SIZE: Final[int] = 10
DEFAULT_MAX_PAGE_SIZE: Final[int] = 100

# Sorting.
DEFAULT_SORT_ORDER: Final[str] = "asc"
VALID_SORT_ORDERS: Final[frozenset[str]] = frozenset({"asc", "desc"})

# Facet name modifiers that may trail a date field name, e.g. "date.year".
VALID_DATE_INTERVALS: Final[tuple[str, ...]] = ("century", "decade", "year", "month")
# Intervals that the engine's date histogram cannot express.
RANGE_DATE_INTERVALS: Final[frozenset[str]] = frozenset({"century", "decade"})
DEFAULT_DATE_INTERVAL: Final[str] = "day"
# Intervals accepted as a date histogram modifier.
DATE_HISTOGRAM_INTERVALS: Final[frozenset[str]] = frozenset(
    {"year", "month", DEFAULT_DATE_INTERVAL}
)

# Terms facets.
TERMS_FACET_SIZE: Final[int] = 50

# Date histogram facets.
DATE_HISTOGRAM_MIN_DOC_COUNT: Final[int] = 2

# Geo distance facets: 21 bounded buckets plus one open-ended bucket.
GEO_DISTANCE_BUCKET_COUNT: Final[int] = 21
DEFAULT_GEO_DISTANCE_UNIT: Final[str] = "mi"
VALID_DISTANCE_UNITS: Final[frozenset[str]] = frozenset({"mi", "km"})

# Calendar window used for century/decade range facets (start inclusive, end exclusive).
CENTURY_RANGE_YEARS: Final[tuple[int, int]] = (1000, 2100)
DECADE_RANGE_YEARS: Final[tuple[int, int]] = (1800, 2030)

# Geo distance filters.
DISTANCE_PARAM: Final[str] = "spatial.distance"
DEFAULT_FILTER_DISTANCE: Final[str] = "20mi"

# Date filter suffixes, e.g. "date.before=1900".
DATE_BEFORE_SUFFIX: Final[str] = "before"
DATE_AFTER_SUFFIX: Final[str] = "after"

# Engine hit keys.
K_SOURCE: Final[str] = "_source"
K_SCORE: Final[str] = "_score"
K_HITS: Final[str] = "hits"
K_TOTAL: Final[str] = "total"
K_AGGREGATIONS: Final[str] = "aggregations"
K_FACETS: Final[str] = "facets"

# Result document key holding the relevance score.
K_DOC_SCORE: Final[str] = "score"
