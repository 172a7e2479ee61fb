from trademark_evidence.query.builder import (
    COUNTRY_SITES,
    LANGUAGE_SITES,
    build_query,
    country_filter,
    date_restrict,
    language_filter,
    site_filter,
)

__all__ = [
    "COUNTRY_SITES",
    "LANGUAGE_SITES",
    "build_query",
    "country_filter",
    "date_restrict",
    "language_filter",
    "site_filter",
]
