from trademark_evidence.dates.parsing import parse_date_value, safe_date
from trademark_evidence.dates.resolver import (
    CONTENT_DATE_PATTERNS,
    METADATA_DATE_FIELDS,
    ContentDateStrategy,
    DateResolver,
    DateStrategy,
    MetadataDateStrategy,
    SourceInspectionStrategy,
    extract_markup_date,
)

__all__ = [
    "CONTENT_DATE_PATTERNS",
    "ContentDateStrategy",
    "DateResolver",
    "DateStrategy",
    "METADATA_DATE_FIELDS",
    "MetadataDateStrategy",
    "SourceInspectionStrategy",
    "extract_markup_date",
    "parse_date_value",
    "safe_date",
]
