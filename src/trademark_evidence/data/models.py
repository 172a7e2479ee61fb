"""Core data models for trademark evidence searches."""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from typing import Any

LANGUAGE_OPTIONS: dict[str, str] = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
}

COUNTRY_OPTIONS: dict[str, str] = {
    "ALL": "All countries",
    "USA": "United States",
    "ES": "Spain",
    "MX": "Mexico",
    "AR": "Argentina",
    "CO": "Colombia",
    "PE": "Peru",
    "CL": "Chile",
    "EU": "European Union",
    "UK": "United Kingdom",
    "CA": "Canada",
    "AU": "Australia",
    "BR": "Brazil",
    "FR": "France",
    "DE": "Germany",
    "IT": "Italy",
    "ELSEWHERE": "Other (specify)",
}

DEFAULT_LANGUAGE = "en"
ALL_COUNTRIES = "ALL"
OTHER_COUNTRY = "ELSEWHERE"

DATE_NOT_FOUND = "date not found"


class ContextRelevance(StrEnum):
    """Where the trademark shows up in a search hit."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DateSource(StrEnum):
    """Which resolution tier produced an article's publication date."""

    METADATA = "metadata"
    CONTENT = "content"
    SOURCE_CODE = "source-code"
    NOT_FOUND = "not-found"


@dataclass(frozen=True)
class SearchParameters:
    """What the user asked for. Validated on construction.

    ``country`` is either a code from ``COUNTRY_OPTIONS`` or the free text
    the user typed after choosing the "other" option.
    """

    trademark: str
    start_date: date
    end_date: date
    language: str = DEFAULT_LANGUAGE
    country: str = ALL_COUNTRIES

    def __post_init__(self) -> None:
        if not self.trademark or not self.trademark.strip():
            raise ValueError("Trademark must not be empty")
        if self.start_date > self.end_date:
            raise ValueError(
                f"Start date {self.start_date} is after end date {self.end_date}"
            )
        if self.language not in LANGUAGE_OPTIONS:
            raise ValueError(f"Unsupported language: {self.language!r}")
        if not self.country or not self.country.strip():
            raise ValueError("Country must not be empty")
        if self.country == OTHER_COUNTRY:
            raise ValueError("Specify the country name when choosing the 'other' option")

    def contains(self, day: date) -> bool:
        """Whether ``day`` falls inside the inclusive date range."""
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class RelevanceDetails:
    """Evidence behind a relevance score."""

    keyword_frequency: int
    context_relevance: ContextRelevance
    is_main_content: bool


@dataclass(frozen=True)
class ArticleResult:
    """An article accepted as evidence of trademark use."""

    headline: str
    date: str
    snippet: str
    url: str
    language: str
    country: str
    trademark: str
    relevance_score: int | None = None
    relevance_details: RelevanceDetails | None = None
    date_source: DateSource | None = None
    source_code_link: str | None = None

    @property
    def year(self) -> str | None:
        """Four-digit year of an ISO date, or None when the date is free text."""
        prefix = self.date[:4]
        if len(prefix) == 4 and prefix.isdigit():
            return prefix
        return None


@dataclass(frozen=True)
class GroundingChunkWeb:
    """A citation surfaced by the AI search path."""

    uri: str
    title: str


@dataclass(frozen=True)
class SearchItem:
    """A raw hit from the web search provider."""

    title: str
    link: str
    snippet: str
    metatags: tuple[dict[str, str], ...] = ()

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "SearchItem":
        """Build from one entry of a Custom Search ``items`` array."""
        pagemap = item.get("pagemap") or {}
        metatags = tuple(
            {str(k): str(v) for k, v in record.items() if v is not None}
            for record in pagemap.get("metatags") or []
            if isinstance(record, dict)
        )
        return cls(
            title=item.get("title") or "",
            link=item.get("link") or "",
            snippet=item.get("snippet") or "",
            metatags=metatags,
        )

    @property
    def text(self) -> str:
        """Title and snippet joined, the text all matching runs against."""
        return f"{self.title} {self.snippet}"


@dataclass(frozen=True)
class DateResolution:
    """Outcome of publication-date resolution for one item."""

    date: str
    source: DateSource
    source_code_link: str | None = None

    @property
    def found(self) -> bool:
        return self.source is not DateSource.NOT_FOUND


@dataclass(frozen=True)
class APICallUsage:
    """Usage from a single AI API call."""

    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    web_searches: int = 0


@dataclass
class Usage:
    """Accumulated provider usage for one search."""

    api_calls: list[APICallUsage] = field(default_factory=list)
    google_requests: int = 0
    source_fetches: int = 0

    @property
    def input_tokens(self) -> int:
        return sum(c.input_tokens for c in self.api_calls)

    @property
    def output_tokens(self) -> int:
        return sum(c.output_tokens for c in self.api_calls)

    @property
    def web_searches(self) -> int:
        return sum(c.web_searches for c in self.api_calls)

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            api_calls=self.api_calls + other.api_calls,
            google_requests=self.google_requests + other.google_requests,
            source_fetches=self.source_fetches + other.source_fetches,
        )

    def __iadd__(self, other: "Usage") -> "Usage":
        self.api_calls.extend(other.api_calls)
        self.google_requests += other.google_requests
        self.source_fetches += other.source_fetches
        return self
