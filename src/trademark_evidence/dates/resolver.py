"""Publication-date resolution for search hits.

Dates are resolved by an ordered list of strategies. Each strategy either
returns a ``DateResolution`` or None; the first result wins and later
strategies are never consulted:

1. ``MetadataDateStrategy`` reads the provider's page metatags.
2. ``ContentDateStrategy`` looks for date-shaped text in title and snippet.
3. ``SourceInspectionStrategy`` fetches the page and reads its markup.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any, Protocol

import httpx
from bs4 import BeautifulSoup

from trademark_evidence.data import DATE_NOT_FOUND, DateResolution, DateSource, SearchItem, Usage
from trademark_evidence.dates.parsing import parse_date_value, safe_date
from trademark_evidence.errors import FetchFailure

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; TrademarkBot/1.0)"

HTML_CONTENT_TYPES: tuple[str, ...] = ("text/html", "application/xhtml+xml")

METADATA_DATE_FIELDS: tuple[str, ...] = (
    "article:published_time",
    "datePublished",
    "date",
    "dc.date",
    "og:updated_time",
    "publisheddate",
    "pubdate",
    "datemodified",
    "created",
    "lastmodified",
)

SPANISH_MONTHS: tuple[str, ...] = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)

ENGLISH_MONTHS: tuple[str, ...] = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

_ES = "|".join(SPANISH_MONTHS)
_EN = "|".join(ENGLISH_MONTHS)


class DateStrategy(Protocol):
    """One tier of date resolution."""

    async def resolve(self, item: SearchItem) -> DateResolution | None: ...


class MetadataDateStrategy:
    """Use the first parseable date among the item's metatag records.

    Records are scanned in order and, within a record, field names in
    ``fields`` order. Names are matched case-insensitively because the
    provider lowercases some keys.
    """

    def __init__(self, fields: Sequence[str] = METADATA_DATE_FIELDS) -> None:
        self._fields = tuple(name.lower() for name in fields)

    async def resolve(self, item: SearchItem) -> DateResolution | None:
        for record in item.metatags:
            lowered = {key.lower(): value for key, value in record.items()}
            for name in self._fields:
                parsed = parse_date_value(lowered.get(name))
                if parsed is not None:
                    return DateResolution(date=parsed.isoformat(), source=DateSource.METADATA)
        return None


@dataclass(frozen=True)
class TextDatePattern:
    """A date-shaped regex and the group indexes of its components.

    When ``months`` is set, the month group holds a month name that is
    mapped to 1-12 by its position in that tuple.
    """

    regex: re.Pattern[str]
    day: int
    month: int
    year: int
    months: tuple[str, ...] = ()

    def extract(self, text: str) -> date | None:
        match = self.regex.search(text)
        if match is None:
            return None
        raw_month = match.group(self.month)
        month = self.months.index(raw_month.lower()) + 1 if self.months else int(raw_month)
        return safe_date(int(match.group(self.year)), month, int(match.group(self.day)))


CONTENT_DATE_PATTERNS: tuple[TextDatePattern, ...] = (
    # 5 de marzo de 2021
    TextDatePattern(
        re.compile(rf"\b(\d{{1,2}})\s+de\s+({_ES})\s+de\s+(\d{{4}})", re.IGNORECASE),
        day=1,
        month=2,
        year=3,
        months=SPANISH_MONTHS,
    ),
    # 5 marzo 2021
    TextDatePattern(
        re.compile(rf"\b(\d{{1,2}})\s+({_ES})\s+(\d{{4}})", re.IGNORECASE),
        day=1,
        month=2,
        year=3,
        months=SPANISH_MONTHS,
    ),
    # 5 March 2021
    TextDatePattern(
        re.compile(rf"\b(\d{{1,2}})\s+({_EN})\s+(\d{{4}})", re.IGNORECASE),
        day=1,
        month=2,
        year=3,
        months=ENGLISH_MONTHS,
    ),
    # March 5, 2021
    TextDatePattern(
        re.compile(rf"\b({_EN})\s+(\d{{1,2}}),?\s+(\d{{4}})", re.IGNORECASE),
        day=2,
        month=1,
        year=3,
        months=ENGLISH_MONTHS,
    ),
    TextDatePattern(re.compile(r"(\d{4})-(\d{2})-(\d{2})"), day=3, month=2, year=1),
    TextDatePattern(re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})"), day=1, month=2, year=3),
    TextDatePattern(re.compile(r"(\d{1,2})-(\d{1,2})-(\d{4})"), day=1, month=2, year=3),
)


class ContentDateStrategy:
    """Find a date written in the item's title or snippet.

    Patterns are tried in order; a pattern whose first match is not a real
    calendar date (e.g. ``31/02/2021``) is skipped in favour of the next.
    """

    def __init__(self, patterns: Sequence[TextDatePattern] = CONTENT_DATE_PATTERNS) -> None:
        self._patterns = tuple(patterns)

    async def resolve(self, item: SearchItem) -> DateResolution | None:
        text = item.text
        for pattern in self._patterns:
            found = pattern.extract(text)
            if found is not None:
                return DateResolution(date=found.isoformat(), source=DateSource.CONTENT)
        return None


def _jsonld_nodes(payload: Any) -> Iterator[dict[str, Any]]:
    if isinstance(payload, list):
        for entry in payload:
            yield from _jsonld_nodes(entry)
    elif isinstance(payload, dict):
        yield payload
        graph = payload.get("@graph")
        if isinstance(graph, list):
            yield from _jsonld_nodes(graph)


def _jsonld_dates(raw: str) -> Iterator[str]:
    """Yield publication dates from a JSON-LD payload, preferring datePublished."""
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError:
        return
    for node in _jsonld_nodes(payload):
        value = node.get("datePublished") or node.get("dateCreated") or node.get("dateModified")
        if isinstance(value, str):
            yield value


def _markup_candidates(soup: BeautifulSoup) -> Iterator[str]:
    """Yield raw date strings from structural markers, most specific first."""
    time_tag = soup.find("time", attrs={"datetime": True})
    if time_tag is not None:
        yield str(time_tag["datetime"])

    meta_selectors = (
        {"property": re.compile(r"^article:published_time$", re.IGNORECASE)},
        {"name": re.compile(r"^date$", re.IGNORECASE)},
        {"name": re.compile(r"^publishdate$", re.IGNORECASE)},
    )
    for attrs in meta_selectors:
        meta = soup.find("meta", attrs={**attrs, "content": True})
        if meta is not None:
            yield str(meta["content"])

    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        yield from _jsonld_dates(script.get_text())


def extract_markup_date(html: str) -> date | None:
    """Return the first valid publication date found in page markup."""
    soup = BeautifulSoup(html, "html.parser")
    for candidate in _markup_candidates(soup):
        parsed = parse_date_value(candidate)
        if parsed is not None:
            return parsed
    return None


class SourceInspectionStrategy:
    """Fetch the linked page and read its date markers.

    Fetch failures are logged and treated as "no date at this tier".

    Args:
        client: Shared HTTP client for the current search.
        usage: Optional usage record; each fetch attempt is counted.
    """

    def __init__(self, client: httpx.AsyncClient, *, usage: Usage | None = None) -> None:
        self._client = client
        self._usage = usage

    async def resolve(self, item: SearchItem) -> DateResolution | None:
        if not item.link:
            return None
        logger.debug("Looking for a date in the source of %s", item.link)
        try:
            html = await self._fetch(item.link)
        except FetchFailure as e:
            logger.warning("Could not inspect source of %s: %s", item.link, e)
            return None

        found = extract_markup_date(html)
        if found is None:
            return None
        return DateResolution(
            date=found.isoformat(),
            source=DateSource.SOURCE_CODE,
            source_code_link=f"view-source:{item.link}",
        )

    async def _fetch(self, url: str) -> str:
        if self._usage is not None:
            self._usage.source_fetches += 1
        try:
            response = await self._client.get(url, headers={"User-Agent": USER_AGENT})
        except httpx.HTTPError as e:
            raise FetchFailure(f"{type(e).__name__}: {e}") from e
        if not response.is_success:
            raise FetchFailure(f"HTTP {response.status_code}")
        # A missing header is read as HTML
        content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
        if content_type and content_type not in HTML_CONTENT_TYPES:
            raise FetchFailure(f"Not an HTML page: {content_type}")
        return response.text


class DateResolver:
    """Run date strategies in order and return the first result.

    Args:
        strategies: Resolution tiers, highest priority first.
    """

    def __init__(self, strategies: Sequence[DateStrategy]) -> None:
        self._strategies = tuple(strategies)

    @classmethod
    def default(
        cls,
        client: httpx.AsyncClient | None = None,
        *,
        usage: Usage | None = None,
    ) -> DateResolver:
        """Metadata, then content, then source inspection when a client is given."""
        strategies: list[DateStrategy] = [MetadataDateStrategy(), ContentDateStrategy()]
        if client is not None:
            strategies.append(SourceInspectionStrategy(client, usage=usage))
        return cls(strategies)

    async def resolve(self, item: SearchItem) -> DateResolution:
        for strategy in self._strategies:
            result = await strategy.resolve(item)
            if result is not None:
                return result
        return DateResolution(date=DATE_NOT_FOUND, source=DateSource.NOT_FOUND)
