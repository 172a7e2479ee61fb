"""Build Custom Search query strings from search parameters."""

from types import MappingProxyType

from trademark_evidence.data import ALL_COUNTRIES, DEFAULT_LANGUAGE, SearchParameters

# Top-level domains conventionally associated with each language.
LANGUAGE_SITES: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "es": (".es", ".mx", ".ar", ".co", ".pe", ".cl", ".ve", ".ec", ".bo", ".py", ".uy"),
        "fr": (".fr", ".ca", ".be", ".ch"),
        "de": (".de", ".at", ".ch"),
        "it": (".it", ".ch"),
        "pt": (".br", ".pt"),
    }
)

COUNTRY_SITES: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "USA": (".com", ".us", ".gov", ".edu"),
        "EU": (".eu", ".de", ".fr", ".it", ".es", ".nl", ".be"),
        "UK": (".uk", ".co.uk"),
        "CA": (".ca",),
        "AU": (".au",),
        "MX": (".mx",),
        "ES": (".es",),
        "FR": (".fr",),
        "DE": (".de",),
        "IT": (".it",),
        "AR": (".ar",),
        "CO": (".co",),
        "PE": (".pe",),
        "CL": (".cl",),
        "BR": (".br",),
    }
)


def site_filter(domains: tuple[str, ...]) -> str:
    """Render ``domains`` as a ``site:`` disjunction, or "" when empty."""
    return " OR ".join(f"site:{domain}" for domain in domains)


def language_filter(language: str) -> str:
    if language == DEFAULT_LANGUAGE:
        return ""
    return site_filter(LANGUAGE_SITES.get(language, ()))


def country_filter(country: str) -> str:
    # Custom country names have no table entry and produce no filter.
    if country == ALL_COUNTRIES:
        return ""
    return site_filter(COUNTRY_SITES.get(country, ()))


def build_query(params: SearchParameters) -> str:
    """Build the provider query for ``params``.

    The trademark is quoted for phrase matching, followed by the date bounds
    and any language and country site filters.

    Args:
        params: The search parameters.

    Returns:
        A single query string. Never raises.
    """
    parts = [
        f'"{params.trademark}"',
        f"after:{params.start_date.isoformat()} before:{params.end_date.isoformat()}",
    ]
    for extra in (language_filter(params.language), country_filter(params.country)):
        if extra:
            parts.append(extra)
    return " ".join(parts)


def date_restrict(params: SearchParameters) -> str:
    """Freshness hint for the provider: ``d<N>`` with N the day span of the range."""
    return f"d{(params.end_date - params.start_date).days}"
