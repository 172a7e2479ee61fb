from typing import Protocol

from trademark_evidence.data import ArticleResult, GroundingChunkWeb, SearchParameters, Usage


class TrademarkSearcher(Protocol):
    """Interface for finding articles that mention a trademark."""

    async def search(
        self, params: SearchParameters
    ) -> tuple[list[ArticleResult], list[GroundingChunkWeb], Usage]:
        """Search for articles matching the given parameters.

        Args:
            params: Trademark, date range, language and country to search for.

        Returns:
            Tuple of (articles, grounding citations, usage). Searchers that
            do not produce citations return an empty citation list.

        Raises:
            ProviderError: The provider failed in a way that ends this search.
        """
        ...
