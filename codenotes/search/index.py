"""Hosted search index (Algolia) adapter.

Two handles exist: a search-only one for the search page and an admin one
for the deploy webhook. Both are built once on first use and live for the
lifetime of the process; there is nothing to tear down.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from algoliasearch.search.client import SearchClient

from codenotes.config import get_settings

# Fields the search page renders; everything else stays in the index.
RESULT_ATTRIBUTES = ["title", "url", "date", "tags", "emoji"]


@dataclass
class SearchIndex:
    """One Algolia index reached through a shared async client."""

    client: SearchClient
    index_name: str

    async def search(self, query: str) -> list[dict[str, Any]]:
        """Run a query and return the raw hits in ranking order.

        Only the fields in RESULT_ATTRIBUTES are retrieved and nothing is
        highlighted.
        """
        response = await self.client.search_single_index(
            index_name=self.index_name,
            search_params={
                "query": query,
                "attributesToRetrieve": RESULT_ATTRIBUTES,
                "attributesToHighlight": [],
            },
        )
        return [hit.to_dict() for hit in response.hits]

    async def replace_all(self, records: list[dict[str, Any]]) -> int:
        """Replace every record in the index and return how many were written.

        The client writes to a temporary index and moves it over the live
        one, so readers never see a half-filled index. Records are sent as
        add-object batches, which assign an objectID to any record that has
        none.
        """
        response = await self.client.replace_all_objects(
            index_name=self.index_name, objects=records
        )
        return sum(len(batch.object_ids) for batch in response.batch_responses)


@lru_cache
def get_search_index() -> SearchIndex:
    """Search-only index handle used by the search page."""
    settings = get_settings()
    client = SearchClient(settings.algolia_app, settings.algolia_search_key)
    return SearchIndex(client=client, index_name=settings.algolia_index)


@lru_cache
def get_admin_index() -> SearchIndex:
    """Write-capable index handle used by the index sync job."""
    settings = get_settings()
    client = SearchClient(settings.algolia_app, settings.algolia_admin_key)
    return SearchIndex(client=client, index_name=settings.algolia_index)
