"""
Shared helpers for repositories backed by the data API.
"""

from typing import Any, Callable, Dict, Optional, Set

from core.clients.graphql_client import SignedGraphQLClient
from core.errors.exceptions import UpstreamError


def strip_none(values: Dict[str, Any]) -> Dict[str, Any]:
    """Drop None values so optional fields are omitted instead of sent as null."""
    return {k: v for k, v in values.items() if v is not None}


class GraphQLRepo:
    def __init__(self, client: SignedGraphQLClient):
        self.client = client

    def _first_match(
        self,
        query: str,
        field: str,
        variables: Dict[str, Any],
        predicate: Optional[Callable[[Dict[str, Any]], bool]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Return the first item of a filtered list query.

        AppSync applies filters page by page, so an empty page with a
        nextToken does not mean there are no matches. Pages are walked
        until an accepted item turns up or the tokens run out; None is
        only returned once the whole table has been read.

        Raises:
            UpstreamError: If the data API hands back a token it already
                returned, which would otherwise loop forever
        """
        next_token = None
        seen_tokens: Set[str] = set()
        while True:
            page_vars = dict(variables)
            if next_token:
                page_vars["nextToken"] = next_token
            data = self.client.execute(query, page_vars)
            connection = data.get(field) or {}
            for item in connection.get("items") or []:
                if item and (predicate is None or predicate(item)):
                    return item
            next_token = connection.get("nextToken")
            if not next_token:
                return None
            if next_token in seen_tokens:
                raise UpstreamError(f"{field} returned a repeated nextToken")
            seen_tokens.add(next_token)
