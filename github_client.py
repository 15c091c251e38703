"""
GitHub API client for searching Hacktoberfest repositories.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import requests
from config import (
    logger,
    MIN_STARS,
    PER_PAGE,
    SEARCH_ENDPOINT,
    SORT_FIELD,
    TOPIC,
    get_request_timeout,
)


class FetchFailure(Exception):
    """Raised when a search request fails for any reason."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class SortOrder(Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    @classmethod
    def parse(cls, value):
        """Accepts a SortOrder, its wire value or its name, case-insensitive."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for order in cls:
            if text in (order.value, order.name.lower()):
                return order
        raise ValueError(f"Unknown sort order: {value!r}")


@dataclass(frozen=True)
class Repository:
    """A single search hit, as returned by the GitHub API."""
    id: int
    name: str
    description: Optional[str]
    star_count: int
    open_issue_count: int
    html_url: str
    owner_avatar_url: str

    @classmethod
    def from_api(cls, item):
        return cls(
            id=item["id"],
            name=item["name"],
            description=item.get("description"),
            star_count=item["stargazers_count"],
            open_issue_count=item["open_issues_count"],
            html_url=item["html_url"],
            owner_avatar_url=item["owner"]["avatar_url"],
        )


def build_tag_expression(tags):
    """
    Joins the selected tags into the expression used inside the query.

    Each tag is prefixed with '+' and joined with ' OR '. No tags gives ''.
    """
    return " OR ".join(f"+{tag}" for tag in tags)


def build_query_string(tags, page, order=SortOrder.DESCENDING):
    """
    Builds the query string for the search endpoint.

    The tag expression is used both after the topic term and as the value
    of the language term.
    """
    tag_expr = build_tag_expression(tags)
    order = SortOrder.parse(order)
    q = f"topic:{TOPIC}{tag_expr}+stars:>={MIN_STARS}+language:{tag_expr}"
    return f"q={q}&per_page={PER_PAGE}&page={page}&sort={SORT_FIELD}&order={order.value}"


def build_search_url(tags, page, order=SortOrder.DESCENDING):
    return f"{SEARCH_ENDPOINT}?{build_query_string(tags, page, order)}"


def raw_search_repositories(tags, page, order=SortOrder.DESCENDING, token=None) -> List[Repository]:
    """
    Search GitHub for Hacktoberfest repositories matching the selected tags.

    Args:
        tags (list): Selected tags, in selection order.
        page (int): 1-based page number.
        order (SortOrder or str): Star sort direction.
        token (str, optional): Bearer token, attached verbatim.

    Returns:
        list: Repository objects in the order GitHub returned them.

    Raises:
        FetchFailure: On network errors, non-2xx responses or malformed payloads.
    """
    url = build_search_url(tags, page, order)
    headers = {"Authorization": f"Bearer {token or ''}"}

    logger.info(f"Searching repositories - Page {page} - Tags {list(tags)}")
    try:
        response = requests.get(url, headers=headers, timeout=get_request_timeout())
    except requests.RequestException as e:
        raise FetchFailure(f"Network error: {e}") from e

    if not 200 <= response.status_code < 300:
        raise FetchFailure(
            f"GitHub API Error: {response.status_code} - {response.text}",
            status_code=response.status_code,
        )

    try:
        data = response.json()
    except ValueError as e:
        raise FetchFailure(f"Invalid JSON in response: {e}", status_code=response.status_code) from e

    items = data.get("items") if isinstance(data, dict) else None
    if not isinstance(items, list):
        raise FetchFailure("Response has no 'items' list", status_code=response.status_code)

    try:
        return [Repository.from_api(item) for item in items]
    except (KeyError, TypeError) as e:
        raise FetchFailure(f"Malformed repository item: {e}", status_code=response.status_code) from e
