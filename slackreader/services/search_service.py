"""Search service facade over Slack's ``search.messages`` and ``search.files``.

Every search tool composes its query first and then hands the final string
to ``SlackSearchService``; the facade owns the request parameters, error
normalization and the ``{<block>, paging, total}`` result shape.
"""

from dataclasses import dataclass
from typing import Any, Literal

from loguru import logger

from slackreader.providers.slack_client import call_slack


@dataclass
class SearchOptions:
    """Parameters shared by message and file search."""

    query: str
    sort: Literal["score", "timestamp"] = "score"
    sort_dir: Literal["asc", "desc"] = "desc"
    highlight: bool = False
    count: int = 20
    page: int = 1


def _search_result(payload: dict[str, Any], block_name: str) -> dict[str, Any]:
    block = payload.get(block_name) or {}
    return {
        block_name: block,
        "paging": block.get("paging") or {},
        "total": block.get("total") or 0,
    }


class SlackSearchService:
    """Run searches against one Slack client."""

    def __init__(self, client: Any):
        self._client = client

    async def search_messages(self, options: SearchOptions) -> dict[str, Any]:
        logger.debug(f"search.messages query={options.query!r}")
        payload = await call_slack(
            self._client,
            "search.messages",
            query=options.query,
            sort=options.sort,
            sort_dir=options.sort_dir,
            highlight=options.highlight,
            count=options.count,
            page=options.page,
        )
        return _search_result(payload, "messages")

    async def search_files(self, options: SearchOptions) -> dict[str, Any]:
        """File search; Slack ignores ``highlight`` here so it is not sent."""
        logger.debug(f"search.files query={options.query!r}")
        payload = await call_slack(
            self._client,
            "search.files",
            query=options.query,
            sort=options.sort,
            sort_dir=options.sort_dir,
            count=options.count,
            page=options.page,
        )
        return _search_result(payload, "files")
