"""Declarative tool registry for the Slack MCP server.

This module defines every tool in a single location: name, description,
input model and implementation. The dispatch pipeline in ``common.py``
validates arguments against the input model, resolves credentials, builds a
Slack client and then calls the implementation with ``(client, params)``.

Implementations only shape requests and responses; they raise on failure and
never catch, so error normalization lives in one place.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from slackreader.core.timestamps import to_slack_timestamp
from slackreader.core.transformers import (
    transform_channel,
    transform_message,
    transform_user,
)
from slackreader.mcp_server.schemas import (
    BookmarksReadInput,
    ChannelsReadInput,
    FilesReadInput,
    LinksReadInput,
    MessageHistoryInput,
    SearchFilesInput,
    SearchImInput,
    SearchMpimInput,
    SearchPrivateInput,
    SearchPublicInput,
    SearchReadInput,
    SpecializedSearchInput,
    UsergroupsReadInput,
    UsersReadInput,
    tool_input_schema,
)
from slackreader.providers.slack_client import call_slack
from slackreader.services.query_modifiers import (
    SearchSurface,
    apply_scope,
    build_search_query,
)
from slackreader.services.search_service import SearchOptions, SlackSearchService

ToolImplementation = Callable[[Any, Any], Awaitable[dict[str, Any]]]


async def users_read_impl(client: Any, params: UsersReadInput) -> dict[str, Any]:
    result = await call_slack(
        client,
        "users.list",
        cursor=params.cursor,
        limit=params.limit,
        include_locale=params.include_locale,
    )
    users = [transform_user(member) for member in result.get("members") or []]
    return {
        "users": users,
        "response_metadata": result.get("response_metadata"),
        "total_count": len(users),
    }


async def usergroups_read_impl(
    client: Any, params: UsergroupsReadInput
) -> dict[str, Any]:
    result = await call_slack(
        client,
        "usergroups.list",
        include_disabled=params.include_disabled,
        include_count=params.include_count,
        include_users=params.include_users,
    )
    return {"usergroups": result.get("usergroups") or []}


async def channels_read_impl(client: Any, params: ChannelsReadInput) -> dict[str, Any]:
    result = await call_slack(
        client,
        "conversations.list",
        cursor=params.cursor,
        limit=params.limit,
        team_id=params.team_id,
        types=params.types,
    )
    return {
        "channels": [transform_channel(c) for c in result.get("channels") or []],
        "response_metadata": result.get("response_metadata"),
    }


async def message_history_impl(
    client: Any, params: MessageHistoryInput
) -> dict[str, Any]:
    """History of any conversation type (public, private, IM, MPIM).

    ``oldest``/``latest`` accept Slack timestamps or calendar dates; values
    that cannot be parsed are dropped rather than sent to Slack.
    """
    result = await call_slack(
        client,
        "conversations.history",
        channel=params.channel,
        cursor=params.cursor,
        limit=params.limit,
        oldest=to_slack_timestamp(params.oldest),
        latest=to_slack_timestamp(params.latest),
        inclusive=params.inclusive,
        include_all_metadata=params.include_all_metadata,
    )
    return {
        "messages": [transform_message(m) for m in result.get("messages") or []],
        "has_more": result.get("has_more") or False,
        "pin_count": result.get("pin_count") or 0,
        "response_metadata": result.get("response_metadata"),
    }


async def files_read_impl(client: Any, params: FilesReadInput) -> dict[str, Any]:
    result = await call_slack(
        client,
        "files.list",
        channel=params.channel,
        count=params.count,
        page=params.page,
        ts_from=params.ts_from,
        ts_to=params.ts_to,
        types=params.types,
        user=params.user,
    )
    return {"files": result.get("files") or [], "paging": result.get("paging")}


async def links_read_impl(client: Any, params: LinksReadInput) -> dict[str, Any]:
    """Search messages containing links.

    ``in`` and ``from`` are passed through verbatim; the caller supplies the
    ``#``/``@`` sigil.
    """
    query = params.query
    if params.has and f"has:{params.has}" not in query:
        query = f"{query} has:{params.has}"
    if params.in_:
        query = f"{query} in:{params.in_}"
    if params.from_:
        query = f"{query} from:{params.from_}"
    query = query.strip()

    result = await call_slack(
        client,
        "search.messages",
        query=query,
        sort=params.sort,
        sort_dir=params.sort_dir,
        highlight=params.highlight,
        count=params.count,
        page=params.page,
    )
    messages = result.get("messages") or {}
    return {"messages": messages, "query": query, "paging": messages.get("paging")}


async def bookmarks_read_impl(
    client: Any, params: BookmarksReadInput
) -> dict[str, Any]:
    result = await call_slack(client, "bookmarks.list", channel_id=params.channel_id)
    return {"bookmarks": result.get("bookmarks") or []}


def _search_options(params: Any, query: str) -> SearchOptions:
    return SearchOptions(
        query=query,
        sort=params.sort,
        sort_dir=params.sort_dir,
        highlight=getattr(params, "highlight", False),
        count=params.count,
        page=params.page,
    )


async def _scoped_message_search(
    client: Any,
    params: SpecializedSearchInput,
    surface: SearchSurface,
    target: str | None = None,
) -> dict[str, Any]:
    query = apply_scope(build_search_query(params.query, params.filters()), surface, target)
    return await SlackSearchService(client).search_messages(_search_options(params, query))


async def search_read_impl(client: Any, params: SearchReadInput) -> dict[str, Any]:
    return await _scoped_message_search(client, params, SearchSurface.GENERIC)


async def search_read_im_impl(client: Any, params: SearchImInput) -> dict[str, Any]:
    return await _scoped_message_search(
        client, params, SearchSurface.DIRECT_MESSAGE, params.dm_user
    )


async def search_read_mpim_impl(client: Any, params: SearchMpimInput) -> dict[str, Any]:
    # mpim_users is accepted but not turned into modifiers
    return await _scoped_message_search(
        client, params, SearchSurface.MULTI_PARTY, params.mpim_users
    )


async def search_read_private_impl(
    client: Any, params: SearchPrivateInput
) -> dict[str, Any]:
    return await _scoped_message_search(
        client, params, SearchSurface.PRIVATE_CHANNEL, params.private_channel
    )


async def search_read_public_impl(
    client: Any, params: SearchPublicInput
) -> dict[str, Any]:
    return await _scoped_message_search(
        client, params, SearchSurface.PUBLIC_CHANNEL, params.public_channel
    )


async def search_read_files_impl(
    client: Any, params: SearchFilesInput
) -> dict[str, Any]:
    query = build_search_query(params.query, params.filters())
    return await SlackSearchService(client).search_files(_search_options(params, query))


@dataclass
class Tool:
    """Tool definition with metadata and implementation."""

    name: str
    description: str
    input_model: type[BaseModel]
    implementation: ToolImplementation

    @property
    def parameters(self) -> dict[str, Any]:
        """JSON schema advertised in tools/list."""
        return tool_input_schema(self.input_model)


# Define all tools declaratively
TOOL_DEFINITIONS = [
    Tool(
        name="users_read",
        description="List the users in the workspace.",
        input_model=UsersReadInput,
        implementation=users_read_impl,
    ),
    Tool(
        name="usergroups_read",
        description="List the user groups in the workspace.",
        input_model=UsergroupsReadInput,
        implementation=usergroups_read_impl,
    ),
    Tool(
        name="channels_read",
        description="List the channels in the workspace in a compact form.",
        input_model=ChannelsReadInput,
        implementation=channels_read_impl,
    ),
    Tool(
        name="channels_history",
        description="Read the message history of a public channel.",
        input_model=MessageHistoryInput,
        implementation=message_history_impl,
    ),
    Tool(
        name="groups_history",
        description="Read the message history of a private channel.",
        input_model=MessageHistoryInput,
        implementation=message_history_impl,
    ),
    Tool(
        name="im_history",
        description="Read the message history of a direct message (IM).",
        input_model=MessageHistoryInput,
        implementation=message_history_impl,
    ),
    Tool(
        name="mpim_history",
        description="Read the message history of a multi-party direct message (MPIM).",
        input_model=MessageHistoryInput,
        implementation=message_history_impl,
    ),
    Tool(
        name="files_read",
        description="List the files in the workspace.",
        input_model=FilesReadInput,
        implementation=files_read_impl,
    ),
    Tool(
        name="links_read",
        description="Search the workspace for messages containing links.",
        input_model=LinksReadInput,
        implementation=links_read_impl,
    ),
    Tool(
        name="bookmarks_read",
        description="List the bookmarks of a channel.",
        input_model=BookmarksReadInput,
        implementation=bookmarks_read_impl,
    ),
    Tool(
        name="search_read",
        description="Search messages across the workspace with optional filters.",
        input_model=SearchReadInput,
        implementation=search_read_impl,
    ),
    Tool(
        name="search_read_files",
        description="Search files across the workspace.",
        input_model=SearchFilesInput,
        implementation=search_read_files_impl,
    ),
    Tool(
        name="search_read_im",
        description="Search direct messages.",
        input_model=SearchImInput,
        implementation=search_read_im_impl,
    ),
    Tool(
        name="search_read_mpim",
        description="Search multi-party direct messages (MPIM).",
        input_model=SearchMpimInput,
        implementation=search_read_mpim_impl,
    ),
    Tool(
        name="search_read_private",
        description="Search private channels.",
        input_model=SearchPrivateInput,
        implementation=search_read_private_impl,
    ),
    Tool(
        name="search_read_public",
        description="Search public channels.",
        input_model=SearchPublicInput,
        implementation=search_read_public_impl,
    ),
]


def _build_registry(tools: list[Tool]) -> dict[str, Tool]:
    registry: dict[str, Tool] = {}
    for tool in tools:
        if tool.name in registry:
            raise ValueError(f"Duplicate tool name: {tool.name}")
        registry[tool.name] = tool
    return registry


# Create registry as a dict for easy lookup
TOOL_REGISTRY: dict[str, Tool] = _build_registry(TOOL_DEFINITIONS)
