"""Input models for the Slack tools.

Each tool validates its raw JSON arguments against one of these pydantic
models before anything else happens. The JSON schema advertised over MCP is
derived from the same model by ``tool_input_schema`` so the two never drift.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from slackreader.services.query_modifiers import SearchFilters


class ToolInput(BaseModel):
    """Base for tool inputs; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")


class PaginationInput(ToolInput):
    cursor: str | None = Field(default=None, description="Pagination cursor")
    limit: int = Field(
        default=50, ge=1, le=1000, description="Number of items to return (1-1000)"
    )


class UsersReadInput(PaginationInput):
    include_locale: bool = Field(
        default=False, description="Include locale information for each user"
    )


class UsergroupsReadInput(ToolInput):
    include_disabled: bool = Field(
        default=False, description="Include disabled user groups"
    )
    include_count: bool = Field(
        default=False, description="Include the member count of each user group"
    )
    include_users: bool = Field(
        default=False, description="Include the member list of each user group"
    )


class ChannelsReadInput(PaginationInput):
    team_id: str | None = Field(default=None, description="Team ID to list channels for")
    types: str = Field(
        default="public_channel",
        description="Comma-separated conversation types (public_channel, private_channel, mpim, im)",
    )


class MessageHistoryInput(PaginationInput):
    """Shared by channels_history, groups_history, im_history and mpim_history."""

    channel: str = Field(min_length=1, description="Conversation ID to read history from")
    oldest: str | None = Field(
        default=None,
        description="Start of range: Slack timestamp or date (YYYY-MM-DD[ HH:MM:SS], UTC)",
    )
    latest: str | None = Field(
        default=None,
        description="End of range: Slack timestamp or date (YYYY-MM-DD[ HH:MM:SS], UTC)",
    )
    inclusive: bool = Field(
        default=False, description="Include messages exactly at oldest/latest"
    )
    include_all_metadata: bool = Field(
        default=False, description="Return all message metadata"
    )


class FilesReadInput(ToolInput):
    channel: str | None = Field(default=None, description="Only files shared in this channel")
    count: int = Field(
        default=100, ge=1, le=1000, description="Number of files per page (1-1000)"
    )
    page: int = Field(default=1, ge=1, description="Page number")
    ts_from: str | None = Field(default=None, description="Only files created after this timestamp")
    ts_to: str | None = Field(default=None, description="Only files created before this timestamp")
    types: str | None = Field(
        default=None,
        description="Comma-separated file types (images, gdocs, zips, pdfs, ...)",
    )
    user: str | None = Field(default=None, description="Only files created by this user")


class BookmarksReadInput(ToolInput):
    channel_id: str = Field(min_length=1, description="Channel ID to list bookmarks for")


class _QueryInput(ToolInput):
    query: str = Field(min_length=1, description="Search query")
    sort: Literal["score", "timestamp"] = Field(default="score", description="Sort order")
    sort_dir: Literal["asc", "desc"] = Field(default="desc", description="Sort direction")
    count: int = Field(default=20, ge=1, le=100, description="Results per page (1-100)")
    page: int = Field(default=1, ge=1, description="Page number")

    @field_validator("query")
    def validate_query(cls, v: str) -> str:
        """Reject whitespace-only queries."""
        if not v.strip():
            raise ValueError("Search query must not be blank")
        return v


class SearchQueryInput(_QueryInput):
    highlight: bool = Field(default=False, description="Highlight matches in results")


class LinksReadInput(SearchQueryInput):
    model_config = ConfigDict(populate_by_name=True)

    in_: str | None = Field(
        default=None,
        alias="in",
        description="Conversation to search in, with sigil (e.g. #general, @username)",
    )
    from_: str | None = Field(
        default=None,
        alias="from",
        description="Only links posted by this user (e.g. @username)",
    )
    has: str = Field(
        default="link", description="Content condition (link, image, video, ...)"
    )


class SpecializedSearchInput(SearchQueryInput):
    """Message search filters common to every search surface."""

    date_from: str | None = Field(default=None, description="Start date (YYYY-MM-DD)")
    date_to: str | None = Field(default=None, description="End date (YYYY-MM-DD)")
    from_user: str | None = Field(default=None, description="Sender user name or ID")
    to_user: str | None = Field(default=None, description="Recipient user name or ID")
    has_links: bool = Field(default=False, description="Only messages containing links")
    has_files: bool = Field(default=False, description="Only messages containing files")
    has_images: bool = Field(default=False, description="Only messages containing images")
    has_stars: bool = Field(default=False, description="Only starred messages")
    has_pins: bool = Field(default=False, description="Only pinned messages")

    def filters(self) -> SearchFilters:
        return SearchFilters(
            date_from=self.date_from,
            date_to=self.date_to,
            from_user=self.from_user,
            to_user=self.to_user,
            channel=getattr(self, "channel", None),
            has_links=self.has_links,
            has_files=self.has_files,
            has_images=self.has_images,
            has_stars=self.has_stars,
            has_pins=self.has_pins,
        )


class SearchReadInput(SpecializedSearchInput):
    channel: str | None = Field(default=None, description="Channel name or ID to search in")


class SearchImInput(SpecializedSearchInput):
    dm_user: str | None = Field(
        default=None, description="DM partner to search (omit to search all DMs)"
    )


class SearchMpimInput(SpecializedSearchInput):
    mpim_users: str | None = Field(
        default=None,
        description="Comma-separated MPIM members (best effort; omit to search all MPIMs)",
    )


class SearchPrivateInput(SpecializedSearchInput):
    private_channel: str | None = Field(
        default=None,
        description="Private channel to search (omit to search all private channels)",
    )


class SearchPublicInput(SpecializedSearchInput):
    public_channel: str | None = Field(
        default=None,
        description="Public channel to search (omit to search all public channels)",
    )


class SearchFilesInput(_QueryInput):
    channel: str | None = Field(default=None, description="Channel name or ID to search in")
    from_user: str | None = Field(default=None, description="Uploader user name or ID")
    date_from: str | None = Field(default=None, description="Start date (YYYY-MM-DD)")
    date_to: str | None = Field(default=None, description="End date (YYYY-MM-DD)")

    def filters(self) -> SearchFilters:
        return SearchFilters(
            date_from=self.date_from,
            date_to=self.date_to,
            from_user=self.from_user,
            channel=self.channel,
        )


def _simplify_property(prop: dict[str, Any]) -> dict[str, Any]:
    prop = {k: v for k, v in prop.items() if k != "title"}
    variants = prop.pop("anyOf", None)
    if variants is not None:
        non_null = [v for v in variants if v.get("type") != "null"]
        if len(non_null) == 1:
            prop = {**non_null[0], **prop}
        else:
            prop["anyOf"] = non_null
    if "default" in prop and prop["default"] is None:
        del prop["default"]
    return prop


def tool_input_schema(model: type[BaseModel]) -> dict[str, Any]:
    """Return the plain JSON schema advertised for ``model``.

    Optional fields are typed as their value type rather than ``anyOf`` with
    ``null``, titles are dropped, and ``required`` lists the mandatory fields.
    """
    raw = model.model_json_schema(by_alias=True)
    properties = {
        name: _simplify_property(prop)
        for name, prop in raw.get("properties", {}).items()
    }
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    required = raw.get("required") or []
    if required:
        schema["required"] = list(required)
    return schema
