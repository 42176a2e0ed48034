"""Search query composition.

Slack's ``search.*`` endpoints take a single query string in which filters
are expressed as modifiers (``after:2025-01-01 from:@alice in:#general``).
This module turns structured filter fields into that string.

Composition is a fold over ``MODIFIER_RULES``, an ordered table of
``(predicate, formatter)`` pairs. The table order fixes the modifier order:
date range, sender, recipient, channel, content flags. Conversation scope
(``is:dm``, ``is:private``...) is appended afterwards by ``apply_scope``.

A modifier is never emitted twice: tokens already present in the base query
or produced by an earlier rule are skipped.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class SearchFilters:
    """Structured search filters. Empty strings count as absent."""

    date_from: str | None = None
    date_to: str | None = None
    from_user: str | None = None
    to_user: str | None = None
    channel: str | None = None
    has_links: bool = False
    has_files: bool = False
    has_images: bool = False
    has_stars: bool = False
    has_pins: bool = False


def with_sigil(ref: str, sigil: str) -> str:
    """Prefix ``ref`` with ``sigil`` unless it already starts with it."""
    return ref if ref.startswith(sigil) else f"{sigil}{ref}"


Predicate = Callable[[SearchFilters], bool]
Formatter = Callable[[SearchFilters], str]

MODIFIER_RULES: tuple[tuple[Predicate, Formatter], ...] = (
    (lambda f: bool(f.date_from), lambda f: f"after:{f.date_from}"),
    (lambda f: bool(f.date_to), lambda f: f"before:{f.date_to}"),
    (lambda f: bool(f.from_user), lambda f: f"from:{with_sigil(f.from_user or '', '@')}"),
    (lambda f: bool(f.to_user), lambda f: f"to:{with_sigil(f.to_user or '', '@')}"),
    (lambda f: bool(f.channel), lambda f: f"in:{with_sigil(f.channel or '', '#')}"),
    (lambda f: f.has_links, lambda f: "has:link"),
    (lambda f: f.has_files, lambda f: "has:file"),
    (lambda f: f.has_images, lambda f: "has:image"),
    (lambda f: f.has_stars, lambda f: "has:star"),
    (lambda f: f.has_pins, lambda f: "has:pin"),
)


def append_modifiers(query: str, *modifiers: str) -> str:
    """Append ``modifiers`` to ``query``, skipping ones already present.

    Returns ``query`` unchanged when nothing new is appended.
    """
    seen = set(query.split())
    fresh: list[str] = []
    for modifier in modifiers:
        if modifier in seen:
            continue
        seen.add(modifier)
        fresh.append(modifier)
    if not fresh:
        return query
    return f"{query} {' '.join(fresh)}"


def build_search_query(base: str, filters: SearchFilters) -> str:
    """Compose ``base`` with every modifier whose predicate holds."""
    modifiers = [fmt(filters) for applies, fmt in MODIFIER_RULES if applies(filters)]
    return append_modifiers(base, *modifiers)


class SearchSurface(str, Enum):
    """Conversation type a search is restricted to."""

    DIRECT_MESSAGE = "im"
    MULTI_PARTY = "mpim"
    PRIVATE_CHANNEL = "private"
    PUBLIC_CHANNEL = "public"
    GENERIC = "generic"


def _scope_modifiers(surface: SearchSurface, target: str | None) -> list[str]:
    if surface is SearchSurface.DIRECT_MESSAGE:
        if target:
            return [f"in:{with_sigil(target, '@')}"]
        # every DM, excluding public and private channels
        return ["is:dm", "-in:#*"]
    if surface is SearchSurface.MULTI_PARTY:
        # Slack does not reliably intersect several in:@user modifiers, so a
        # member list narrows nothing beyond is:mpim.
        return ["is:mpim"]
    if surface is SearchSurface.PRIVATE_CHANNEL:
        return [f"in:{with_sigil(target, '#')}"] if target else ["is:private"]
    if surface is SearchSurface.PUBLIC_CHANNEL:
        return [f"in:{with_sigil(target, '#')}"] if target else ["is:public"]
    return []


def apply_scope(query: str, surface: SearchSurface, target: str | None = None) -> str:
    """Restrict ``query`` to ``surface``; an explicit target replaces the blanket scope."""
    return append_modifiers(query, *_scope_modifiers(surface, target))
