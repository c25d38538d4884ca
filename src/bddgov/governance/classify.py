"""Scenario status classification and impl-tag extraction.

Recognised vocabulary:
  @ready, @wip, @manual, @skip   — primary status tags
  @impl_<id>                     — implementation linkage (prefix configurable)

Every other tag is opaque metadata.
"""

from __future__ import annotations

from collections.abc import Iterable

from bddgov.governance.models import StatusKey

TAG_READY = "@ready"
TAG_WIP = "@wip"
TAG_MANUAL = "@manual"
TAG_SKIP = "@skip"

# Fixed presentation order; classification uses _PRECEDENCE instead.
PRIMARY_STATUS_TAGS: tuple[str, ...] = (TAG_READY, TAG_WIP, TAG_MANUAL, TAG_SKIP)

DEFAULT_IMPL_PREFIX = "@impl_"

# First match wins.
_PRECEDENCE: tuple[tuple[str, StatusKey], ...] = (
    (TAG_SKIP, "skip"),
    (TAG_MANUAL, "manual"),
    (TAG_READY, "ready"),
    (TAG_WIP, "wip"),
)


def classify(tags: Iterable[str]) -> StatusKey:
    """Return the single status for a scenario's final tag set.

    Precedence: skip > manual > ready > wip > other.
    """
    tag_set = set(tags)
    for tag, status in _PRECEDENCE:
        if tag in tag_set:
            return status
    return "other"


def primary_status_tags(tags: Iterable[str]) -> tuple[str, ...]:
    """Intersection of *tags* with the status tags, in fixed order."""
    tag_set = set(tags)
    return tuple(t for t in PRIMARY_STATUS_TAGS if t in tag_set)


def is_status_tag(tag: str) -> bool:
    return tag in PRIMARY_STATUS_TAGS


def extract_impl_tags(tags: Iterable[str], prefix: str = DEFAULT_IMPL_PREFIX) -> tuple[str, ...]:
    """Return the tags that carry the implementation-linkage prefix.

    A bare prefix with no identifier after it is not a linkage tag.
    """
    return tuple(t for t in tags if t.startswith(prefix) and len(t) > len(prefix))
