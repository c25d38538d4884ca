"""Feature file parser.

Recognises only what governance needs: tag lines, ``Feature:`` and
``Scenario:`` / ``Scenario Outline:`` declarations. Everything else
(descriptions, steps, examples tables) just detaches pending tags.

Tag scoping:
  - Tags on the lines directly above ``Feature:`` are feature tags.
  - Tags on the lines directly above ``Scenario:`` are scenario tags.
  - Blank and ``#`` comment lines between tags and their declaration are
    ignored; any other line drops the pending tags.
  - Non-status tags are inherited from both scopes. Status tags come from
    the scenario if it has any, otherwise from the feature (never merged).

Usage:
    row = parse_feature_file("backend", "/repo/apps/backend/features/a.feature", text)
    for scenario in row.scenarios:
        print(scenario.scenario_name, scenario.status)
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from bddgov.governance.classify import (
    DEFAULT_IMPL_PREFIX,
    classify,
    extract_impl_tags,
    is_status_tag,
    primary_status_tags,
)
from bddgov.governance.models import FeatureRow, ScenarioRow

UNNAMED_FEATURE = "(unnamed feature)"
UNNAMED_SCENARIO = "(unnamed)"

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_FEATURE_RE = re.compile(r"^Feature:", re.IGNORECASE)
_SCENARIO_RE = re.compile(r"^Scenario( Outline)?:", re.IGNORECASE)


@dataclass(frozen=True)
class ResolvedTags:
    tags: tuple[str, ...]
    feature_primary_status_tags: tuple[str, ...]
    scenario_primary_status_tags: tuple[str, ...]


def parse_tags_line(line: str) -> list[str]:
    """Return every whitespace-separated token of *line* that starts with '@'."""
    return [t for t in line.split() if t.startswith("@")]


def parse_declaration_name(line: str, default: str) -> str:
    """Text after the first colon, stripped; *default* when empty."""
    _, _, rest = line.partition(":")
    return rest.strip() or default


def _dedupe(tags: Sequence[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(tags))


def resolve_scenario_tags(feature_tags: Sequence[str], pending_tags: Sequence[str]) -> ResolvedTags:
    """Merge feature- and scenario-scope tags into a scenario's final tag set."""
    feature_primary = primary_status_tags(feature_tags)
    scenario_primary = primary_status_tags(pending_tags)
    effective_primary = scenario_primary if scenario_primary else feature_primary

    tags = _dedupe(
        [t for t in feature_tags if not is_status_tag(t)]
        + [t for t in pending_tags if not is_status_tag(t)]
        + list(effective_primary)
    )
    return ResolvedTags(
        tags=tags,
        feature_primary_status_tags=feature_primary,
        scenario_primary_status_tags=scenario_primary,
    )


def parse_feature_file(
    app_name: str,
    file_path: str,
    content: str,
    *,
    impl_prefix: str = DEFAULT_IMPL_PREFIX,
) -> FeatureRow:
    """Parse the text of one feature file.

    Args:
        app_name: Name of the app directory the file belongs to.
        file_path: Path recorded on the feature and its scenarios.
        content: Full file text.
        impl_prefix: Prefix identifying implementation-linkage tags.

    Returns:
        FeatureRow with one ScenarioRow per Scenario / Scenario Outline.
    """
    scenarios: list[ScenarioRow] = []
    pending_tags: list[str] = []
    feature_tags: list[str] = []
    feature_name = UNNAMED_FEATURE

    for raw_line in _LINE_SPLIT_RE.split(content):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        if line.startswith("@"):
            pending_tags.extend(parse_tags_line(line))
            continue

        if _FEATURE_RE.match(line):
            feature_tags = pending_tags
            feature_name = parse_declaration_name(line, UNNAMED_FEATURE)
            pending_tags = []
            continue

        if _SCENARIO_RE.match(line):
            resolved = resolve_scenario_tags(feature_tags, pending_tags)
            scenarios.append(
                ScenarioRow(
                    file_path=file_path,
                    feature_name=feature_name,
                    scenario_name=parse_declaration_name(line, UNNAMED_SCENARIO),
                    tags=resolved.tags,
                    status=classify(resolved.tags),
                    impl_tags=extract_impl_tags(resolved.tags, impl_prefix),
                    feature_primary_status_tags=resolved.feature_primary_status_tags,
                    scenario_primary_status_tags=resolved.scenario_primary_status_tags,
                )
            )
            pending_tags = []
            continue

        pending_tags = []

    return FeatureRow(
        app_name=app_name,
        file_path=file_path,
        feature_name=feature_name,
        feature_tags=tuple(feature_tags),
        scenarios=tuple(scenarios),
    )
