# ============================================================================
# TAG RESOLVER
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core - Annotation lookup
# PURPOSE: Extract typed annotations (overrides, indexes, routine bodies) from elements
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: find_tag, find_tags, string_tag, reference_tags, string_tag_for
# DEPENDENCIES: none
# ============================================================================
"""
Tag Resolver.

Lookups are linear over the element's tag list with no caching; callers
may re-query freely. Nothing here mutates an element: the one place a tag
is written back (the database name default) builds the tag with
string_tag_for() and lets the caller apply it.
"""

from typing import List, Optional

from core.contracts import ElementData, Tag, TagKind


def find_tag(name: str, element: ElementData) -> Optional[Tag]:
    """First tag named `name` on element, or None."""
    for tag in element.tags:
        if tag.name == name:
            return tag
    return None


def find_tags(name: str, element: ElementData) -> List[Tag]:
    """All tags named `name` (index tags may repeat on one column)."""
    return [tag for tag in element.tags if tag.name == name]


def string_tag(name: str, element: ElementData) -> str:
    """Value of the first tag named `name`, or "" when absent."""
    tag = find_tag(name, element)
    if tag is None:
        return ""
    return tag.value or ""


def reference_tags(element: ElementData, marker: str, through: bool = False) -> List[Tag]:
    """
    Reference tags on element that target a marker.

    Args:
        element: Element whose tags are scanned
        marker: Marker name (e.g. "function", "trigger")
        through: Match on the referenced tag's own reference (triggers),
                 instead of the referenced tag itself (functions, procedures)

    Returns:
        Matching tags in declaration order
    """
    if through:
        return [tag for tag in element.tags if tag.targets_through(marker)]
    return [tag for tag in element.tags if tag.targets(marker)]


def string_tag_for(name: str, value: str) -> Tag:
    """Build a string tag, for callers that assign a default back onto the model."""
    return Tag(name=name, kind=TagKind.STRING, value=value)


__all__ = [
    "find_tag",
    "find_tags",
    "string_tag",
    "reference_tags",
    "string_tag_for",
]
