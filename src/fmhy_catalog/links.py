"""Markdown link extraction and classification."""

import re
from collections.abc import Callable

from fmhy_catalog.models import Link, LinkType

LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

# Evaluated in order, first match wins.
LINK_RULES: tuple[tuple[Callable[[str, str], bool], LinkType], ...] = (
    (lambda url, text: "github.com" in url, LinkType.GITHUB),
    (lambda url, text: "discord.com" in url or "discord.gg" in url, LinkType.DISCORD),
    (lambda url, text: "github" in text.lower(), LinkType.GITHUB),
    (lambda url, text: "discord" in text.lower(), LinkType.DISCORD),
)


def classify_link(url: str, text: str) -> LinkType:
    """Classify a link by its destination, falling back to its label.

    Args:
        url: Link destination.
        text: Link label.

    Returns:
        The type of the first matching rule, or ``LinkType.OTHER``.
    """
    for matches, link_type in LINK_RULES:
        if matches(url, text):
            return link_type
    return LinkType.OTHER


def extract_links(text: str) -> tuple[Link, ...]:
    """Extract every ``[label](url)`` link from text, left to right.

    Args:
        text: Arbitrary markdown text.

    Returns:
        Links in order of occurrence. Empty when nothing matches.
    """
    links = []
    for match in LINK_PATTERN.finditer(text):
        label, url = match.groups()
        links.append(Link(url=url.strip(), text=label.strip(), type=classify_link(url, label)))
    return tuple(links)
