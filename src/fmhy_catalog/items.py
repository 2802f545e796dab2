"""Item extraction from a single catalog bullet line."""

import re

from fmhy_catalog.links import extract_links
from fmhy_catalog.models import Item

SEPARATOR = "***"
NAV_BACK_MARKER = "**[◄◄"
DESCRIPTION_SEPARATOR = " - "

STAR_GLYPH = "⭐"
INDEX_GLYPH = "🌐"
CROSS_REFERENCE_GLYPH = "↪️"

FLAG_GLYPHS = (STAR_GLYPH, INDEX_GLYPH, CROSS_REFERENCE_GLYPH)

# Applied in order to strip structural markers from the line.
STRIP_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^[\s*-]+"),
    re.compile(r"^(?:" + "|".join(re.escape(glyph) for glyph in FLAG_GLYPHS) + r")\s*"),
)

BOLD_LINK_NAME = re.compile(r"\*\*\[([^\]]+)\]")
INLINE_LINK = re.compile(r"\[([^\]]+)\]\([^)]+\)")


def is_skippable(line: str) -> bool:
    """Return True for blank lines, separators and navigation-back links."""
    stripped = line.strip()
    return not stripped or stripped == SEPARATOR or stripped.startswith(NAV_BACK_MARKER)


def strip_markers(line: str) -> str:
    """Remove the bullet marker and one leading flag glyph from a line."""
    content = line.strip()
    for pattern in STRIP_PATTERNS:
        content = pattern.sub("", content, count=1).strip()
    return content


def split_name(content: str) -> tuple[str, str]:
    """Split content into name and description on the first separator."""
    name, found, description = content.partition(DESCRIPTION_SEPARATOR)
    if not found:
        return content.strip(), ""
    return name.strip(), description.strip()


def clean_name(name: str) -> str:
    """Reduce a raw name to plain text.

    A bold link opening (``**[Label]``) collapses to its label. Anything
    else loses its bold markers and has inline links replaced by their labels.
    """
    match = BOLD_LINK_NAME.search(name)
    if match:
        return match.group(1).strip()
    return INLINE_LINK.sub(r"\1", name.replace("**", "")).strip()


def parse_item(line: str) -> Item | None:
    """Parse one bullet line into an Item.

    Args:
        line: Source line, with or without surrounding whitespace.

    Returns:
        The parsed Item, or None when the line carries no entry.
    """
    if is_skippable(line):
        return None

    content = strip_markers(line)
    if not content:
        return None

    name, description = split_name(content)

    return Item(
        name=clean_name(name) or name,
        description=description,
        links=extract_links(content),
        is_starred=STAR_GLYPH in line,
        is_index=INDEX_GLYPH in line,
        is_cross_reference=CROSS_REFERENCE_GLYPH in line,
        raw_content=line.strip(),
    )
