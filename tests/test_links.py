"""Tests for markdown link extraction."""

import pytest

from fmhy_catalog.links import classify_link, extract_links
from fmhy_catalog.models import Link, LinkType


def test_extract_links_in_order() -> None:
    """Test that links are returned left to right and classified."""
    links = extract_links("[FMHY](https://fmhy.net) and [GH](https://github.com/x)")

    assert links == (
        Link(url="https://fmhy.net", text="FMHY", type=LinkType.OTHER),
        Link(url="https://github.com/x", text="GH", type=LinkType.GITHUB),
    )


def test_extract_links_without_matches() -> None:
    """Test that text without links yields an empty sequence."""
    assert extract_links("no links here") == ()
    assert extract_links("") == ()


def test_extract_links_skips_malformed_brackets() -> None:
    """Test that unclosed brackets are skipped instead of failing."""
    assert extract_links("[broken](https://example.com") == ()
    assert extract_links("[no destination] (https://example.com)") == ()


def test_extract_links_trims_whitespace() -> None:
    """Test that label and destination are trimmed."""
    links = extract_links("[ Label ]( https://example.com )")

    assert links == (Link(url="https://example.com", text="Label", type=LinkType.OTHER),)


def test_extract_links_first_closing_bracket_wins() -> None:
    """Test that the first closing parenthesis ends the destination."""
    links = extract_links("[Wiki](https://en.wikipedia.org/wiki/Foo_(bar))")

    assert len(links) == 1
    assert links[0].url == "https://en.wikipedia.org/wiki/Foo_(bar"


@pytest.mark.parametrize(
    ("url", "text", "expected"),
    [
        ("https://github.com/user/repo", "Source", LinkType.GITHUB),
        ("https://discord.com/invite/abc", "Chat", LinkType.DISCORD),
        ("https://discord.gg/abc", "Chat", LinkType.DISCORD),
        ("https://gitlab.com/mirror", "GitHub Mirror", LinkType.GITHUB),
        ("https://example.com/chat", "Our DISCORD", LinkType.DISCORD),
        ("https://example.com", "Website", LinkType.OTHER),
    ],
)
def test_classify_link_rules(url: str, text: str, expected: LinkType) -> None:
    """Test each classification rule on its own."""
    assert classify_link(url, text) == expected


def test_classify_destination_before_label() -> None:
    """Test that destination rules take priority over label rules."""
    assert classify_link("https://github.com/x", "Discord bot") == LinkType.GITHUB
    assert classify_link("https://discord.gg/x", "GitHub community") == LinkType.DISCORD


def test_primary_and_secondary_never_produced() -> None:
    """Test that reserved link types are not inferred."""
    links = extract_links("[Primary](https://primary.example) [Secondary](https://secondary.example)")

    assert {link.type for link in links} == {LinkType.OTHER}
