"""Shared fixtures for catalog tests."""

from pathlib import Path

import pytest

SAMPLE_DOCUMENT = """\
**[◄◄ Back to Wiki Index](https://fmhy.net/)**

# ► Ad Blocking

* ⭐ **[uBlock Origin](https://github.com/gorhill/uBlock)** - Browser Adblocker / [Discord](https://discord.gg/ublock)
* **[AdGuard](https://adguard.com/)** - Adblocker for all platforms
* ↪️ **[DNS Adblocking](https://fmhy.net/adblockvpnguide#dns-adblocking)**

***

## ▷ Mobile

* 🌐 **[Mobile Adblock Index](https://example.org/index)** - Collection of mobile adblockers
* ⭐ **[Blokada](https://blokada.org/)** - Android Adblocker

# ► VPN

Some introductory prose that is not an item.

* **[Mullvad](https://mullvad.net/)** - Privacy-focused VPN ⭐
"""


@pytest.fixture
def sample_document() -> str:
    """Return a small document using every structural marker.

    Returns:
        Markdown text with two sections and one subsection.
    """
    return SAMPLE_DOCUMENT


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Create a temporary docs directory.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        Path to temporary docs directory.
    """
    path = tmp_path / "docs"
    path.mkdir()
    return path
