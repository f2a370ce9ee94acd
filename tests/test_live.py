"""End-to-end uploads against the real snips.sh (opt in with SNIPS_LIVE=1)."""

from __future__ import annotations

import os
import re

import pytest

from snips import ConnectionConfig, SnipsClient

pytestmark = [
    pytest.mark.live,
    pytest.mark.skipif(not os.getenv("SNIPS_LIVE"), reason="set SNIPS_LIVE=1 to talk to snips.sh"),
]

ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{10}$")


@pytest.mark.asyncio
async def test_uploads_a_snip() -> None:
    """Uploading Hello! returns a public snip at https://snips.sh/f/<id>."""

    snip = await SnipsClient(ConnectionConfig(timeout=30)).upload("Hello!")

    assert ID_PATTERN.match(snip.id)
    assert snip.url == f"https://snips.sh/f/{snip.id}"


@pytest.mark.asyncio
async def test_uploads_many_snips() -> None:
    """Sequential uploads on one client each get their own id."""

    client = SnipsClient(ConnectionConfig(timeout=30))

    first = await client.upload("A snip")
    second = await client.upload("Another snip")

    for snip in (first, second):
        assert ID_PATTERN.match(snip.id)
        assert snip.url == f"https://snips.sh/f/{snip.id}"
    assert first.id != second.id
