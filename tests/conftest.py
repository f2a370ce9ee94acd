"""Shared pytest configuration for the test suite."""

from __future__ import annotations

from typing import Callable

import pytest

from snips.core.keys import generate_private_key

from .fakes import build_transcript


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Tag every test that does not talk to snips.sh as a unit test."""

    for item in items:
        if "live" not in item.keywords:
            item.add_marker(pytest.mark.unit)


@pytest.fixture()
def transcript() -> Callable[..., bytes]:
    """Return the styled transcript builder."""

    return build_transcript


@pytest.fixture(scope="session")
def rsa_pem() -> str:
    """A real RSA key, smaller than production keys to keep the suite fast."""

    return generate_private_key(bits=2048)


@pytest.fixture()
def key_file(tmp_path, rsa_pem: str):
    """Path of a private key file holding rsa_pem."""

    path = tmp_path / "id_snips"
    path.write_text(rsa_pem, encoding="utf-8")
    return path
