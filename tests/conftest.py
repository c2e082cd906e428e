"""Shared test fixtures for libravatar client tests."""

from __future__ import annotations

import hashlib

import pytest

from libravatar_client.protocol.address import EmailAddress, normalize_email

PNG_SIGNATURE = bytes([137, 80, 78, 71, 13, 10, 26, 10])


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.libravatar and LIBRAVATAR_* settings."""
    for var in (
        "LIBRAVATAR_DOH_SERVER",
        "LIBRAVATAR_DEFAULT_AVATAR",
        "LIBRAVATAR_PREFERRED_INSTANCE",
        "LIBRAVATAR_DEFAULT_HOST",
    ):
        monkeypatch.delenv(var, raising=False)
    home = tmp_path / "libravatar_home"
    home.mkdir()
    monkeypatch.setenv("LIBRAVATAR_HOME", str(home))
    return home


@pytest.fixture()
def png_bytes() -> bytes:
    """A payload that passes the PNG signature check."""
    return PNG_SIGNATURE + b"\x00\x00\x00\rIHDR" + b"\x00" * 32


@pytest.fixture()
def jpeg_bytes() -> bytes:
    """A payload that passes the JPEG head and tail checks."""
    return b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x00" * 32 + b"\xff\xd9"


@pytest.fixture()
def sample_email() -> EmailAddress:
    return normalize_email("Alice@Example.com")


@pytest.fixture()
def alice_hash() -> str:
    return hashlib.sha256(b"alice@example.com").hexdigest()
