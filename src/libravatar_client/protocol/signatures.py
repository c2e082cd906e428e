"""File signature (magic number) matching."""

from __future__ import annotations

from typing import Sequence


def signatures_match(
    data: bytes,
    signature: Sequence[int],
    tail: Sequence[int] | None = None,
) -> bool:
    """Check that *data* starts with *signature* and, if given, ends with *tail*.

    A payload shorter than the signature and tail combined can never match.
    """
    head = bytes(signature)
    end = bytes(tail) if tail else b""
    if len(data) < len(head) + len(end):
        return False
    if not data.startswith(head):
        return False
    return data.endswith(end)
