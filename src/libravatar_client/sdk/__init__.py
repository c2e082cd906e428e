"""Libravatar SDK -- network-facing avatar resolution pipeline."""

from libravatar_client.sdk.client import resolve_avatar, resolve_avatar_sync
from libravatar_client.sdk.config import AvatarConfig

__all__ = ["AvatarConfig", "resolve_avatar", "resolve_avatar_sync"]
