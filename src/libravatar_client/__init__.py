"""Libravatar client -- federated avatar lookup for email addresses.

Top-level convenience re-exports::

    from libravatar_client import resolve_avatar, Found
    from libravatar_client.protocol import normalize_email  # building blocks
"""

__version__ = "0.1.0"

from libravatar_client.protocol.types import AvatarFile, AvatarResult, Found, NotFound
from libravatar_client.sdk.client import resolve_avatar, resolve_avatar_sync
from libravatar_client.sdk.config import AvatarConfig

__all__ = [
    "__version__",
    "AvatarConfig",
    "AvatarFile",
    "AvatarResult",
    "Found",
    "NotFound",
    "resolve_avatar",
    "resolve_avatar_sync",
]
