"""Avatar preferences via dataclass (no pydantic -- instant construction)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from libravatar_client.protocol.types import (
    DEFAULT_HOST,
    DEFAULT_TIMEOUT,
    PlaceholderPreference,
    placeholder_from_setting,
)

logger = logging.getLogger(__name__)


@dataclass
class AvatarConfig:
    """Read-only preferences consumed by the resolution pipeline.

    ``doh_server`` enables DNS discovery (``None`` disables it).
    ``default_avatar`` is three-valued, see :mod:`libravatar_client.protocol.types`.
    ``preferred_instance`` is the fallback instance (``None`` means
    ``default_host``).

    Priority (highest wins): constructor arg > env var > config.toml > default.
    """

    doh_server: str | None = None
    default_avatar: PlaceholderPreference | None = None
    preferred_instance: str | None = None
    default_host: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    data_dir: Path | str | None = None

    def __post_init__(self) -> None:
        # LIBRAVATAR_HOME overrides ~/.libravatar (useful for testing / isolation).
        if self.data_dir is None:
            home = os.getenv("LIBRAVATAR_HOME")
            self.data_dir = Path(home) if home else Path.home() / ".libravatar"
        else:
            self.data_dir = Path(self.data_dir)

        file_prefs = self._load_config_file(Path(self.data_dir) / "config.toml")

        if self.doh_server is None:
            self.doh_server = os.getenv("LIBRAVATAR_DOH_SERVER", file_prefs.get("doh_server"))
        if self.preferred_instance is None:
            self.preferred_instance = os.getenv(
                "LIBRAVATAR_PREFERRED_INSTANCE", file_prefs.get("preferred_instance")
            )
        if self.default_host is None:
            self.default_host = os.getenv(
                "LIBRAVATAR_DEFAULT_HOST", file_prefs.get("default_host", DEFAULT_HOST)
            )

        # LIBRAVATAR_DEFAULT_AVATAR="" selects ExplicitEmpty
        if self.default_avatar is None:
            raw = os.environ.get("LIBRAVATAR_DEFAULT_AVATAR", file_prefs.get("default_avatar"))
            self.default_avatar = placeholder_from_setting(raw)

        # Empty strings mean "not configured" for these two
        self.doh_server = self.doh_server or None
        self.preferred_instance = self.preferred_instance or None
        if not self.default_host:
            self.default_host = DEFAULT_HOST

        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout!r}")

    @property
    def fallback_instance(self) -> str:
        """The instance tried after the first attempt fails."""
        return self.preferred_instance or self.default_host

    @staticmethod
    def _load_config_file(path: Path) -> dict[str, str]:
        """Load the optional ``[preferences]`` table from config.toml."""
        if not path.exists():
            return {}

        try:
            import tomllib
        except ModuleNotFoundError:
            import tomli as tomllib  # type: ignore[no-redef]  # Python 3.10 fallback

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError):
            logger.warning("Failed to load config file %s", path, exc_info=True)
            return {}

        section = data.get("preferences", {})
        if not isinstance(section, dict):
            logger.warning("Ignoring non-table [preferences] in %s", path)
            return {}
        return {k: v for k, v in section.items() if isinstance(v, str)}
