"""Application configuration.

AppConfig is a frozen dataclass, immutable after creation.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(root="/srv/shop", controllers_dir="handlers")
    """

    # Application root; relative paths below are resolved against it
    root: str | Path = "."

    # Directory scanned by App.load_resources() when no directory is given
    controllers_dir: str | Path = "controllers"

    @property
    def controllers_path(self) -> Path:
        """The default controllers directory, joined onto ``root``."""
        return Path(self.root) / self.controllers_dir
