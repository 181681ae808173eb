"""Path management for the Gallon Logger data directory."""

from pathlib import Path

from .config import GallonLoggerConfig


class DataPaths:
    """Manages paths within the data directory."""

    def __init__(self, data_root: Path):
        self.root = data_root
        self.state = data_root / "state"
        self.reports = data_root / "reports"

        self.db_file = self.state / "gallon_logs.sqlite"

    @classmethod
    def from_config(cls, config: GallonLoggerConfig) -> "DataPaths":
        """Create DataPaths from a GallonLoggerConfig."""
        return cls(config.data_path)

    def get_all_directories(self) -> list[Path]:
        """Get list of all directories that should exist in the data directory."""
        return [self.root, self.state, self.reports]
