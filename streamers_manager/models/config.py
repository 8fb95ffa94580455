"""Configuration data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StreamersConfig:
    """Streamers manager configuration, persisted as configs/config.json."""
    downloader_command: str = "youtube-dl"
    downloader_config_path: str = "configs/youtube-dl.config"
    auto_reload_config: bool = True  # Stored preference only, never enforced
    rate_limit_enabled: bool = True
    rate_limit_seconds: int = 5
    default_export_location: str = "./list.txt"
    streamers: list[str] = field(default_factory=list)  # Display order, duplicates kept
