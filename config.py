"""Configuration management for SmartBudget.

Reads configuration from ~/.config/smartbudget.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
from typing import Optional
import tomllib
import tomli_w


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    enable_reset: bool = False
    fuzzy_threshold: int = 2
    min_pattern_count: int = 3
    max_suggestions: int = 3
    keywords_file: Optional[Path] = None  # None = built-in dictionary

    def __post_init__(self):
        if self.fuzzy_threshold < 0:
            raise ValueError("suggestions.fuzzy_threshold must be >= 0")
        if self.min_pattern_count < 1:
            raise ValueError("suggestions.min_pattern_count must be >= 1")
        if self.max_suggestions < 1:
            raise ValueError("suggestions.max_suggestions must be >= 1")

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "smartbudget"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="smartbudget.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "smartbudget.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def get_seed_dir() -> Path:
    """Get the path to the bundled seed data directory."""
    return Path(__file__).parent / "db" / "seed"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Args:
        config_path: Config file to read. Defaults to ~/.config/smartbudget.toml.

    Returns:
        Config object with loaded or default values.

    Raises:
        ValueError: If a suggestion setting is out of range.
    """
    if config_path is None:
        config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config, config_path)
        return config

    # Load existing config
    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "smartbudget"))
    enable_reset = data.get("enable_reset", False)

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", "smartbudget.db")

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    suggestions_config = data.get("suggestions", {})
    keywords_file = suggestions_config.get("keywords_file") or None

    return Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        enable_reset=enable_reset,
        fuzzy_threshold=int(suggestions_config.get("fuzzy_threshold", 2)),
        min_pattern_count=int(suggestions_config.get("min_pattern_count", 3)),
        max_suggestions=int(suggestions_config.get("max_suggestions", 3)),
        keywords_file=Path(keywords_file).expanduser() if keywords_file else None,
    )


def _write_config(config: Config, config_path: Optional[Path] = None) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
        config_path: Destination file. Defaults to ~/.config/smartbudget.toml.
    """
    if config_path is None:
        config_path = get_config_path()

    # Ensure config directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Convert config to TOML structure
    data = {
        "base_dir": str(config.base_dir),
        "enable_reset": config.enable_reset,
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "suggestions": {
            "fuzzy_threshold": config.fuzzy_threshold,
            "min_pattern_count": config.min_pattern_count,
            "max_suggestions": config.max_suggestions,
            "keywords_file": str(config.keywords_file) if config.keywords_file else "",
        },
    }

    # Write TOML file
    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
