"""Platform configuration loaded from YAML.

Lookup order for the config file: an explicit path, then ``$TUTORING_CONFIG``,
then ``<data_dir>/config.yaml``. ``$TUTORING_DATA_DIR`` overrides the data
directory wherever the file says it is.
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from .errors import ValidationError

logger = logging.getLogger(__name__)

# Default data directory
DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"

STORAGE_BACKENDS = ("json", "memory")


@dataclass
class PlatformConfig:
    """Runtime settings for the marketplace."""

    data_dir: Path = DEFAULT_DATA_DIR
    storage: str = "json"
    platform_fee_percent: float = 10.0
    recent_payments_limit: int = 20
    strict_bid_acceptance: bool = False
    seed_demo_data: bool = False
    log_level: str = "WARNING"
    session_file: Optional[Path] = None

    def __post_init__(self):
        self.data_dir = Path(self.data_dir)
        if self.session_file is None:
            self.session_file = self.data_dir / "session.json"
        else:
            self.session_file = Path(self.session_file)
        self.validate()

    def validate(self) -> None:
        """Reject settings the workflow cannot run with."""
        if self.storage not in STORAGE_BACKENDS:
            raise ValidationError(
                f"storage must be one of {', '.join(STORAGE_BACKENDS)}", field="storage"
            )
        if not 0 <= self.platform_fee_percent <= 100:
            raise ValidationError(
                "platform_fee_percent must be between 0 and 100", field="platform_fee_percent"
            )
        if self.recent_payments_limit < 1:
            raise ValidationError(
                "recent_payments_limit must be at least 1", field="recent_payments_limit"
            )

    def to_dict(self) -> dict:
        return {
            "data_dir": str(self.data_dir),
            "storage": self.storage,
            "platform_fee_percent": self.platform_fee_percent,
            "recent_payments_limit": self.recent_payments_limit,
            "strict_bid_acceptance": self.strict_bid_acceptance,
            "seed_demo_data": self.seed_demo_data,
            "log_level": self.log_level,
            "session_file": str(self.session_file),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PlatformConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValidationError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)


def get_data_dir() -> Path:
    """Get data directory from environment or default."""
    data_dir = os.environ.get("TUTORING_DATA_DIR", str(DEFAULT_DATA_DIR))
    return Path(data_dir)


def load_config(path: Optional[Path] = None) -> PlatformConfig:
    """Load configuration, falling back to defaults when no file exists."""
    env_data_dir = os.environ.get("TUTORING_DATA_DIR")

    if path is None and os.environ.get("TUTORING_CONFIG"):
        path = Path(os.environ["TUTORING_CONFIG"])
    if path is None:
        candidate = get_data_dir() / "config.yaml"
        path = candidate if candidate.exists() else None

    data: dict = {}
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValidationError(f"Config file must contain a mapping: {path}")
        logger.debug("Loaded config from %s", path)

    if env_data_dir:
        data["data_dir"] = env_data_dir
    data.setdefault("data_dir", str(get_data_dir()))

    return PlatformConfig.from_dict(data)


def save_config(config: PlatformConfig, path: Optional[Path] = None) -> Path:
    """Write configuration as YAML. Defaults to ``<data_dir>/config.yaml``."""
    path = Path(path) if path else config.data_dir / "config.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(config.to_dict(), f, sort_keys=False)
    return path
