"""Explorer configuration.

Defaults cover a stock Unity project. An optional YAML file overrides
them, and environment variables override the file:

    # sceneloom.yaml
    excluded_fragments: [Thirdparty, _Recovery, Plugins]
    max_workers: 4
    serializable_modifiers: [public]

    SCENELOOM_MAX_WORKERS=8
    SCENELOOM_LOG_LEVEL=DEBUG
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional

import yaml

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _default_workers() -> int:
    return os.cpu_count() or 1


@dataclass
class ExplorerConfig:
    """Settings shared by every stage of a run."""

    asset_dir: str = "Assets"
    scene_extension: str = ".unity"
    script_extension: str = ".cs"
    excluded_fragments: List[str] = field(default_factory=lambda: ["Thirdparty", "_Recovery"])
    max_workers: int = field(default_factory=_default_workers)
    reserved_prefix: str = "m_"
    serializable_modifiers: List[str] = field(default_factory=lambda: ["public"])
    serialization_attribute: str = "SerializeField"
    transform_types: List[str] = field(default_factory=lambda: ["Transform", "RectTransform"])
    indent: str = "--"
    report_name: str = "UnusedScripts.csv"
    log_level: str = "INFO"


def load_config(config_path: Optional[str] = None) -> ExplorerConfig:
    """Load configuration from defaults, an optional YAML file and env vars.

    Args:
        config_path: Optional YAML file; a missing file logs a warning

    Returns:
        ExplorerConfig
    """
    values = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            logger.warning(f"Config file not found at {path}, using defaults")
        else:
            with open(path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise ValueError(f"Config file {path} must contain a mapping")
            known = {f.name for f in fields(ExplorerConfig)}
            for key, value in loaded.items():
                if key in known:
                    values[key] = value
                else:
                    logger.warning(f"Ignoring unknown config key {key!r} in {path}")

    workers = os.getenv("SCENELOOM_MAX_WORKERS")
    if workers:
        try:
            values["max_workers"] = int(workers)
        except ValueError:
            raise ValueError(f"SCENELOOM_MAX_WORKERS must be an integer, got {workers!r}") from None
    log_level = os.getenv("SCENELOOM_LOG_LEVEL")
    if log_level:
        values["log_level"] = log_level

    config = ExplorerConfig(**values)
    if config.max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {config.max_workers}")
    config.log_level = str(config.log_level).upper()
    if config.log_level not in LOG_LEVELS:
        raise ValueError(f"log_level must be one of {list(LOG_LEVELS)}, got {config.log_level!r}")
    return config
