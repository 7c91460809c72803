import logging
import os
from typing import Optional

import yaml
from pydantic import BaseModel, Field

CONFIG_PATH = "config/viewer_config.yaml"

logger = logging.getLogger(__name__)


class ViewerSettings(BaseModel):
    """Settings for the viewer, read from config/viewer_config.yaml."""
    data_path: str = "data/airbnb-london.csv"
    rejects_path: Optional[str] = None
    batch_size: int = Field(1000, gt=0)

    # Price range menus
    price_step: int = Field(100, gt=0)
    price_max: int = Field(1000, gt=0)

    shading_max_opacity: float = Field(0.75, gt=0, le=1)
    log_level: str = "INFO"

    model_config = {
        "extra": "ignore"
    }


def load_settings(config_path: str = CONFIG_PATH) -> ViewerSettings:
    """Reads the YAML config. A missing file gives the default settings."""
    if not os.path.exists(config_path):
        logger.info(f"No config at {config_path}, using defaults.")
        return ViewerSettings()
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}
    return ViewerSettings(**config.get('viewer', {}))
