"""
Configuration loader for the product admin client
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
import logging

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:5001/api"
DEFAULT_PLACEHOLDER_IMAGE_URL = (
    "https://images.unsplash.com/photo-1584308666744-24d5c474f2ae?w=60&auto=format&fit=crop&q=60"
)

# env var -> settings field
ENV_OVERRIDES = {
    "PHARMACY_API_TIMEOUT": "timeout_seconds",
    "PHARMACY_LIST_LIMIT": "list_limit",
    "PHARMACY_LEGACY_WARNINGS_FIELD": "legacy_warnings_field",
}


class ProductAdminSettings(BaseModel):
    """Runtime settings for the product admin client"""

    api_base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: float = Field(default=20.0, gt=0)
    list_limit: int = Field(default=1000, ge=1)
    max_image_files: int = Field(default=5, ge=1)
    low_stock_threshold: int = Field(default=10, ge=1)
    legacy_warnings_field: bool = False
    placeholder_image_url: str = DEFAULT_PLACEHOLDER_IMAGE_URL

    @property
    def products_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/products"


def _default_config_path() -> Path:
    return Path(__file__).parent.parent.parent / "config" / "admin_config.yml"


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}

    api_url = os.getenv("PHARMACY_API_URL", "").strip()
    if api_url:
        # The server mounts every route under /api
        overrides["api_base_url"] = f"{api_url.rstrip('/')}/api"

    for env_name, field_name in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is not None and value.strip():
            overrides[field_name] = value.strip()
    return overrides


def load_settings(config_path: Optional[Path] = None) -> ProductAdminSettings:
    """
    Load and validate admin settings

    Values come from the YAML config file (when present), then from the
    environment (a local .env file is loaded first).

    Args:
        config_path: Path to config file. Defaults to config/admin_config.yml

    Returns:
        Validated ProductAdminSettings object

    Raises:
        FileNotFoundError: If an explicit config path doesn't exist
        ValidationError: If the merged values don't match the schema
    """
    load_dotenv()

    config_data: Dict[str, Any] = {}
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    path = config_path or _default_config_path()
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

    config_data.update(_env_overrides())

    try:
        settings = ProductAdminSettings(**config_data)
        logger.info(f"Loaded admin settings (api_base_url={settings.api_base_url})")
        return settings
    except ValidationError as e:
        logger.error(f"Admin settings validation failed: {e}")
        raise
