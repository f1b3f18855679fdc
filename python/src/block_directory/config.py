"""
Block Directory Configuration

Settings and logging for the block directory service.
"""

import logging
import os

import structlog
from pydantic import BaseModel, Field, field_validator, model_validator

# Configure simple structured logging for the service
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Shared service logger
directory_logger = structlog.get_logger("block_directory")

DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100


class DirectorySettings(BaseModel):
    """Configuration for the block directory service."""

    catalog_url: str = Field(
        default="https://api.wordpress.org/plugins/info/1.2/",
        description="Endpoint of the remote block catalog"
    )
    asset_cdn_base: str = Field(default="https://ps.w.org/", description="CDN base for relative block assets")
    rest_base: str = Field(default="http://localhost:8060", description="Public base URL used in response links")
    modules_dir: str = Field(default="./plugins", description="Directory holding locally installed modules")
    module_file_suffix: str = Field(default=".php", description="Suffix of a module's main file")
    catalog_timeout: float = Field(default=30.0, description="Catalog request timeout in seconds")
    default_per_page: int = Field(default=DEFAULT_PER_PAGE, description="Default page size")
    max_per_page: int = Field(default=MAX_PER_PAGE, description="Largest accepted page size")
    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8060, description="Bind port")
    log_level: str = Field(default="INFO", description="Log level")

    @field_validator('asset_cdn_base')
    @classmethod
    def validate_asset_cdn_base(cls, v):
        if not v.startswith("https://"):
            raise ValueError("asset_cdn_base must be an https URL")
        return v if v.endswith("/") else v + "/"

    @field_validator('rest_base')
    @classmethod
    def validate_rest_base(cls, v):
        return v.rstrip("/")

    @field_validator('catalog_timeout')
    @classmethod
    def validate_catalog_timeout(cls, v):
        if v <= 0:
            raise ValueError("catalog_timeout must be positive")
        return v

    @field_validator('max_per_page', 'default_per_page')
    @classmethod
    def validate_page_sizes(cls, v):
        if v < 1:
            raise ValueError("page sizes must be positive")
        return v

    @model_validator(mode="after")
    def validate_default_within_max(self):
        if self.default_per_page > self.max_per_page:
            raise ValueError("default_per_page cannot exceed max_per_page")
        return self

    @classmethod
    def from_env(cls) -> "DirectorySettings":
        """Build settings from BLOCK_DIRECTORY_* environment variables."""
        env_map = {
            "catalog_url": "BLOCK_DIRECTORY_CATALOG_URL",
            "asset_cdn_base": "BLOCK_DIRECTORY_ASSET_CDN",
            "rest_base": "BLOCK_DIRECTORY_REST_BASE",
            "modules_dir": "BLOCK_DIRECTORY_MODULES_DIR",
            "module_file_suffix": "BLOCK_DIRECTORY_MODULE_SUFFIX",
            "catalog_timeout": "BLOCK_DIRECTORY_TIMEOUT",
            "default_per_page": "BLOCK_DIRECTORY_DEFAULT_PER_PAGE",
            "max_per_page": "BLOCK_DIRECTORY_MAX_PER_PAGE",
            "host": "BLOCK_DIRECTORY_HOST",
            "port": "BLOCK_DIRECTORY_PORT",
            "log_level": "LOG_LEVEL",
        }
        values = {field: os.getenv(var) for field, var in env_map.items()}
        return cls(**{k: v for k, v in values.items() if v is not None})
