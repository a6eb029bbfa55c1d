# utils/config.py
"""
Centralized Configuration Management

Version: 3.0.0
Features:
- Support both local (.env) and Streamlit Cloud (secrets.toml)
- Singleton pattern for efficiency
- Type-safe getters with defaults
- Environment detection
"""

import os
import logging
from pathlib import Path
from dotenv import load_dotenv
from typing import Dict, Any, Optional
from dataclasses import dataclass

# Initialize logger
logger = logging.getLogger(__name__)

DEFAULT_DSF_SOURCE = "data/DSF_202602.csv"
DEFAULT_BRANCH_SOURCE = "data/REGION_202602.csv"


def is_running_on_streamlit_cloud() -> bool:
    """Detect if running on Streamlit Cloud"""
    try:
        import streamlit as st
        return hasattr(st, 'secrets') and len(st.secrets) > 0
    except Exception:
        return False


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    return str(value).strip().lower() == "true"


@dataclass
class DataSourceConfig:
    """Data source configuration container"""
    dsf_source: str = DEFAULT_DSF_SOURCE
    branch_source: str = DEFAULT_BRANCH_SOURCE
    fetch_timeout_seconds: float = 15.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'dsf_source': self.dsf_source,
            'branch_source': self.branch_source,
            'fetch_timeout_seconds': self.fetch_timeout_seconds,
        }


class Config:
    """
    Centralized configuration management

    Usage:
        from utils.config import config

        # Get data sources
        sources = config.get_data_sources()

        # Get app settings
        ttl = config.get_app_setting("CACHE_TTL_SECONDS", 300)

        # Check feature flags
        if config.is_feature_enabled("EXPORT"):
            ...
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self.is_cloud = is_running_on_streamlit_cloud()
        self._load_config()
        self._initialized = True

    def _load_config(self):
        """Load configuration based on environment"""
        if self.is_cloud:
            self._load_cloud_config()
        else:
            self._load_local_config()

        self._load_app_config()
        self._log_config_status()

    def _load_cloud_config(self):
        """Load configuration from Streamlit Cloud secrets"""
        import streamlit as st

        data_secrets = st.secrets.get("DATA", {})
        self._data_config = DataSourceConfig(
            dsf_source=data_secrets.get("DSF_CSV_SOURCE", DEFAULT_DSF_SOURCE),
            branch_source=data_secrets.get("BRANCH_CSV_SOURCE", DEFAULT_BRANCH_SOURCE),
            fetch_timeout_seconds=float(data_secrets.get("FETCH_TIMEOUT_SECONDS", 15)),
        )

        # Secrets override environment for app settings
        self._overrides = dict(st.secrets.get("APP", {}))

        logger.info("☁️ Running in STREAMLIT CLOUD")

    def _load_local_config(self):
        """Load configuration from local .env file"""
        # Find and load .env file
        env_paths = [
            Path.cwd() / ".env",
            Path(__file__).parent.parent / ".env",
        ]

        for env_path in env_paths:
            if env_path.exists():
                load_dotenv(env_path)
                logger.info(f"Loaded .env from: {env_path}")
                break

        self._data_config = DataSourceConfig(
            dsf_source=os.getenv("DSF_CSV_SOURCE", DEFAULT_DSF_SOURCE),
            branch_source=os.getenv("BRANCH_CSV_SOURCE", DEFAULT_BRANCH_SOURCE),
            fetch_timeout_seconds=float(os.getenv("FETCH_TIMEOUT_SECONDS", "15")),
        )

        self._overrides = {}

        logger.info("💻 Running in LOCAL environment")

    def _setting(self, key: str, default: str) -> str:
        if key in self._overrides:
            return str(self._overrides[key])
        return os.getenv(key, default)

    def _load_app_config(self):
        """Load application-specific settings"""
        self._app_config = {
            # Cache
            "CACHE_TTL_SECONDS": int(self._setting("CACHE_TTL_SECONDS", "300")),

            # Logging
            "LOG_LEVEL": self._setting("LOG_LEVEL", "INFO").upper(),

            # Localization
            "TIMEZONE": self._setting("TIMEZONE", "Asia/Jakarta"),

            # Feature flags
            "ENABLE_EXPORT": _as_bool(self._setting("ENABLE_EXPORT", "true"), True),
            "ENABLE_BRANCH_RANKING": _as_bool(self._setting("ENABLE_BRANCH_RANKING", "true"), True),
            "ENABLE_DEBUG_MODE": _as_bool(self._setting("ENABLE_DEBUG_MODE", "false"), False),
        }

    def _log_config_status(self):
        """Log configuration status"""
        logger.info(f"✅ DSF data: {self._data_config.dsf_source}")
        logger.info(f"✅ Branch data: {self._data_config.branch_source}")

    # ==================== PUBLIC GETTERS ====================

    def get_data_sources(self) -> Dict[str, Any]:
        """Get data source configuration as dictionary"""
        return self._data_config.to_dict()

    def get_app_setting(self, key: str, default: Any = None) -> Any:
        """Get application setting with default"""
        return self._app_config.get(key, default)

    def is_feature_enabled(self, feature: str) -> bool:
        """Check if feature is enabled"""
        key = f"ENABLE_{feature.upper()}"
        return self._app_config.get(key, True)

    def get_log_level(self) -> int:
        return getattr(logging, self._app_config["LOG_LEVEL"], logging.INFO)

    # ==================== PROPERTIES ====================

    @property
    def data_config(self) -> DataSourceConfig:
        return self._data_config

    @property
    def app_config(self) -> Dict[str, Any]:
        return self._app_config.copy()


# ==================== SINGLETON INSTANCE ====================

config = Config()

IS_RUNNING_ON_CLOUD = config.is_cloud
DATA_SOURCES = config.get_data_sources()
APP_CONFIG = config.app_config

__all__ = [
    'config',
    'Config',
    'DataSourceConfig',
    'IS_RUNNING_ON_CLOUD',
    'DATA_SOURCES',
    'APP_CONFIG',
]
