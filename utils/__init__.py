# utils/__init__.py
"""
Shared Utilities Package for the DSF Incentive Portal

This package contains:
- config: Configuration management (local + Streamlit Cloud)
- dsf_performance: Core logic and views

Usage:
    from utils.config import config
    from utils.dsf_performance import rank_groups
"""

# Configuration
from .config import (
    config,
    Config,
    IS_RUNNING_ON_CLOUD,
    DATA_SOURCES,
    APP_CONFIG,
)

__all__ = [
    'config',
    'Config',
    'IS_RUNNING_ON_CLOUD',
    'DATA_SOURCES',
    'APP_CONFIG',
]

__version__ = '1.0.0'
