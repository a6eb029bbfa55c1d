"""Tests for the configuration singleton."""

import logging

from utils.config import Config, DataSourceConfig, config


def test_singleton():
    assert Config() is config


def test_data_sources_shape():
    sources = config.get_data_sources()
    assert set(sources) == {"dsf_source", "branch_source", "fetch_timeout_seconds"}
    assert isinstance(sources["fetch_timeout_seconds"], float)


def test_data_source_defaults():
    defaults = DataSourceConfig().to_dict()
    assert defaults["dsf_source"] == "data/DSF_202602.csv"
    assert defaults["branch_source"] == "data/REGION_202602.csv"
    assert defaults["fetch_timeout_seconds"] == 15.0


def test_unknown_feature_defaults_to_enabled():
    assert config.is_feature_enabled("SOMETHING_NEW") is True


def test_app_config_is_a_copy():
    snapshot = config.app_config
    snapshot["CACHE_TTL_SECONDS"] = -1
    assert config.get_app_setting("CACHE_TTL_SECONDS") != -1


def test_log_level_resolves():
    assert config.get_log_level() in (
        logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL,
    )
