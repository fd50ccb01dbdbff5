"""Tests for configuration loading and pool construction."""

import logging

import pytest
import yaml
from pydantic import ValidationError

from yieldpool.config.loader import config_from_dict, configure_logging, load_config
from yieldpool.config.schema import PoolConfig
from yieldpool.engine.collaborators import InMemoryAssetLedger, ManualClock, StaticAuthorizer
from yieldpool.engine.fixed_point import SCALE, SECONDS_PER_YEAR
from yieldpool.engine.pool import YieldPool


def base_config_dict():
    return {
        "rates": {
            "base_rate_per_year": 150_000_000_000_000_000,
            "schedule": [
                {"rate_per_year": 200_000_000_000_000_000, "start_time": 2000},
                {"rate_per_year": 250_000_000_000_000_000, "start_time": 3000},
            ],
        },
        "gates": {"claims_open": False},
    }


class TestConfigLoading:
    """Configuration loading."""

    def test_load_default_config(self):
        """Default config loads without errors."""
        config = load_config()
        assert isinstance(config, PoolConfig)
        assert config.rates.base_rate_per_year == 150_000_000_000_000_000
        assert config.rates.seconds_per_year == SECONDS_PER_YEAR
        assert config.rates.scale == SCALE
        assert config.gates.deposits_open is True

    def test_config_hash_is_deterministic(self):
        assert load_config().compute_hash() == load_config().compute_hash()

    def test_hash_changes_with_rate(self):
        a = config_from_dict(base_config_dict())
        data = base_config_dict()
        data["rates"]["base_rate_per_year"] += 1
        b = config_from_dict(data)
        assert a.compute_hash() != b.compute_hash()

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "pool.yaml"
        path.write_text(yaml.safe_dump(base_config_dict()))
        config = load_config(str(path))
        assert len(config.rates.schedule) == 2
        assert config.gates.claims_open is False

    def test_round_trip_dict(self):
        config = config_from_dict(base_config_dict())
        assert PoolConfig.from_dict(config.to_dict()) == config


class TestConfigValidation:
    def test_negative_rate_rejected(self):
        data = base_config_dict()
        data["rates"]["base_rate_per_year"] = -1
        with pytest.raises(ValidationError):
            config_from_dict(data)

    def test_non_increasing_schedule_rejected(self):
        data = base_config_dict()
        data["rates"]["schedule"][1]["start_time"] = 2000
        with pytest.raises(ValidationError):
            config_from_dict(data)

    def test_oversized_rate_rejected(self):
        data = base_config_dict()
        data["rates"]["base_rate_per_year"] = 2 ** 256
        with pytest.raises(ValidationError):
            config_from_dict(data)

    def test_logging_level_normalized(self):
        data = base_config_dict()
        data["logging"] = {"level": "debug"}
        assert config_from_dict(data).logging.level == "DEBUG"


class TestFromConfig:
    def test_pool_from_config(self):
        config = config_from_dict(base_config_dict())
        clock = ManualClock(start=5000)
        pool = YieldPool.from_config(
            config, InMemoryAssetLedger(), StaticAuthorizer(), clock
        )
        assert len(pool.schedule) == 2
        assert pool.is_open("deposit") is True
        assert pool.is_open("claim") is False
        assert pool.get_current_yield_rate() == (250_000_000_000_000_000 // SECONDS_PER_YEAR, 3000)

    def test_configure_logging(self):
        data = base_config_dict()
        data["logging"] = {"level": "WARNING"}
        configure_logging(config_from_dict(data))
        assert logging.getLogger("yieldpool").level == logging.WARNING
