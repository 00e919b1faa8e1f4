import pytest

from roll_core import RollConfig, clear_config_cache


@pytest.fixture
def small_config() -> RollConfig:
    return RollConfig.from_tables(
        candidate_rolls={"pct": [1.0, 2.0], "flat": [5]},
        weights={"pct": 1.0, "flat": 0.25, "orphan": 0.5},
        decimal_stats=["pct"],
    )


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ROLL_CONFIG_PATH", raising=False)
    clear_config_cache()
