# tests/conftest.py
from __future__ import annotations

import numpy as np
import pandas as pd
import pytest
from loguru import logger

from censored.registry import build_registry


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


@pytest.fixture(scope="session")
def registry():
    return build_registry()


def make_survival_data(n: int = 200, seed: int = 7) -> pd.DataFrame:
    """
    Exponential event times with hazard exp(0.8 * x1 - 0.5 * x2 + group effect):
    larger x1 -> shorter survival, larger x2 -> longer survival.
    Uniform censoring.
    """
    rng = np.random.default_rng(seed)
    x1 = rng.normal(size=n)
    x2 = rng.normal(size=n)
    grp = rng.choice(["a", "b", "c"], size=n)
    effect = pd.Series(grp).map({"a": 0.0, "b": 0.3, "c": -0.3}).to_numpy()

    hazard = np.exp(0.8 * x1 - 0.5 * x2 + effect)
    event_time = rng.exponential(scale=10.0 / hazard)
    censor_time = rng.uniform(0.0, 30.0, size=n)

    return pd.DataFrame(
        {
            "time": np.minimum(event_time, censor_time) + 0.01,
            "status": (event_time <= censor_time).astype(int),
            "x1": x1,
            "x2": x2,
            "grp": grp,
        }
    )


@pytest.fixture(scope="session")
def surv_data() -> pd.DataFrame:
    return make_survival_data()


@pytest.fixture(scope="session")
def new_data(surv_data) -> pd.DataFrame:
    rows = surv_data.drop(columns=["time", "status"]).iloc[:5].copy()
    rows.index = [10, 11, 12, 13, 14]
    return rows


@pytest.fixture(scope="session")
def formula() -> str:
    return "Surv(time, status) ~ x1 + x2 + grp"
