# censored/fitting/encoding.py
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Sequence

import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype

from censored import logs
from censored.registry.recipes import EncodingRules
from censored.spec.formula import check_columns

INTERCEPT = "Intercept"


@dataclass(frozen=True)
class EncodingBlueprint:
    """
    EncodingBlueprint (FROZEN)

    Captured once on the training frame, replayed on every prediction frame
    so predictions can be requested with the formula's original variables.
    """
    predictors: tuple[str, ...]
    columns: tuple[str, ...]
    rules: EncodingRules
    levels: Mapping[str, tuple] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_data(
        cls,
        data: pd.DataFrame,
        predictors: Sequence[str],
        rules: EncodingRules,
    ) -> "EncodingBlueprint":
        check_columns(data, predictors)

        levels = {}
        if rules.predictor_indicators != "none":
            for col in predictors:
                series = data[col]
                if not is_numeric_dtype(series) or is_bool_dtype(series):
                    levels[col] = tuple(pd.Categorical(series.dropna()).categories)

        draft = cls(
            predictors=tuple(predictors),
            columns=(),
            rules=rules,
            levels=MappingProxyType(levels),
        )
        columns = tuple(draft._encode(data).columns)
        return cls(
            predictors=draft.predictors,
            columns=columns,
            rules=rules,
            levels=draft.levels,
        )

    # ------------------------------------------------------------------
    # replay
    # ------------------------------------------------------------------
    def transform(self, data: pd.DataFrame) -> pd.DataFrame:
        check_columns(data, self.predictors)

        for col, cats in self.levels.items():
            unseen = set(data[col].dropna()) - set(cats)
            if unseen:
                logs.warning(
                    f"[Encoding] {col}: levels unseen at fit {sorted(map(str, unseen))} -> reference level"
                )

        encoded = self._encode(data)
        return encoded.reindex(columns=list(self.columns), fill_value=0.0)

    def _encode(self, data: pd.DataFrame) -> pd.DataFrame:
        frame = data.loc[:, list(self.predictors)].copy()

        if not self.rules.allow_sparse_x:
            for col in frame.columns:
                if isinstance(frame[col].dtype, pd.SparseDtype):
                    frame[col] = frame[col].sparse.to_dense()

        if self.rules.predictor_indicators != "none" and self.levels:
            for col, cats in self.levels.items():
                frame[col] = pd.Categorical(frame[col], categories=list(cats))
            frame = pd.get_dummies(
                frame,
                columns=list(self.levels),
                prefix_sep="",
                # reference-level contrasts when an intercept absorbs the baseline
                drop_first=(
                    self.rules.predictor_indicators == "traditional"
                    and self.rules.compute_intercept
                ),
                dtype=float,
            )

        if self.rules.compute_intercept and not self.rules.remove_intercept:
            frame.insert(0, INTERCEPT, 1.0)

        for col in frame.columns:
            if is_bool_dtype(frame[col]):
                frame[col] = frame[col].astype(float)
        return frame
