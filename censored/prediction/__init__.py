"""
Prediction (FINAL / FROZEN)

predict(fitted, new_data, type)
    -> recipe lookup  (family, engine, type)
    -> context        (encoding, time / quantile checks)
    -> strength       (path engines only)
    -> pre / native / post
    -> formatter      (one row per input row)
"""
from .context import PredictionContext
from .multi import multi_predict
from .penalty import resolve_penalty
from .router import predict

__all__ = ["PredictionContext", "multi_predict", "predict", "resolve_penalty"]
