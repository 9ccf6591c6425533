# censored/utils/errors.py
from __future__ import annotations

from typing import Any, Sequence


class CensoredError(RuntimeError):
    """
    Root of every error raised by the dispatch / normalization layer.
    """


# ============================================================
# Configuration
# ============================================================
class ConfigurationError(CensoredError):
    """
    Registry misuse or an unregistered (family, engine, type) combination.
    Fatal; never retried.
    """


class NotRegisteredError(ConfigurationError):
    def __init__(self, key: tuple, available: Sequence[tuple]):
        self.key = key
        self.available = list(available)
        avail = ", ".join(str(k) for k in self.available) or "<none>"
        super().__init__(f"No engine registered for {key}. Available: {avail}")


class UnsupportedPredictionTypeError(ConfigurationError):
    def __init__(self, family: str, engine: str, type: str, supported: Sequence[str]):
        self.family = family
        self.engine = engine
        self.type = type
        self.supported = list(supported)
        super().__init__(
            f"Prediction type '{type}' is not available for "
            f"{family} with engine '{engine}'. "
            f"Supported types: {', '.join(self.supported) or '<none>'}"
        )


# ============================================================
# Arguments
# ============================================================
class InvalidArgumentError(CensoredError, ValueError):
    """
    Malformed argument, or several values where a single one is required.
    """

    def __init__(self, argument: str, message: str, count: int | None = None):
        self.argument = argument
        self.count = count
        super().__init__(f"`{argument}`: {message}")


# ============================================================
# Regularization path
# ============================================================
class _StrengthError(CensoredError, ValueError):
    def __init__(self, message: str, trained: Sequence[float], requested: Any = None):
        self.trained = [float(v) for v in trained]
        self.requested = requested
        super().__init__(message)


class AmbiguousStrengthError(_StrengthError):
    """
    No penalty given and the path holds several trained strengths.
    """


class IncompatibleStrengthError(_StrengthError):
    """
    Requested penalty cannot be served by the trained path.
    """


# ============================================================
# Native fit
# ============================================================
class NativeFitFailure(CensoredError):
    """
    Wraps the exception raised by a native fitting routine.
    Stored on the FittedModel instead of being raised when fit(catch=True).
    """

    def __init__(self, engine: str, cause: BaseException):
        self.engine = engine
        self.cause = cause
        super().__init__(
            f"Engine '{engine}' failed to fit: {type(cause).__name__}: {cause}"
        )


class FitFailedError(CensoredError):
    """
    Raised by predict() on a model whose fit failed.
    """

    def __init__(self, failure: NativeFitFailure):
        self.failure = failure
        super().__init__(
            f"Model fit failed; no predictions available. ({failure})"
        )
