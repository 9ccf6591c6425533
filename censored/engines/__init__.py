"""
Engine registrations.

Each family module exposes make_<family>(builder) which declares its
engines, argument maps, fit recipes and prediction recipes.
"""
from .proportional_hazards import make_proportional_hazards
from .survival_reg import make_survival_reg

FAMILY_REGISTRATIONS = (
    make_proportional_hazards,
    make_survival_reg,
)

__all__ = ["FAMILY_REGISTRATIONS", "make_proportional_hazards", "make_survival_reg"]
