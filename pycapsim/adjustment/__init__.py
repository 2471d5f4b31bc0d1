# pycapsim/adjustment/__init__.py

"""
Multiplicative capacity adjustments: weather influence and tariff elasticity.
"""

from .weather import InfluenceKind, WeatherInfluenceTable, parse_influence_kind
from .elasticity import (
    CapacityType,
    ElasticityKind,
    ElasticityModel,
    ContinuousElasticity,
    StepwiseElasticity,
    parse_capacity_type,
    parse_elasticity_kind,
    parse_breakpoint_map,
    parse_range,
)

__all__ = [
    'InfluenceKind',
    'WeatherInfluenceTable',
    'parse_influence_kind',
    'CapacityType',
    'ElasticityKind',
    'ElasticityModel',
    'ContinuousElasticity',
    'StepwiseElasticity',
    'parse_capacity_type',
    'parse_elasticity_kind',
    'parse_breakpoint_map',
    'parse_range',
]
