"""Location resolution strategies."""

from disaster_intel.adapters.location.strategies import (
    NERLocationStrategy,
    PatternLocationStrategy,
    find_location_candidates,
    join_location_entities,
)

__all__ = [
    "NERLocationStrategy",
    "PatternLocationStrategy",
    "find_location_candidates",
    "join_location_entities",
]
