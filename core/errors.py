"""Exception hierarchy for road network generation."""


class RoadNetworkError(Exception):
    """Base class for all road network generation errors."""


class ConfigError(RoadNetworkError, ValueError):
    """Invalid generation parameters, reported before any work starts."""


class InternalInvariantViolation(RoadNetworkError, RuntimeError):
    """A record references something that does not exist, or the network was
    mutated after being handed off.

    Signals a bug in the builder or repairer, never bad caller input.
    """
