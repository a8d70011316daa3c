class TSPError(Exception):
    """Base class for errors raised by the evolutionary core."""


class DataConsistencyError(TSPError, RuntimeError):
    """A route or graph broke an invariant (missing edge, lost city, bad node labels)."""


class ConfigurationError(TSPError, ValueError):
    """Run parameters that must be rejected before a simulation starts."""


class EmptyPopulationError(TSPError, RuntimeError):
    pass
