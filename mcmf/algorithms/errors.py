"""Exceptions raised by the flow network, the engine and the loader."""


class FlowError(Exception):
    """Base class for every error raised by this package."""


class ConstructionError(FlowError, ValueError):
    """Vertex count is not a positive integer."""


class EdgeRangeError(FlowError, IndexError):
    """An edge endpoint lies outside [0, vertex_count)."""


class InvalidEdgeError(FlowError, ValueError):
    """An edge has a negative capacity or is a self-loop."""


class DegeneratePathError(FlowError, RuntimeError):
    """Bottleneck or augmentation requested on a path that was not found."""


class NegativeCycleError(FlowError, RuntimeError):
    """The residual graph holds a negative-cost cycle reachable from the source."""


class MalformedNetworkError(FlowError, ValueError):
    """A graph description file could not be turned into a network."""
