# pipenet/errors.py


class PipenetError(Exception):
    """Base class for recoverable analysis outcomes reported back to the caller."""


class DegenerateInputError(PipenetError, ValueError):
    """Input cannot be analyzed: too few vertices, a one-point polyline, or root == target."""


class ChainingError(PipenetError, ValueError):
    """An edge set does not form a single simple open chain."""


class OrphanComponentError(PipenetError, RuntimeError):
    def __init__(self, level: int, vertices, edge_count: int):
        self.level, self.vertices, self.edge_count = level, tuple(vertices), edge_count
        super().__init__(
            f"component of {edge_count} edge(s) has no connecting vertex to level {level - 1}"
        )
