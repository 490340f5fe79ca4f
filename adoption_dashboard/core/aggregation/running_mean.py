"""
Incremental mean used to fold duplicate (group, year) observations.
"""


class RunningMean:
    """
    Mean updated one observation at a time.

    Keeps only the current mean and the number of observations folded in.
    """

    __slots__ = ("value", "count")

    def __init__(self) -> None:
        self.value = 0.0
        self.count = 0

    def add(self, observation: float) -> "RunningMean":
        self.value = (self.value * self.count + observation) / (self.count + 1)
        self.count += 1
        return self

    def __repr__(self) -> str:
        return f"RunningMean(value={self.value}, count={self.count})"
