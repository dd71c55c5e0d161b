"""
Errors raised by approx_entropy.

Every named failure has its own class so callers can branch on the exact
condition. All of them derive from ValueError.
"""


class ApproxEntropyError(ValueError):
    """Base class for all entropy estimation errors."""
    pass


class NullDistribution(ApproxEntropyError):
    """Raised when a histogram has no samples, so entropy is undefined."""
    pass


class TooFewSamples(ApproxEntropyError):
    """Raised when there are too few samples for the subsample schedule (or too many groups)."""
    pass


class LowNumGroups(ApproxEntropyError):
    """Raised when the number of groups does not exceed the polynomial degree."""
    pass


class HighDegree(ApproxEntropyError):
    """Raised when a new degree would not stay below the number of groups."""
    pass


class TooManyRepetitions(ApproxEntropyError):
    """Raised when there are more repetition counts than subsample sizes."""
    pass


class TooManySubsampleSizes(ApproxEntropyError):
    """Raised when there are more subsample sizes than repetition counts."""
    pass


class NullRepetition(ApproxEntropyError):
    """Raised when a repetition count is zero."""
    pass


class NullSubsampleSize(ApproxEntropyError):
    """Raised when a subsample size is zero."""
    pass


class Immutable(ApproxEntropyError):
    """Raised when mutating a property that is fixed at construction."""
    pass


class PartitionExhausted(ApproxEntropyError):
    """Raised when a fixed partition has too few samples left for a full run."""
    pass


class FittingError(ApproxEntropyError):
    """Raised when the extrapolating fit is numerically singular."""
    pass
