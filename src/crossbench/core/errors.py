"""Error taxonomy for benchmark runs.

Every error raised by the strategies, the codec or matrix preparation derives
from :class:`BenchmarkError`. The orchestrator converts them into an ``Error``
state; nothing escapes a run.
"""


class BenchmarkError(Exception):
    """Base class for all benchmark failures."""


class InvalidSizeError(BenchmarkError, ValueError):
    """Requested matrix size is not a positive integer."""


class InvalidSeedError(BenchmarkError, ValueError):
    """Seed is not an integer in ``[0, 2**32)``."""


class DimensionMismatchError(BenchmarkError, ValueError):
    """Operands are not equal-sized square matrices."""


class EncodeError(BenchmarkError, ValueError):
    """A matrix cannot be converted to or from the accelerator buffer format."""


class AcceleratorUnavailableError(BenchmarkError, RuntimeError):
    """The parallel compute backend could not be initialized."""


class RunFailure(BenchmarkError):
    """Unexpected failure during a run.

    The original exception is kept as ``__cause__``.
    """

    @classmethod
    def wrap(cls, error: BaseException) -> "RunFailure":
        message = str(error) or type(error).__name__
        failure = cls(f"Unexpected {type(error).__name__}: {message}")
        failure.__cause__ = error
        return failure
