"""Retry policy for the convergence loop."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryPolicy:
    """
    Fixed attempt budget with a constant delay between attempts.

    The delay applies uniformly whatever the failure kind.
    """

    max_attempts: int = 5
    delay_seconds: float = 3.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {self.delay_seconds}")

    def is_last(self, attempt: int) -> bool:
        return attempt >= self.max_attempts
