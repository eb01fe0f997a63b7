"""Orchestration models - ConvergenceState."""

from enum import Enum


class ConvergenceState(str, Enum):
    """States of one convergence run."""

    PREPARING = "preparing"
    EXECUTING = "executing"
    EVALUATING = "evaluating"
    REGENERATING = "regenerating"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"

    @property
    def is_terminal(self) -> bool:
        return self in (ConvergenceState.SUCCEEDED, ConvergenceState.EXHAUSTED)
