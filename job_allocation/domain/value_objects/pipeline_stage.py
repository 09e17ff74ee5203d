"""
Pipeline stage value object.
"""

from enum import Enum


class PipelineStage(str, Enum):
    """Recruitment pipeline stage tracked per assignment."""

    SOURCING = "SOURCING"
    SCREENING = "SCREENING"
    INTERVIEWING = "INTERVIEWING"
    OFFER = "OFFER"
    PLACED = "PLACED"
    ON_HOLD = "ON_HOLD"
    CLOSED = "CLOSED"

    def is_final(self) -> bool:
        """Check if stage ends the pipeline."""
        return self in [self.PLACED, self.CLOSED]
