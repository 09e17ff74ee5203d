"""
Pipeline state value object.
"""

from dataclasses import dataclass
from typing import Optional

from job_allocation.domain.value_objects.pipeline_stage import PipelineStage


@dataclass(frozen=True)
class PipelineState:
    """Progress metadata of an assignment, independent of who owns the job."""

    stage: PipelineStage = PipelineStage.SOURCING
    progress: int = 0
    note: Optional[str] = None

    def __post_init__(self):
        """Validate pipeline fields."""
        if not 0 <= self.progress <= 100:
            raise ValueError("Pipeline progress must be between 0 and 100")

    @classmethod
    def initial(cls) -> "PipelineState":
        """State of a freshly created assignment."""
        return cls()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "stage": self.stage.value,
            "progress": self.progress,
            "note": self.note,
        }
