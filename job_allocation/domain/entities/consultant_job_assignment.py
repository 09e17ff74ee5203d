"""
Consultant job assignment entity: one row of a job's ownership history.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from job_allocation.domain.value_objects.assignment_source import AssignmentSource
from job_allocation.domain.value_objects.assignment_status import AssignmentStatus
from job_allocation.domain.value_objects.pipeline_stage import PipelineStage
from job_allocation.domain.value_objects.pipeline_state import PipelineState


@dataclass
class ConsultantJobAssignment:
    """Assignment history record.

    Rows are append-only. A row is created ACTIVE once per allocation event and
    moves to INACTIVE exactly once, when the job is unassigned or handed to a
    different consultant.
    """

    job_id: UUID
    consultant_id: UUID
    assigned_by: str
    id: UUID = field(default_factory=uuid4)
    status: AssignmentStatus = AssignmentStatus.ACTIVE
    assignment_source: AssignmentSource = AssignmentSource.MANUAL_HRM8
    assigned_at: Optional[datetime] = None
    pipeline_stage: PipelineStage = PipelineStage.SOURCING
    pipeline_progress: int = 0
    pipeline_note: Optional[str] = None
    pipeline_updated_at: Optional[datetime] = None
    pipeline_updated_by: Optional[str] = None

    def __post_init__(self):
        """Initialize timestamps."""
        if not self.assigned_at:
            self.assigned_at = datetime.now(timezone.utc)

    @classmethod
    def open(
        cls,
        job_id: UUID,
        consultant_id: UUID,
        assigned_by: str,
        source: AssignmentSource,
        pipeline: Optional[PipelineState] = None,
    ) -> "ConsultantJobAssignment":
        """Create a new ACTIVE assignment, optionally continuing a pipeline."""
        pipeline = pipeline or PipelineState.initial()
        now = datetime.now(timezone.utc)
        return cls(
            job_id=job_id,
            consultant_id=consultant_id,
            assigned_by=assigned_by,
            status=AssignmentStatus.ACTIVE,
            assignment_source=source,
            assigned_at=now,
            pipeline_stage=pipeline.stage,
            pipeline_progress=pipeline.progress,
            pipeline_note=pipeline.note,
            pipeline_updated_at=now,
            pipeline_updated_by=assigned_by,
        )

    @property
    def is_active(self) -> bool:
        """Check if this row currently owns the job."""
        return AssignmentStatus(self.status).is_active()

    @property
    def pipeline(self) -> PipelineState:
        """Current pipeline state."""
        return PipelineState(
            stage=PipelineStage(self.pipeline_stage),
            progress=self.pipeline_progress or 0,
            note=self.pipeline_note,
        )

    def close(self, close_pipeline: bool = True) -> None:
        """Mark the assignment INACTIVE."""
        if not self.is_active:
            raise ValueError(f"Assignment {self.id} is already inactive")

        self.status = AssignmentStatus.INACTIVE
        if close_pipeline:
            self.pipeline_stage = PipelineStage.CLOSED

    def update_pipeline(
        self,
        stage: PipelineStage,
        updated_by: str,
        progress: Optional[int] = None,
        note: Optional[str] = None,
    ) -> None:
        """Move the pipeline, keeping progress and note when omitted."""
        if not self.is_active:
            raise ValueError(f"Assignment {self.id} is not active")

        state = PipelineState(
            stage=stage,
            progress=self.pipeline_progress if progress is None else progress,
            note=self.pipeline_note if note is None else note,
        )
        self.pipeline_stage = state.stage
        self.pipeline_progress = state.progress
        self.pipeline_note = state.note
        self.pipeline_updated_at = datetime.now(timezone.utc)
        self.pipeline_updated_by = updated_by
