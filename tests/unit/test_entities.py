"""
Unit tests for domain entities.
"""

from uuid import uuid4

import pytest

from job_allocation.domain.entities.consultant import Consultant
from job_allocation.domain.entities.consultant_job_assignment import (
    ConsultantJobAssignment,
)
from job_allocation.domain.entities.job import Job
from job_allocation.domain.value_objects.assignment_mode import AssignmentMode
from job_allocation.domain.value_objects.assignment_source import AssignmentSource
from job_allocation.domain.value_objects.assignment_status import AssignmentStatus
from job_allocation.domain.value_objects.consultant_status import (
    ConsultantAvailability,
    ConsultantStatus,
)
from job_allocation.domain.value_objects.pipeline_stage import PipelineStage
from job_allocation.domain.value_objects.pipeline_state import PipelineState


class TestJob:
    """Test Job entity."""

    def test_title_required(self):
        with pytest.raises(ValueError, match="title is required"):
            Job(title="   ")

    def test_assign_to_sets_mode_from_source(self):
        job = Job(title="Backend Engineer")
        consultant_id, region_id = uuid4(), uuid4()

        job.assign_to(consultant_id, region_id, AssignmentSource.AUTO_RULES)

        assert job.is_assigned is True
        assert job.assigned_consultant_id == consultant_id
        assert job.region_id == region_id
        assert job.assignment_source == AssignmentSource.AUTO_RULES
        assert job.assignment_mode == AssignmentMode.AUTO

    def test_confirm_assignment_keeps_owner(self):
        consultant_id = uuid4()
        job = Job(title="Backend Engineer", assigned_consultant_id=consultant_id)

        job.confirm_assignment(None, AssignmentSource.MANUAL_HRM8)

        assert job.assigned_consultant_id == consultant_id
        assert job.region_id is None
        assert job.assignment_mode == AssignmentMode.MANUAL

    def test_clear_assignment(self):
        job = Job(title="Backend Engineer")
        job.assign_to(uuid4(), uuid4(), AssignmentSource.MANUAL_HRM8)

        job.clear_assignment()

        assert job.is_assigned is False
        assert job.region_id is None
        assert job.assignment_source is None
        assert job.assignment_mode is None


class TestConsultant:
    """Test Consultant entity."""

    def test_full_name(self):
        assert Consultant(first_name="Ava", last_name="Nguyen").full_name == "Ava Nguyen"

    def test_explicit_availability_wins(self):
        consultant = Consultant(
            first_name="Ava",
            last_name="Nguyen",
            availability=ConsultantAvailability.UNAVAILABLE,
            current_jobs=0,
            max_jobs=5,
        )
        assert consultant.effective_availability() == ConsultantAvailability.UNAVAILABLE

    def test_derived_availability(self):
        busy = Consultant(first_name="A", last_name="B", current_jobs=5, max_jobs=5)
        free = Consultant(first_name="A", last_name="B", current_jobs=4, max_jobs=5)
        unlimited = Consultant(first_name="A", last_name="B", current_jobs=9, max_jobs=0)

        assert busy.effective_availability() == ConsultantAvailability.AT_CAPACITY
        assert free.effective_availability() == ConsultantAvailability.AVAILABLE
        assert unlimited.effective_availability() == ConsultantAvailability.AVAILABLE

    def test_can_receive_jobs(self):
        assert Consultant(first_name="A", last_name="B").can_receive_jobs() is True
        suspended = Consultant(
            first_name="A", last_name="B", status=ConsultantStatus.SUSPENDED
        )
        assert suspended.can_receive_jobs() is False


class TestConsultantJobAssignment:
    """Test ConsultantJobAssignment entity."""

    @pytest.fixture
    def assignment(self):
        return ConsultantJobAssignment.open(
            job_id=uuid4(),
            consultant_id=uuid4(),
            assigned_by="user-1",
            source=AssignmentSource.MANUAL_HRM8,
        )

    def test_open_starts_fresh_pipeline(self, assignment):
        assert assignment.is_active is True
        assert assignment.pipeline == PipelineState.initial()
        assert assignment.pipeline_updated_by == "user-1"
        assert assignment.assigned_at is not None

    def test_open_continues_pipeline(self):
        pipeline = PipelineState(stage=PipelineStage.OFFER, progress=80, note="Offer out")

        assignment = ConsultantJobAssignment.open(
            job_id=uuid4(),
            consultant_id=uuid4(),
            assigned_by="user-1",
            source=AssignmentSource.MANUAL_HRM8,
            pipeline=pipeline,
        )

        assert assignment.pipeline == pipeline

    def test_close_marks_pipeline_closed(self, assignment):
        assignment.close()

        assert assignment.status == AssignmentStatus.INACTIVE
        assert assignment.pipeline_stage == PipelineStage.CLOSED

    def test_close_can_keep_pipeline(self, assignment):
        assignment.update_pipeline(PipelineStage.SCREENING, "user-1")

        assignment.close(close_pipeline=False)

        assert assignment.is_active is False
        assert assignment.pipeline_stage == PipelineStage.SCREENING

    def test_close_twice_fails(self, assignment):
        assignment.close()

        with pytest.raises(ValueError, match="already inactive"):
            assignment.close()

    def test_update_pipeline_keeps_omitted_fields(self, assignment):
        assignment.update_pipeline(
            PipelineStage.SCREENING, "user-1", progress=30, note="Phone screen"
        )
        assignment.update_pipeline(PipelineStage.INTERVIEWING, "user-2")

        assert assignment.pipeline_stage == PipelineStage.INTERVIEWING
        assert assignment.pipeline_progress == 30
        assert assignment.pipeline_note == "Phone screen"
        assert assignment.pipeline_updated_by == "user-2"

    def test_update_pipeline_rejects_bad_progress(self, assignment):
        with pytest.raises(ValueError):
            assignment.update_pipeline(PipelineStage.OFFER, "user-1", progress=150)

    def test_update_pipeline_requires_active(self, assignment):
        assignment.close()

        with pytest.raises(ValueError, match="not active"):
            assignment.update_pipeline(PipelineStage.OFFER, "user-1")
