"""
Integration tests for allocating, reassigning and unassigning jobs.
"""

from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy import update

from job_allocation.application.services.assignment_notifier import AssignmentNotifier
from job_allocation.application.use_cases.allocate_job import (
    AllocateJobRequest,
    AllocateJobUseCase,
)
from job_allocation.application.use_cases.unassign_job import (
    NOT_FOUND,
    UNASSIGNED,
    UnassignJobUseCase,
)
from job_allocation.application.use_cases.update_pipeline import (
    UpdatePipelineRequest,
    UpdatePipelineUseCase,
)
from job_allocation.domain.exceptions.allocation_error import (
    AssignmentNotFoundError,
    ConsultantNotFoundError,
    JobNotFoundError,
    ReassignmentReasonRequiredError,
)
from job_allocation.domain.exceptions.validation_error import (
    OutOfRangeError,
    RequiredFieldError,
)
from job_allocation.domain.value_objects.pipeline_stage import PipelineStage
from job_allocation.infrastructure.database.models import ConsultantModel, JobModel
from job_allocation.infrastructure.database.repositories import AssignmentRepository


@pytest.fixture
def allocate(executor, dispatcher):
    return AllocateJobUseCase(executor, AssignmentNotifier(dispatcher))


@pytest.fixture
def unassign(executor):
    return UnassignJobUseCase(executor)


@pytest.fixture
def update_pipeline(executor):
    return UpdatePipelineUseCase(executor)


@pytest_asyncio.fixture
async def world(seed):
    """One region, two consultants and an open job."""
    region = await seed.region()
    olivia = await seed.consultant("Olivia", region.id, last_name="Chen")
    liam = await seed.consultant("Liam", region.id, last_name="Patel")
    job = await seed.job(region_id=region.id)
    return {"region": region, "olivia": olivia, "liam": liam, "job": job}


def _request(job, consultant, reason=None):
    return AllocateJobRequest(
        job_id=job.id,
        consultant_id=consultant.id,
        assigned_by="user-1",
        assigned_by_name="Jane Admin",
        reason=reason,
    )


async def _assert_workload_matches_history(seed, *consultants):
    """current_jobs equals the number of ACTIVE rows each consultant holds."""
    async with seed.session_factory() as session:
        repository = AssignmentRepository(session)
        for consultant in consultants:
            active = await repository.count_active_by_consultant(consultant.id)
            stored = await seed.get_consultant(consultant.id)
            assert stored.current_jobs == active, stored.first_name


async def _assert_consistent(seed, job_id):
    """Job pointer agrees with the single ACTIVE history row."""
    job = await seed.get_job(job_id)
    active = [a for a in await seed.assignments(job_id) if a.status == "ACTIVE"]

    assert len(active) <= 1
    if active:
        assert job.assigned_consultant_id == active[0].consultant_id
        assert job.assignment_source is not None
        assert job.assignment_mode is not None
    else:
        assert job.assigned_consultant_id is None
        assert job.assignment_source is None
        assert job.assignment_mode is None
        assert job.region_id is None


class TestAllocate:
    """Allocation against a real session."""

    @pytest.mark.asyncio
    async def test_fresh_assignment(self, allocate, seed, world, dispatcher):
        job, olivia = world["job"], world["olivia"]

        result = await allocate.execute(_request(job, olivia))

        assert result.kind == "assignment"
        stored = await seed.get_job(job.id)
        assert stored.assigned_consultant_id == olivia.id
        assert stored.region_id == world["region"].id
        assert stored.assignment_source == "MANUAL_HRM8"
        assert stored.assignment_mode == "MANUAL"
        assert (await seed.get_consultant(olivia.id)).current_jobs == 1
        await _assert_consistent(seed, job.id)

        assert len(dispatcher.sent) == 1
        recipient, notification = dispatcher.sent[0]
        assert recipient == olivia.id
        assert notification.title == "New Job Assigned"

    @pytest.mark.asyncio
    async def test_same_consultant_is_idempotent(self, allocate, seed, world, dispatcher):
        job, olivia = world["job"], world["olivia"]
        await allocate.execute(_request(job, olivia))

        result = await allocate.execute(_request(job, olivia))

        assert result.is_same_consultant is True
        assert len(await seed.assignments(job.id)) == 1
        assert (await seed.get_consultant(olivia.id)).current_jobs == 1
        assert len(dispatcher.sent) == 1
        await _assert_consistent(seed, job.id)

    @pytest.mark.asyncio
    async def test_same_consultant_restores_drifted_pointer(
        self, allocate, seed, world, dispatcher
    ):
        job, olivia = world["job"], world["olivia"]
        await allocate.execute(_request(job, olivia))
        async with seed.session_factory() as session:
            await session.execute(
                update(JobModel)
                .where(JobModel.id == job.id)
                .values(assigned_consultant_id=None)
            )
            await session.commit()

        result = await allocate.execute(_request(job, olivia))

        assert result.is_same_consultant is True
        assert (await seed.get_job(job.id)).assigned_consultant_id == olivia.id
        assert (await seed.get_consultant(olivia.id)).current_jobs == 1
        assert len(await seed.assignments(job.id)) == 1
        assert len(dispatcher.sent) == 1
        await _assert_consistent(seed, job.id)

    @pytest.mark.asyncio
    async def test_reassignment_without_reason_changes_nothing(
        self, allocate, seed, world
    ):
        job, olivia, liam = world["job"], world["olivia"], world["liam"]
        await allocate.execute(_request(job, olivia))

        with pytest.raises(ReassignmentReasonRequiredError):
            await allocate.execute(_request(job, liam))

        assert (await seed.get_job(job.id)).assigned_consultant_id == olivia.id
        assert (await seed.get_consultant(liam.id)).current_jobs == 0
        assert len(await seed.assignments(job.id)) == 1

    @pytest.mark.asyncio
    async def test_reassignment_moves_workload_and_pipeline(
        self, allocate, update_pipeline, seed, world, dispatcher
    ):
        job, olivia, liam = world["job"], world["olivia"], world["liam"]
        await allocate.execute(_request(job, olivia))
        await update_pipeline.execute(
            UpdatePipelineRequest(
                consultant_id=olivia.id,
                job_id=job.id,
                stage=PipelineStage.INTERVIEWING,
                progress=60,
                note="Panel booked",
            )
        )

        result = await allocate.execute(_request(job, liam, reason="Annual leave"))

        assert result.is_reassignment is True
        history = await seed.assignments(job.id)
        assert [(a.consultant_id, a.status) for a in history] == [
            (olivia.id, "INACTIVE"),
            (liam.id, "ACTIVE"),
        ]
        assert history[0].pipeline_stage == "CLOSED"
        assert history[1].pipeline_stage == "INTERVIEWING"
        assert history[1].pipeline_progress == 60
        assert history[1].pipeline_note == "Panel booked"

        assert (await seed.get_consultant(olivia.id)).current_jobs == 0
        assert (await seed.get_consultant(liam.id)).current_jobs == 1
        await _assert_consistent(seed, job.id)

        titles = [(cid, n.title) for cid, n in dispatcher.sent[1:]]
        assert titles == [
            (liam.id, "Job Reassigned To You"),
            (olivia.id, "Job Reassigned Away"),
        ]

    @pytest.mark.asyncio
    async def test_counter_never_goes_negative(self, allocate, seed, world):
        job, olivia, liam = world["job"], world["olivia"], world["liam"]
        await allocate.execute(_request(job, olivia))
        async with seed.session_factory() as session:
            model = await session.get(ConsultantModel, olivia.id)
            model.current_jobs = 0
            await session.commit()

        await allocate.execute(_request(job, liam, reason="Rebalance"))

        assert (await seed.get_consultant(olivia.id)).current_jobs == 0

    @pytest.mark.asyncio
    async def test_consultant_region_wins(self, allocate, seed, world):
        other_region = await seed.region("Melbourne")
        remote = await seed.consultant("Ava", other_region.id)

        await allocate.execute(_request(world["job"], remote))

        assert (await seed.get_job(world["job"].id)).region_id == other_region.id

    @pytest.mark.asyncio
    async def test_unknown_job_and_consultant(self, allocate, world):
        with pytest.raises(JobNotFoundError):
            await allocate.execute(
                AllocateJobRequest(
                    job_id=uuid4(), consultant_id=world["olivia"].id, assigned_by="user-1"
                )
            )

        with pytest.raises(ConsultantNotFoundError):
            await allocate.execute(
                AllocateJobRequest(
                    job_id=world["job"].id, consultant_id=uuid4(), assigned_by="user-1"
                )
            )


class TestUnassign:
    """Unassignment against a real session."""

    @pytest.mark.asyncio
    async def test_unassign_releases_workload(self, allocate, unassign, seed, world):
        job, olivia = world["job"], world["olivia"]
        await allocate.execute(_request(job, olivia))
        await allocate.execute(_request(job, olivia))

        result = await unassign.execute(job.id)

        assert result.released_consultant_ids == [olivia.id]
        assert (await seed.get_consultant(olivia.id)).current_jobs == 0
        history = await seed.assignments(job.id)
        assert [a.status for a in history] == ["INACTIVE"]
        assert history[0].pipeline_stage == "SOURCING"
        await _assert_consistent(seed, job.id)

    @pytest.mark.asyncio
    async def test_unassign_is_idempotent(self, allocate, unassign, seed, world):
        job, olivia = world["job"], world["olivia"]
        await allocate.execute(_request(job, olivia))
        await unassign.execute(job.id)

        result = await unassign.execute(job.id)

        assert result.was_assigned is False
        assert (await seed.get_consultant(olivia.id)).current_jobs == 0
        await _assert_consistent(seed, job.id)

    @pytest.mark.asyncio
    async def test_assign_unassign_cycles_keep_counter_balanced(
        self, allocate, unassign, seed, world
    ):
        job, olivia = world["job"], world["olivia"]

        for _ in range(3):
            await allocate.execute(_request(job, olivia))
            await unassign.execute(job.id)

        assert (await seed.get_consultant(olivia.id)).current_jobs == 0
        assert len(await seed.assignments(job.id)) == 3

    @pytest.mark.asyncio
    async def test_workload_tracks_active_history(self, allocate, unassign, seed, world):
        olivia, liam = world["olivia"], world["liam"]
        second = await seed.job("Backend Engineer", region_id=world["region"].id)

        await allocate.execute(_request(world["job"], olivia))
        await allocate.execute(_request(second, olivia))
        await _assert_workload_matches_history(seed, olivia, liam)

        await allocate.execute(_request(world["job"], liam, reason="Rebalance"))
        await _assert_workload_matches_history(seed, olivia, liam)

        await unassign.execute(second.id)
        await _assert_workload_matches_history(seed, olivia, liam)
        assert (await seed.get_consultant(olivia.id)).current_jobs == 0
        assert (await seed.get_consultant(liam.id)).current_jobs == 1

    @pytest.mark.asyncio
    async def test_unassign_unknown_job(self, unassign, world):
        with pytest.raises(JobNotFoundError):
            await unassign.execute(uuid4())

    @pytest.mark.asyncio
    async def test_bulk_unassign_reports_unknown_jobs(
        self, allocate, unassign, seed, world
    ):
        job, olivia = world["job"], world["olivia"]
        other = await seed.job(title="Backend Engineer", region_id=world["region"].id)
        await allocate.execute(_request(job, olivia))
        missing = uuid4()

        outcomes = await unassign.execute_many([job.id, missing, other.id, job.id])

        assert [(o.job_id, o.outcome) for o in outcomes] == [
            (job.id, UNASSIGNED),
            (missing, NOT_FOUND),
            (other.id, UNASSIGNED),
        ]
        assert outcomes[0].released_consultant_ids == [olivia.id]
        assert (await seed.get_consultant(olivia.id)).current_jobs == 0


class TestUpdatePipeline:
    """Pipeline updates against a real session."""

    @pytest.mark.asyncio
    async def test_requires_active_assignment(self, update_pipeline, world):
        with pytest.raises(AssignmentNotFoundError):
            await update_pipeline.execute(
                UpdatePipelineRequest(
                    consultant_id=world["olivia"].id,
                    job_id=world["job"].id,
                    stage=PipelineStage.SCREENING,
                )
            )

    @pytest.mark.asyncio
    async def test_validation(self, update_pipeline, world):
        with pytest.raises(RequiredFieldError):
            await update_pipeline.execute(
                UpdatePipelineRequest(
                    consultant_id=world["olivia"].id, job_id=world["job"].id, stage=None
                )
            )
        with pytest.raises(OutOfRangeError):
            await update_pipeline.execute(
                UpdatePipelineRequest(
                    consultant_id=world["olivia"].id,
                    job_id=world["job"].id,
                    stage=PipelineStage.OFFER,
                    progress=101,
                )
            )

    @pytest.mark.asyncio
    async def test_keeps_omitted_fields(self, allocate, update_pipeline, seed, world):
        job, olivia = world["job"], world["olivia"]
        await allocate.execute(_request(job, olivia))
        request = UpdatePipelineRequest(
            consultant_id=olivia.id,
            job_id=job.id,
            stage=PipelineStage.SCREENING,
            progress=25,
            note="CVs shortlisted",
            updated_by="user-9",
        )
        await update_pipeline.execute(request)

        assignment = await update_pipeline.execute(
            UpdatePipelineRequest(
                consultant_id=olivia.id, job_id=job.id, stage=PipelineStage.OFFER
            )
        )

        assert assignment.pipeline_stage == PipelineStage.OFFER
        assert assignment.pipeline_progress == 25
        assert assignment.pipeline_note == "CVs shortlisted"
        assert assignment.pipeline_updated_by == str(olivia.id)
        stored = (await seed.assignments(job.id))[0]
        assert stored.pipeline_stage == "OFFER"
        assert stored.pipeline_progress == 25
