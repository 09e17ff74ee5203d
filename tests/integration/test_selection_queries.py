"""
Integration tests for the allocation read side and auto-assignment.
"""

from uuid import uuid4

import pytest
import pytest_asyncio

from job_allocation.application.interfaces.repositories import (
    ConsultantSearchCriteria,
    JobAllocationFilters,
)
from job_allocation.application.services.selection_service import SelectionService
from job_allocation.application.use_cases.allocate_job import (
    AllocateJobRequest,
    AllocateJobUseCase,
)
from job_allocation.application.use_cases.auto_assign_job import (
    AutoAssignJobRequest,
    AutoAssignJobUseCase,
)
from job_allocation.domain.exceptions.allocation_error import (
    JobRegionMissingError,
    NoEligibleConsultantError,
    ReassignmentReasonRequiredError,
)
from job_allocation.infrastructure.database.repositories import (
    AssignmentRepository,
    ConsultantRepository,
    JobRepository,
)


@pytest_asyncio.fixture
async def selection(db_session):
    return SelectionService(
        JobRepository(db_session),
        ConsultantRepository(db_session),
        AssignmentRepository(db_session),
    )


@pytest.fixture
def allocate(executor):
    return AllocateJobUseCase(executor)


def _ids(items):
    return [item.id for item in items]


class TestFindJobsForAllocation:
    """Job list filters and facets."""

    @pytest_asyncio.fixture
    async def jobs(self, seed, allocate):
        sydney = await seed.region("Sydney")
        melbourne = await seed.region("Melbourne")
        harbour = await seed.company("Harbour Health", region_id=sydney.id)
        logistics = await seed.company("Southern Logistics", region_id=melbourne.id)
        olivia = await seed.consultant("Olivia", sydney.id)

        nurse = await seed.job("Registered Nurse", harbour.id, sydney.id, job_code="RN-1")
        engineer = await seed.job("Backend Engineer", harbour.id, sydney.id)
        driver = await seed.job("Fleet Driver", logistics.id, melbourne.id)
        await seed.job("Closed Role", harbour.id, sydney.id, status="CLOSED")
        await seed.job("Paused Role", logistics.id, None, status="ON_HOLD")

        await allocate.execute(
            AllocateJobRequest(
                job_id=nurse.id, consultant_id=olivia.id, assigned_by="user-1"
            )
        )
        return {
            "sydney": sydney,
            "melbourne": melbourne,
            "harbour": harbour,
            "olivia": olivia,
            "nurse": nurse,
            "engineer": engineer,
            "driver": driver,
        }

    @pytest.mark.asyncio
    async def test_only_open_and_on_hold(self, selection, jobs):
        page = await selection.find_jobs_for_allocation(JobAllocationFilters(limit=50))

        assert page.total == 4
        assert "Closed Role" not in [job.title for job in page.jobs]

    @pytest.mark.asyncio
    async def test_facets(self, selection, jobs):
        unassigned = await selection.find_jobs_for_allocation(
            JobAllocationFilters(assignment_status="UNASSIGNED", limit=50)
        )
        assigned = await selection.find_jobs_for_allocation(
            JobAllocationFilters(assignment_status="assigned", limit=50)
        )

        assert unassigned.total == 3
        assert _ids(assigned.jobs) == [jobs["nurse"].id]
        assert assigned.jobs[0].assigned_consultant_name == "Olivia Smith"
        assert assigned.jobs[0].company_name == "Harbour Health"
        assert assigned.jobs[0].region_name == "Sydney"

    @pytest.mark.asyncio
    async def test_consultant_filter_overrides_facet(self, selection, jobs):
        page = await selection.find_jobs_for_allocation(
            JobAllocationFilters(
                consultant_id=jobs["olivia"].id, assignment_status="UNASSIGNED"
            )
        )

        assert _ids(page.jobs) == [jobs["nurse"].id]

    @pytest.mark.asyncio
    async def test_region_filters(self, selection, jobs):
        sydney = await selection.find_jobs_for_allocation(
            JobAllocationFilters(region_id=jobs["sydney"].id)
        )
        both = await selection.find_jobs_for_allocation(
            JobAllocationFilters(
                region_id=jobs["sydney"].id,
                region_ids=[jobs["sydney"].id, jobs["melbourne"].id],
            )
        )

        assert sydney.total == 2
        assert both.total == 3

    @pytest.mark.asyncio
    async def test_search_matches_title_code_and_company(self, selection, jobs):
        by_code = await selection.find_jobs_for_allocation(
            JobAllocationFilters(search="rn-1")
        )
        by_company = await selection.find_jobs_for_allocation(
            JobAllocationFilters(search="southern")
        )

        assert _ids(by_code.jobs) == [jobs["nurse"].id]
        assert by_company.total == 2

    @pytest.mark.asyncio
    async def test_company_filter_and_paging(self, selection, jobs):
        first = await selection.find_jobs_for_allocation(
            JobAllocationFilters(company_id=jobs["harbour"].id, limit=1)
        )
        second = await selection.find_jobs_for_allocation(
            JobAllocationFilters(company_id=jobs["harbour"].id, limit=1, offset=1)
        )

        assert first.total == second.total == 2
        assert set(_ids(first.jobs) + _ids(second.jobs)) == {
            jobs["nurse"].id,
            jobs["engineer"].id,
        }

    @pytest.mark.asyncio
    async def test_stats(self, selection, jobs):
        stats = await selection.get_stats()

        assert (stats.total, stats.assigned, stats.unassigned) == (4, 1, 3)

    @pytest.mark.asyncio
    async def test_consultants_by_job(self, selection, jobs):
        consultants = await selection.find_consultants_by_job(jobs["nurse"].id)

        assert _ids(consultants) == [jobs["olivia"].id]
        assert await selection.find_consultants_by_job(jobs["driver"].id) == []


class TestConsultantsForAssignment:
    """Consultant ranking and filters."""

    @pytest_asyncio.fixture
    async def region(self, seed):
        region = await seed.region()
        await seed.consultant("Zoe", region.id, current_jobs=0, max_jobs=3)
        await seed.consultant("Adam", region.id, current_jobs=0, max_jobs=8)
        await seed.consultant(
            "Bella",
            region.id,
            current_jobs=2,
            max_jobs=2,
            role="SENIOR_CONSULTANT",
            industries=("Healthcare",),
            languages=("Mandarin",),
        )
        await seed.consultant("Carl", region.id, current_jobs=1, availability="UNAVAILABLE")
        await seed.consultant("Dora", region.id, status="INACTIVE")
        await seed.consultant("Eve", (await seed.region("Melbourne")).id)
        return region

    async def _names(self, selection, **criteria):
        page = await selection.get_consultants_for_assignment(
            ConsultantSearchCriteria(**criteria)
        )
        return [c.first_name for c in page.consultants], page

    @pytest.mark.asyncio
    async def test_least_loaded_first(self, selection, region):
        names, page = await self._names(selection, region_id=region.id)

        assert names == ["Zoe", "Adam", "Carl", "Bella"]
        assert page.total == 4
        assert page.has_more is False

    @pytest.mark.asyncio
    async def test_paging(self, selection, region):
        names, page = await self._names(selection, region_id=region.id, limit=2)

        assert names == ["Zoe", "Adam"]
        assert page.has_more is True

    @pytest.mark.asyncio
    async def test_role_and_tags(self, selection, region):
        by_role, _ = await self._names(
            selection, region_id=region.id, role="senior consultant"
        )
        by_industry, _ = await self._names(
            selection, region_id=region.id, industry="healthcare"
        )
        by_language, _ = await self._names(
            selection, region_id=region.id, language="French"
        )

        assert by_role == ["Bella"]
        assert by_industry == ["Bella"]
        assert by_language == []

    @pytest.mark.asyncio
    async def test_availability(self, selection, region):
        at_capacity, _ = await self._names(
            selection, region_id=region.id, availability="at capacity"
        )
        available, _ = await self._names(
            selection, region_id=region.id, availability="AVAILABLE"
        )
        everyone, _ = await self._names(selection, region_id=region.id, availability="ALL")

        assert at_capacity == ["Bella"]
        assert available == ["Zoe", "Adam"]
        assert len(everyone) == 4

    @pytest.mark.asyncio
    async def test_search(self, selection, region):
        names, _ = await self._names(selection, region_id=region.id, search="car")

        assert names == ["Carl"]


class TestAutoAssign:
    """Auto-assignment end to end."""

    @pytest.fixture
    def auto_assign(self, selection, allocate):
        return AutoAssignJobUseCase(selection, allocate)

    @pytest.mark.asyncio
    async def test_picks_least_loaded(self, auto_assign, seed):
        region = await seed.region()
        busy = await seed.consultant("Adam", region.id, current_jobs=3)
        idle = await seed.consultant("Zoe", region.id, current_jobs=0)
        job = await seed.job(region_id=region.id)

        result = await auto_assign.execute(AutoAssignJobRequest(job_id=job.id))

        assert result.consultant_id == idle.id
        stored = await seed.get_job(job.id)
        assert stored.assignment_source == "AUTO_RULES"
        assert stored.assignment_mode == "AUTO"
        assert (await seed.get_consultant(idle.id)).current_jobs == 1
        assert (await seed.get_consultant(busy.id)).current_jobs == 3
        history = await seed.assignments(job.id)
        assert history[0].assigned_by == "system"

    @pytest.mark.asyncio
    async def test_uses_company_region(self, auto_assign, seed):
        region = await seed.region()
        company = await seed.company(region_id=region.id)
        consultant = await seed.consultant("Zoe", region.id)
        job = await seed.job(company_id=company.id)

        result = await auto_assign.execute(AutoAssignJobRequest(job_id=job.id))

        assert result.consultant_id == consultant.id
        assert (await seed.get_job(job.id)).region_id == region.id

    @pytest.mark.asyncio
    async def test_region_missing(self, auto_assign, seed):
        job = await seed.job(company_id=(await seed.company()).id)

        with pytest.raises(JobRegionMissingError):
            await auto_assign.execute(AutoAssignJobRequest(job_id=job.id))

    @pytest.mark.asyncio
    async def test_no_consultant(self, auto_assign, seed):
        region = await seed.region()
        await seed.consultant("Dora", region.id, status="INACTIVE")
        job = await seed.job(region_id=region.id)

        with pytest.raises(NoEligibleConsultantError):
            await auto_assign.execute(AutoAssignJobRequest(job_id=job.id))

        assert (await seed.get_job(job.id)).assigned_consultant_id is None

    @pytest.mark.asyncio
    async def test_reassignment_needs_reason(self, auto_assign, allocate, seed):
        region = await seed.region()
        owner = await seed.consultant("Adam", region.id, current_jobs=5)
        await seed.consultant("Zoe", region.id)
        job = await seed.job(region_id=region.id)
        await allocate.execute(
            AllocateJobRequest(job_id=job.id, consultant_id=owner.id, assigned_by="u")
        )

        with pytest.raises(ReassignmentReasonRequiredError):
            await auto_assign.execute(AutoAssignJobRequest(job_id=job.id))

        result = await auto_assign.execute(
            AutoAssignJobRequest(job_id=job.id, reason="Rebalance")
        )
        assert result.allocation.is_reassignment is True


class TestAssignmentInfo:
    """Assignment dialog data."""

    @pytest.mark.asyncio
    async def test_assignment_info(self, selection, allocate, seed):
        region = await seed.region()
        zoe = await seed.consultant("Zoe", region.id)
        adam = await seed.consultant("Adam", region.id)
        await seed.consultant("Dora", region.id, status="INACTIVE")
        job = await seed.job(region_id=region.id)
        await allocate.execute(
            AllocateJobRequest(job_id=job.id, consultant_id=zoe.id, assigned_by="u")
        )

        info = await selection.get_assignment_info(job.id)

        assert info.job.assigned_consultant_id == zoe.id
        assert info.region_id == region.id
        assert _ids(info.consultants) == [adam.id, zoe.id]
        assert info.pipeline.consultant_id == zoe.id
        assert info.pipeline.progress == 0

    @pytest.mark.asyncio
    async def test_pipeline_for_other_consultant(self, selection, seed):
        job = await seed.job()

        assert await selection.get_pipeline(job.id, uuid4()) is None
