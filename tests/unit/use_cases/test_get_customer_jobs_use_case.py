"""
Unit tests for GetCustomerJobsUseCase.
"""

from uuid import uuid4

import pytest

from jobinsight.application.use_cases.get_customer_jobs import GetCustomerJobsUseCase
from jobinsight.domain.exceptions.not_found_error import CustomerNotFoundError
from jobinsight.domain.value_objects.job_filter import PageRequest


class TestGetCustomerJobsUseCase:
    """Test cases for GetCustomerJobsUseCase."""

    @pytest.fixture
    def use_case(self, mock_record_store, formatter):
        return GetCustomerJobsUseCase(mock_record_store, formatter)

    @pytest.mark.asyncio
    async def test_unknown_customer_raises(self, use_case, mock_record_store):
        mock_record_store.customer_exists.return_value = False

        with pytest.raises(CustomerNotFoundError):
            await use_case.execute(uuid4(), PageRequest())

        mock_record_store.fetch_jobs.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_customer_without_jobs(self, use_case, mock_record_store):
        customer_id = uuid4()

        data = await use_case.execute(customer_id, PageRequest(page=2, limit=10))

        assert data.jobs == []
        assert data.pagination.total == 0
        assert data.pagination.page == 2
        op = mock_record_store.fetch_jobs.await_args.args[0]
        assert op.filter.customer_id == customer_id
        assert op.page == PageRequest(page=2, limit=10)
