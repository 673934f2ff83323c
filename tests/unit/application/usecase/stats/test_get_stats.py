"""Unit tests for GetStatsUseCase."""

import pytest

from quill.application.usecase.stats import GetStatsRequest, GetStatsUseCase
from quill.domain.error import ValidationError
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetStatsUseCase:
    """Tests for GetStatsUseCase."""

    @pytest.mark.asyncio
    async def test_bad_interval(self, unit_env):
        use_case = await unit_env.get(GetStatsUseCase)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(GetStatsRequest(interval="2w"))

        assert exc_info.value.fields == ["interval"]

    @pytest.mark.asyncio
    async def test_default_interval(self, unit_env):
        use_case = await unit_env.get(GetStatsUseCase)

        response = await use_case.execute(GetStatsRequest())

        assert response.comments_count == 0
