"""Shared pytest fixtures: async test client, engine and sample lab records."""

from __future__ import annotations

import datetime as dt
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from vinelab.config import Settings
from vinelab.engine import LabTestEngine, default_tables
from vinelab.main import app
from vinelab.models.enums import TestTypeEnum
from vinelab.routes.lab_tests import get_lab_test_service
from vinelab.schemas.lab_tests import TestRecord
from vinelab.services.lab_test_service import LabTestService


@pytest.fixture
def engine() -> LabTestEngine:
	return LabTestEngine(default_tables())


@pytest.fixture
def settings() -> Settings:
	return Settings(_env_file=None)


@pytest.fixture
def service(engine: LabTestEngine, settings: Settings) -> LabTestService:
	return LabTestService(engine=engine, settings=settings)


@pytest.fixture
def soil_record() -> TestRecord:
	return TestRecord(
		test_type=TestTypeEnum.soil,
		farm_id=42,
		date=dt.date(2025, 1, 10),
		parameters={"pH": 5.0, "Nitrogen": "210 ppm", "Phosphorus": 15, "Potassium": 180},
	)


@pytest.fixture
def petiole_record() -> TestRecord:
	return TestRecord(
		test_type=TestTypeEnum.petiole,
		farm_id="farm-7",
		date=dt.date(2025, 6, 2),
		parameters={"Total Nitrogen": 1.6, "Potassium": 1.2, "Zinc": 45},
	)


@pytest.fixture
async def client(service: LabTestService) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and the service dependency pinned."""

	app.dependency_overrides[get_lab_test_service] = lambda: service
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.dependency_overrides.clear()
