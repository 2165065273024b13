from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
import structlog
from httpx import AsyncClient


@pytest.fixture
def request_logs() -> Iterator[list[dict[str, Any]]]:
	capture = structlog.testing.LogCapture()
	structlog.configure(processors=[structlog.contextvars.merge_contextvars, capture])
	yield capture.entries
	structlog.reset_defaults()


def _request_entries(entries: list[dict[str, Any]]) -> list[dict[str, Any]]:
	return [entry for entry in entries if entry["event"] == "lab_api_request"]


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
	response = await client.get("/health")

	assert response.status_code == 200
	assert response.json()["status"] == "ok"
	assert response.json()["service"] == "vinelab"


@pytest.mark.asyncio
async def test_request_id_is_generated(client: AsyncClient) -> None:
	response = await client.get("/health")

	assert response.headers.get("x-request-id")


@pytest.mark.asyncio
async def test_request_id_is_propagated(client: AsyncClient) -> None:
	response = await client.get("/health", headers={"x-request-id": "req-123"})

	assert response.headers["x-request-id"] == "req-123"


@pytest.mark.asyncio
async def test_lab_test_requests_log_test_type_and_route(
	client: AsyncClient, request_logs: list[dict[str, Any]]
) -> None:
	await client.post(
		"/api/v1/lab-tests/petiole/recommendations",
		json={"parameters": {"Potassium": 1.1}},
		headers={"x-request-id": "req-petiole"},
	)

	(entry,) = _request_entries(request_logs)
	assert entry["test_type"] == "petiole"
	assert entry["route"] == "/api/v1/lab-tests/{test_type}/recommendations"
	assert entry["request_id"] == "req-petiole"
	assert entry["status_code"] == 200


@pytest.mark.asyncio
async def test_requests_without_a_test_type_in_the_path_log_no_test_type(
	client: AsyncClient, request_logs: list[dict[str, Any]]
) -> None:
	await client.post(
		"/api/v1/lab-tests/reminders",
		json={"latest_soil_test_date": None, "latest_petiole_test_date": None, "today": "2025-01-01"},
	)

	(entry,) = _request_entries(request_logs)
	assert "test_type" not in entry
	assert entry["route"] == "/api/v1/lab-tests/reminders"
