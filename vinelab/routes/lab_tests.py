"""Lab-test routes: recommendations, disease risks, ROI, plans, reminders and expense matching."""

from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, status

from vinelab.models.enums import TestTypeEnum
from vinelab.schemas.lab_tests import (
	DiseaseRisksResponse,
	ExpenseMatchRequest,
	ExpenseMatchResponse,
	PlanRequest,
	PlanResponse,
	RecommendationsRequest,
	RecommendationsResponse,
	ReminderRequest,
	ReminderStatus,
	ROIEstimate,
	ROIRequest,
)
from vinelab.services.lab_test_service import LabTestService

router = APIRouter(prefix="/lab-tests", tags=["lab-tests"])


def get_lab_test_service() -> LabTestService:
	return LabTestService()


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail="Unexpected lab test service failure",
	)


@router.post("/{test_type}/recommendations", response_model=RecommendationsResponse)
async def create_recommendations(
	test_type: TestTypeEnum,
	payload: RecommendationsRequest,
	service: LabTestService = Depends(get_lab_test_service),
) -> RecommendationsResponse:
	try:
		return service.recommend(test_type, payload.parameters)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.post("/{test_type}/disease-risks", response_model=DiseaseRisksResponse)
async def create_disease_risks(
	test_type: TestTypeEnum,
	payload: RecommendationsRequest,
	service: LabTestService = Depends(get_lab_test_service),
) -> DiseaseRisksResponse:
	try:
		return service.disease_risks(test_type, payload.parameters)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.post("/{test_type}/roi", response_model=ROIEstimate)
async def estimate_roi(
	test_type: TestTypeEnum,
	payload: ROIRequest,
	service: LabTestService = Depends(get_lab_test_service),
) -> ROIEstimate:
	try:
		recommendations = service.recommend(test_type, payload.parameters).recommendations
		return service.estimate_roi(recommendations, payload.test_cost, payload.farm_area)
	except Exception as exc:
		raise _map_error(exc) from exc

@router.post("/plan", response_model=PlanResponse)
async def create_plan(
	payload: PlanRequest,
	service: LabTestService = Depends(get_lab_test_service),
) -> PlanResponse:
	start_date = payload.start_date or dt.date.today()
	try:
		return service.plan(payload.test_record, start_date, payload.recommendations)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.post("/reminders", response_model=ReminderStatus)
async def check_reminders(
	payload: ReminderRequest,
	service: LabTestService = Depends(get_lab_test_service),
) -> ReminderStatus:
	today = payload.today or dt.date.today()
	try:
		return service.reminders(payload.latest_soil_test_date, payload.latest_petiole_test_date, today)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.post("/expenses/match", response_model=ExpenseMatchResponse)
async def match_expense(
	payload: ExpenseMatchRequest,
	service: LabTestService = Depends(get_lab_test_service),
) -> ExpenseMatchResponse:
	try:
		recommendations = service.recommend(payload.test_type, payload.parameters).recommendations
		return service.match_expense(payload.description, recommendations)
	except Exception as exc:
		raise _map_error(exc) from exc
