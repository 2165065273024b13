from __future__ import annotations

import datetime as dt
from concurrent.futures import ThreadPoolExecutor

from vinelab.engine import LabTestEngine, default_engine, generate_soil_test_recommendations
from vinelab.models.enums import TestTypeEnum
from vinelab.schemas.lab_tests import TestRecord

SOIL = {"pH": 5.4, "EC": "2.3 dS/m", "Nitrogen": 130, "Phosphorus": 12, "Zinc": 0.4, "Boron": 0.3}
PETIOLE = {"Total Nitrogen": 1.4, "Potassium": 1.1, "Magnesium": 0.2, "Zinc": 15}


def test_concurrent_soil_calls_return_identical_recommendations() -> None:
	expected = generate_soil_test_recommendations(SOIL)

	with ThreadPoolExecutor(max_workers=8) as pool:
		results = list(pool.map(lambda _: generate_soil_test_recommendations(SOIL), range(64)))

	assert all(result == expected for result in results)


def test_concurrent_calls_on_a_shared_engine_do_not_interfere() -> None:
	engine = default_engine()
	inputs = [(TestTypeEnum.soil, SOIL), (TestTypeEnum.petiole, PETIOLE)] * 32
	expected = {test_type: engine.recommend(test_type, raw) for test_type, raw in inputs[:2]}

	with ThreadPoolExecutor(max_workers=8) as pool:
		results = list(pool.map(lambda pair: (pair[0], engine.recommend(*pair)), inputs))

	assert all(recs == expected[test_type] for test_type, recs in results)


def test_concurrent_plans_are_identical() -> None:
	engine = LabTestEngine()
	record = TestRecord(test_type=TestTypeEnum.soil, farm_id=5, date=dt.date(2025, 1, 3), parameters=SOIL)
	recs = engine.recommend(record.test_type, record.parameters)
	expected = engine.plan(record, recs, dt.date(2025, 1, 20))

	with ThreadPoolExecutor(max_workers=8) as pool:
		plans = list(pool.map(lambda _: engine.plan(record, recs, dt.date(2025, 1, 20)), range(32)))

	assert expected
	assert all(plan == expected for plan in plans)
