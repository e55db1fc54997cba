"""Exercise trails (running, skiing and walking tracks)."""

from __future__ import annotations

from typing import Any, Dict

from src.application.dtos.ngsi_dto import ExerciseTrailRecordDTO
from src.application.services.dataset_service import CategorisedDatasetService
from src.domain.entities.errors import NoSuchExerciseTrailError
from src.domain.entities.exercise_trail import ExerciseTrail


class ExerciseTrailService(CategorisedDatasetService[ExerciseTrail]):
    name = "exercisetrails"
    entity_type = "ExerciseTrail"
    not_found_error = NoSuchExerciseTrailError

    def transform(self, record: Dict[str, Any]) -> ExerciseTrail:
        return ExerciseTrailRecordDTO.model_validate(record).to_domain()
