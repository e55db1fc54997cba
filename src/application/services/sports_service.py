"""Sports fields and sports venues."""

from __future__ import annotations

from typing import Any, Dict

from src.application.dtos.ngsi_dto import SportsFieldRecordDTO, SportsVenueRecordDTO
from src.application.services.dataset_service import CategorisedDatasetService
from src.domain.entities.errors import NoSuchSportsFieldError, NoSuchSportsVenueError
from src.domain.entities.sports import SportsField, SportsVenue


class SportsFieldService(CategorisedDatasetService[SportsField]):
    name = "sportsfields"
    entity_type = "SportsField"
    not_found_error = NoSuchSportsFieldError

    def transform(self, record: Dict[str, Any]) -> SportsField:
        return SportsFieldRecordDTO.model_validate(record).to_domain()


class SportsVenueService(CategorisedDatasetService[SportsVenue]):
    name = "sportsvenues"
    entity_type = "SportsVenue"
    not_found_error = NoSuchSportsVenueError

    def transform(self, record: Dict[str, Any]) -> SportsVenue:
        return SportsVenueRecordDTO.model_validate(record).to_domain()
