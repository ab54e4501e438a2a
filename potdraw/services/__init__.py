"""
Service layer: validation, fixture generation, draw composition.
No persistence writes in the generators; DrawService hands results to a store.
"""
from .draw_service import DrawService, compose_schedule, split_pots
from .scheduling import (
    PotSizeError,
    generate_external_fixtures,
    generate_internal_fixtures,
)
from .validation import (
    DrawValidationError,
    DuplicateTeamError,
    InvalidTeamCount,
    parse_team_input,
    validate_teams,
)

__all__ = [
    "DrawService",
    "compose_schedule",
    "split_pots",
    "PotSizeError",
    "generate_internal_fixtures",
    "generate_external_fixtures",
    "DrawValidationError",
    "DuplicateTeamError",
    "InvalidTeamCount",
    "parse_team_input",
    "validate_teams",
]
