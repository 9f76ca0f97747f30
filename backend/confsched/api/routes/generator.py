import logging

from fastapi import APIRouter

from confsched.core.config import get_settings
from confsched.schemas.generator import (
    GenerateScheduleRequest,
    GenerateScheduleResponse,
    PenaltyBreakdown,
    ScheduledSession,
)
from confsched.services.catalogue import RoomCatalogue, SessionCatalogue
from confsched.services.genetic_scheduler import GeneticScheduler

router = APIRouter()
logger = logging.getLogger(__name__)


def _run_generation(payload: GenerateScheduleRequest) -> GeneticScheduler:
    run_settings = payload.settings
    sessions = SessionCatalogue(
        payload.sessions,
        precedence=[(pair.before, pair.after) for pair in payload.precedence],
    )
    rooms = RoomCatalogue(payload.rooms)
    scheduler = GeneticScheduler(
        sessions,
        rooms,
        payload.timeslot_count,
        settings=get_settings(),
        seed=run_settings.random_seed,
        worker_count=run_settings.worker_count,
        objective_weights=run_settings.objective_weights,
    )
    scheduler.run(
        run_settings.population_size,
        run_settings.elite_count,
        run_settings.mutation_rate,
        run_settings.generations,
    )
    return scheduler


@router.post("/schedules/generate", response_model=GenerateScheduleResponse)
def generate_schedule(payload: GenerateScheduleRequest) -> GenerateScheduleResponse:
    logger.info(
        "Schedule generation requested | sessions=%s rooms=%s timeslots=%s",
        len(payload.sessions),
        len(payload.rooms),
        payload.timeslot_count,
    )
    scheduler = _run_generation(payload)
    best = scheduler.get_best_schedule()
    nmini = len(scheduler.sessions)

    placed: list[ScheduledSession] = []
    for slot, row in enumerate(best):
        for room, cell in enumerate(row):
            session_id = int(cell)
            if session_id >= nmini:
                continue
            session = scheduler.sessions[session_id]
            placed.append(
                ScheduledSession(
                    timeslot=slot,
                    room=scheduler.rooms.name(room),
                    session_id=session_id,
                    title=session.full_title,
                    theme=session.theme,
                    priority=session.priority,
                )
            )

    result = scheduler.best_result
    return GenerateScheduleResponse(
        status=scheduler.status.value,
        score=scheduler.best_rating,
        generations_run=scheduler.generations_run,
        penalties=PenaltyBreakdown(
            order=result.order_penalty,
            oversubscribed=result.oversubscribed_penalty,
            theme=result.theme_penalty,
            priority=result.priority_penalty,
        ),
        sessions=placed,
        runtime_ms=scheduler.runtime_ms,
    )
