"""
REST API for the pot draw.
Thin wrappers around the draw service and the configured store.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import Depends, FastAPI, HTTPException, Query, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from potdraw.config import Settings, load_settings
from potdraw.models import MatchDay, Schedule
from potdraw.persistence.store import build_store
from potdraw.render import day_view, list_view, pot_listing
from potdraw.reveal import RevealConfig, RevealSession, async_reveal
from potdraw.services.draw_service import DrawService
from potdraw.services.validation import DrawValidationError, InvalidTeamCount, parse_team_input

logger = logging.getLogger(__name__)

_settings: Settings | None = None
_service: DrawService | None = None


# ---------- Dependencies ----------
def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def get_draw_service() -> DrawService:
    """One service per process, backed by the store POTDRAW_STORE names."""
    global _service
    if _service is None:
        _service = DrawService(build_store(get_settings()))
    return _service


# ---------- Lifespan ----------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    service = get_draw_service()
    logger.info("Schedule store: %s", service.store.name)
    yield


# ---------- FastAPI app ----------
app = FastAPI(
    title="Pot Draw API",
    description="Two-pot tournament draw: 4 same-pot days, 4 cross-pot days",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(load_settings().cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Request/Response models ----------


class DrawRequest(BaseModel):
    teams: list[str] | None = Field(None, description="Team names; blanks are dropped")
    text: str | None = Field(None, description="Alternative: one team per line")


class SaveScheduleRequest(BaseModel):
    """A schedule drawn by the client. Accepts both potA and pot_a spellings."""
    model_config = ConfigDict(populate_by_name=True)

    teams: list[str] = Field(default_factory=list)
    pot_a: list[str] = Field(default_factory=list, alias="potA")
    pot_b: list[str] = Field(default_factory=list, alias="potB")
    schedule: list[dict[str, Any]] = Field(..., min_length=1)


def _draw_payload(schedule: Schedule) -> dict[str, Any]:
    d = schedule.to_dict()
    d["seeds"] = {"A": pot_listing(schedule.pot_a), "B": pot_listing(schedule.pot_b)}
    return d


# ---------- Routes ----------


@app.get("/api")
def api_root() -> dict[str, str]:
    return {"message": "API is running", "status": "ok"}


@app.get("/api/health")
def health(service: DrawService = Depends(get_draw_service)) -> dict[str, str]:
    return {"status": "ok", "message": "Server is running", "store": service.store.name}


@app.post("/api/draw")
def draw(req: DrawRequest, service: DrawService = Depends(get_draw_service)) -> dict[str, Any]:
    """
    Draw pots and the 8-day schedule, then save it.
    A failed save does not fail the draw; see "saved" in the response.
    """
    if req.teams is not None:
        names = req.teams
    elif req.text is not None:
        names = parse_team_input(req.text)
    else:
        raise HTTPException(status_code=400, detail="Provide teams or text")
    try:
        schedule, result = service.draw(names)
    except InvalidTeamCount as e:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid number of teams: got {e.count} (need {e.expected})",
        ) from e
    except DrawValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    payload = _draw_payload(schedule)
    payload["saved"] = result.to_dict()
    return payload


@app.post("/api/schedules", status_code=201)
def create_schedule(
    req: SaveScheduleRequest, service: DrawService = Depends(get_draw_service)
) -> dict[str, Any]:
    """Persist a schedule the client already drew."""
    try:
        days = tuple(MatchDay.from_dict(d) for d in req.schedule)
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid schedule: {e}") from e
    schedule = Schedule(days=days, pot_a=tuple(req.pot_a), pot_b=tuple(req.pot_b), teams=tuple(req.teams))
    result = service.save(schedule)
    if not result.ok:
        raise HTTPException(status_code=500, detail=result.error or "Could not save schedule")
    logger.info("Stored client schedule %s via %s", result.record_id, result.backend)
    return result.to_dict()


@app.get("/api/schedules")
def list_schedules(
    limit: int = Query(20, ge=1, le=100),
    service: DrawService = Depends(get_draw_service),
) -> list[dict[str, Any]]:
    """Saved draws, newest first."""
    return [s.to_dict() for s in service.history(limit)]


@app.get("/api/schedules/{schedule_id}")
def get_schedule(schedule_id: str, service: DrawService = Depends(get_draw_service)) -> dict[str, Any]:
    saved = service.get(schedule_id)
    if saved is None:
        raise HTTPException(status_code=404, detail="Schedule not found")
    return saved.to_dict()


@app.get("/api/schedules/{schedule_id}/views")
def get_schedule_views(schedule_id: str, service: DrawService = Depends(get_draw_service)) -> dict[str, Any]:
    """List view and day view of a saved draw."""
    saved = service.get(schedule_id)
    if saved is None:
        raise HTTPException(status_code=404, detail="Schedule not found")
    schedule = saved.schedule
    return {
        "id": saved.id,
        "seeds": {"A": pot_listing(schedule.pot_a), "B": pot_listing(schedule.pot_b)},
        "list": list_view(schedule),
        "days": day_view(schedule),
    }


@app.websocket("/ws/reveal/{schedule_id}")
async def websocket_reveal(
    websocket: WebSocket,
    schedule_id: str,
    service: DrawService = Depends(get_draw_service),
    settings: Settings = Depends(get_settings),
):
    """
    Reveal a saved draw match by match. Server pushes { type: "match", day, phase, side1, side2, ... }
    then { type: "done" }. Client may send "skip" (show the rest now) or "cancel".
    """
    await websocket.accept()
    saved = service.get(schedule_id)
    if saved is None:
        await websocket.send_json({"type": "error", "detail": "Schedule not found"})
        await websocket.close(code=4404)
        return
    session = RevealSession()

    async def listen() -> None:
        try:
            while True:
                msg = (await websocket.receive_text()).strip().lower()
                if msg == "skip":
                    session.skip()
                elif msg == "cancel":
                    session.cancel()
        except WebSocketDisconnect:
            session.cancel()

    listener = asyncio.create_task(listen())
    config = RevealConfig(seconds_per_match=settings.reveal_seconds)
    try:
        async for event in async_reveal(saved.schedule, config, session):
            await websocket.send_json(event.to_dict())
        if not session.cancelled:
            await websocket.send_json({"type": "done", "revealed": session.revealed, "skipped": session.skipped})
            await websocket.close()
    except WebSocketDisconnect:
        logger.info("Reveal of %s closed by client after %d matches", schedule_id, session.revealed)
    finally:
        listener.cancel()


# ---------- Run with: uvicorn potdraw.api:app --reload ----------
