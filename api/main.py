"""
Pyramid League API
FastAPI wrapper around the league engine
"""

import logging
import threading
import time
import uuid
from datetime import date
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from pyramid import (
    ConfigurationError,
    InvalidResultError,
    LeagueError,
    SeasonController,
    SeasonStateError,
    TeamNotFoundError,
    build_world,
)

_log = logging.getLogger("api")

app = FastAPI(title="Pyramid League API", version="1.0.0")

sessions: Dict[str, dict] = {}


class CreateSessionRequest(BaseModel):
    countries: Optional[List[str]] = None
    season_start: Optional[date] = None


class StartSeasonRequest(BaseModel):
    year: int


class RecordResultRequest(BaseModel):
    country: str
    tier: int
    home_team_id: str
    away_team_id: str
    home_goals: int
    away_goals: int


def _get_session(session_id: str) -> dict:
    if session_id not in sessions:
        raise HTTPException(status_code=404, detail="Session not found")
    return sessions[session_id]


def _engine_error(exc: LeagueError) -> HTTPException:
    if isinstance(exc, TeamNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, (SeasonStateError, ConfigurationError, InvalidResultError)):
        return HTTPException(status_code=400, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def _serialize_teams(controller: SeasonController) -> list:
    return [team.to_dict() for team in controller.teams]


@app.get("/health")
def health_check():
    return {"status": "ok", "sessions": len(sessions)}


@app.post("/sessions")
def create_session(req: Optional[CreateSessionRequest] = None):
    req = req or CreateSessionRequest()
    try:
        registry, teams = build_world(req.countries)
    except ConfigurationError as exc:
        raise _engine_error(exc)

    session_id = str(uuid.uuid4())
    now = time.time()
    sessions[session_id] = {
        "controller": SeasonController(registry, teams, season_start=req.season_start),
        "lock": threading.Lock(),
        "created_at": now,
    }
    _log.info(f"Created session {session_id} for {', '.join(registry.countries())}")
    return {"session_id": session_id, "created_at": now, "countries": registry.countries()}


@app.delete("/sessions/{session_id}")
def delete_session(session_id: str):
    if session_id not in sessions:
        raise HTTPException(status_code=404, detail="Session not found")
    del sessions[session_id]
    return {"deleted": True}


@app.get("/sessions/{session_id}")
def get_session(session_id: str):
    session = _get_session(session_id)
    controller: SeasonController = session["controller"]
    with session["lock"]:
        return {
            "session_id": session_id,
            "created_at": session["created_at"],
            "phase": controller.phase,
            "seasons_played": len(controller.history),
            "teams": _serialize_teams(controller),
        }


@app.post("/sessions/{session_id}/season")
def start_season(session_id: str, req: StartSeasonRequest):
    session = _get_session(session_id)
    controller: SeasonController = session["controller"]
    with session["lock"]:
        try:
            controller.start_season(req.year)
        except LeagueError as exc:
            raise _engine_error(exc)
        return controller.get_current_season_status()


@app.post("/sessions/{session_id}/season/results")
def record_result(session_id: str, req: RecordResultRequest):
    session = _get_session(session_id)
    controller: SeasonController = session["controller"]
    with session["lock"]:
        try:
            result = controller.record_result(
                req.country, req.tier, req.home_team_id, req.away_team_id,
                req.home_goals, req.away_goals,
            )
        except LeagueError as exc:
            raise _engine_error(exc)
        return {"result": result.to_dict()}


@app.post("/sessions/{session_id}/season/advance")
def advance_matchday(session_id: str):
    session = _get_session(session_id)
    controller: SeasonController = session["controller"]
    with session["lock"]:
        try:
            return controller.advance_matchday()
        except LeagueError as exc:
            raise _engine_error(exc)


@app.post("/sessions/{session_id}/season/end")
def end_season(session_id: str):
    session = _get_session(session_id)
    controller: SeasonController = session["controller"]
    with session["lock"]:
        try:
            results = controller.end_season()
        except LeagueError as exc:
            raise _engine_error(exc)
        return {"promotion_relegation": {c: r.to_dict() for c, r in results.items()}}


@app.get("/sessions/{session_id}/season/status")
def season_status(session_id: str):
    session = _get_session(session_id)
    with session["lock"]:
        status = session["controller"].get_current_season_status()
    if status is None:
        raise HTTPException(status_code=400, detail="No season started in this session")
    return status


@app.get("/sessions/{session_id}/leagues/{country}/{tier}/table")
def league_table(session_id: str, country: str, tier: int):
    session = _get_session(session_id)
    controller: SeasonController = session["controller"]
    with session["lock"]:
        final = controller.phase == "complete"
        if final:
            table = controller.get_final_table(country, tier)
        else:
            table = controller.get_league_table(country, tier)
    if table is None:
        raise HTTPException(status_code=404, detail=f"No table for {country} tier {tier}")
    return {"country": country, "tier": tier, "final": final, "table": [e.to_dict() for e in table]}


@app.get("/sessions/{session_id}/leagues/{country}/{tier}/status")
def league_status(session_id: str, country: str, tier: int):
    session = _get_session(session_id)
    controller: SeasonController = session["controller"]
    with session["lock"]:
        if controller.phase == "complete":
            status = controller.get_final_status(country, tier)
        else:
            status = controller.get_league_status(country, tier)
    if status is None:
        raise HTTPException(status_code=404, detail=f"No table for {country} tier {tier}")
    return status.to_dict()


@app.get("/sessions/{session_id}/leagues/{country}/{tier}/fixtures")
def next_fixtures(session_id: str, country: str, tier: int):
    session = _get_session(session_id)
    with session["lock"]:
        try:
            fixtures = session["controller"].next_fixtures(country, tier)
        except LeagueError as exc:
            raise _engine_error(exc)
    return {"country": country, "tier": tier, "fixtures": [f.to_dict() for f in fixtures]}


@app.get("/sessions/{session_id}/leagues/{country}/{tier}/calendar")
def league_calendar(session_id: str, country: str, tier: int):
    session = _get_session(session_id)
    with session["lock"]:
        try:
            calendar = session["controller"].get_calendar(country, tier)
        except LeagueError as exc:
            raise _engine_error(exc)
    return {
        "country": country,
        "tier": tier,
        "calendar": [
            {
                "matchday": day["matchday"],
                "date": day["date"].isoformat(),
                "fixtures": [f.to_dict() for f in day["fixtures"]],
            }
            for day in calendar
        ],
    }


@app.get("/sessions/{session_id}/promotion-relegation")
def promotion_relegation(session_id: str):
    session = _get_session(session_id)
    with session["lock"]:
        results = session["controller"].last_promotion_results()
    return {"promotion_relegation": {c: r.to_dict() for c, r in results.items()}}
