from dataclasses import asdict
from datetime import date
from functools import lru_cache
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from fittrack.clock import iso_instant
from fittrack.config import configure_logging, load_config
from fittrack.cycle_mode import CycleWindow
from fittrack.errors import InvalidInput
from fittrack.fasting import FastingSession
from fittrack.program_day import ProgramPosition
from fittrack.rotation import DailySelection
from fittrack.tracker import FitnessTracker, ProgramState

CONFIG = load_config()
configure_logging(CONFIG)

app = FastAPI(title="fittrack")


@lru_cache
def get_tracker() -> FitnessTracker:
    return FitnessTracker.from_config(CONFIG)


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def parse_day_param(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as err:
        raise HTTPException(status_code=400, detail="Invalid date format, use YYYY-MM-DD.") from err


def position_json(position: ProgramPosition) -> dict[str, Any]:
    return {"day": position.day, "week": position.week, "manual": position.manual}


def state_json(state: ProgramState) -> dict[str, Any]:
    return {
        "day": state.day,
        "week": state.week,
        "manual": state.manual,
        "start_date": state.start_date.isoformat(),
        "today": state.today.isoformat(),
        "day_type": state.day_type,
        "cycle_mode": state.cycle_mode,
        "available_day_types": list(state.available_day_types),
    }


def window_json(window: CycleWindow, active_today: bool) -> dict[str, Any]:
    return {**window.to_record(), "active_today": active_today}


def selection_json(selection: DailySelection) -> dict[str, Any]:
    return asdict(selection)


def session_json(session: FastingSession) -> dict[str, Any]:
    return session.to_record()


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


@app.get("/state")
def get_state(tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    return state_json(tracker.state())


@app.put("/day")
def put_manual_day(payload: dict[str, Any] = Body(...), tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    return position_json(tracker.set_manual_day(payload.get("day")))


@app.delete("/day")
def delete_manual_day(tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    return position_json(tracker.clear_manual_override())


@app.put("/day-type")
def put_day_type(payload: dict[str, Any] = Body(...), tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    tracker.select_day_type(str(payload.get("day_type", "")))
    return state_json(tracker.state())


@app.get("/cycle-mode")
def get_cycle_mode(tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    return window_json(tracker.cycle_window(), tracker.is_cycle_mode_active())


@app.post("/cycle-mode/toggle")
def toggle_cycle_mode(tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    window = tracker.toggle_cycle_mode()
    return window_json(window, tracker.is_cycle_mode_active())


@app.get("/workout/today")
def get_todays_workout(tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    state = tracker.state()
    return {
        **selection_json(tracker.todays_workout(state)),
        "week": state.week,
        "visited_links": tracker.visited_links(),
    }


@app.post("/workout/complete")
def complete_workout(tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, bool]:
    created = tracker.mark_workout_complete()
    return {"ok": True, "created": created}


@app.get("/checklist")
def get_checklist(tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    return tracker.checklist()


@app.put("/checklist")
def put_checklist(payload: dict[str, Any] = Body(...), tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    return tracker.save_checklist(payload)


@app.get("/links")
def get_visited_links(tracker: FitnessTracker = Depends(get_tracker)) -> list[str]:
    return tracker.visited_links()


@app.post("/links/{link_key}/visit")
def visit_link(link_key: str, tracker: FitnessTracker = Depends(get_tracker)) -> list[str]:
    if not link_key.strip():
        raise HTTPException(status_code=400, detail="link key is required.")
    return tracker.mark_link_visited(link_key.strip())


@app.get("/weights")
def get_weights(tracker: FitnessTracker = Depends(get_tracker)) -> list[dict[str, Any]]:
    return tracker.weight_history()


@app.post("/weights")
def create_weight(payload: dict[str, Any] = Body(...), tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    entry, previous = tracker.add_weight(payload.get("weight_kg"))
    return {
        "date": entry.date.isoformat(),
        "weight_kg": entry.weight_kg,
        "recorded_at": iso_instant(entry.recorded_at),
        "replaced_weight_kg": previous.weight_kg if previous else None,
    }


@app.delete("/weights/{day}")
def delete_weight(day: str, tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, bool]:
    if not tracker.delete_weight(parse_day_param(day)):
        raise HTTPException(status_code=404, detail="Weight entry not found.")
    return {"ok": True}


@app.get("/weights/weekly")
def get_weekly_weights(tracker: FitnessTracker = Depends(get_tracker)) -> list[dict[str, Any]]:
    return tracker.weekly_weights()


@app.get("/fasting")
def get_fasting(tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    return {**tracker.fasting_overview(), "active": tracker.active_fast()}


@app.get("/fasting/active")
def get_active_fast(tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    active = tracker.active_fast()
    return {"active": active is not None, "session": active}


@app.post("/fasting/start")
def start_fast(tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    tracker.start_fasting()
    return {"active": True, "session": tracker.active_fast()}


@app.post("/fasting/end")
def end_fast(tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    session = tracker.end_fasting()
    if session is None:
        return {"ok": False, "detail": "No active fasting session found."}
    return {"ok": True, "session": session_json(session)}


@app.post("/fasting/manual")
def create_manual_fast(payload: dict[str, Any] = Body(...), tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    session = tracker.add_manual_fasting(payload.get("start_time"), payload.get("end_time"))
    return session_json(session)


@app.delete("/fasting/{day}/{index}")
def delete_fast(day: str, index: int, tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, bool]:
    if not tracker.delete_fasting(parse_day_param(day), index):
        raise HTTPException(status_code=404, detail="Fasting entry not found.")
    return {"ok": True}


@app.get("/fasting/weekly")
def get_weekly_fasting(tracker: FitnessTracker = Depends(get_tracker)) -> list[dict[str, Any]]:
    return tracker.weekly_fasting()


@app.get("/progress")
def get_progress(tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    return asdict(tracker.compute_progress())


@app.get("/settings")
def get_settings(tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    return tracker.settings()


@app.put("/settings")
def put_settings(payload: dict[str, Any] = Body(...), tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    return tracker.update_settings(payload)


@app.post("/reset")
def reset(payload: dict[str, Any] = Body(...), tracker: FitnessTracker = Depends(get_tracker)) -> dict[str, Any]:
    if payload.get("confirm") is not True:
        raise HTTPException(status_code=400, detail="Reset requires {\"confirm\": true}.")
    return state_json(tracker.reset())
