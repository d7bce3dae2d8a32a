"""FastAPI application factory."""

import logging
from datetime import date

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.responses import Response

from cut_tracker.api.models import (
    ActiveDateUpdate,
    DailyRecordPatch,
    GoalPayload,
)
from cut_tracker.app_logging import configure_logging
from cut_tracker.containers import AppContainer
from cut_tracker.domain.plan import DAILY_TARGETS, WEEKLY_ROUTINE, workout_plan_for
from cut_tracker.domain.records import (
    DailyRecord,
    Goal,
    goal_to_dict,
    record_to_dict,
)
from cut_tracker.domain.stats import NoData, Stat, WeeklySummary, WeightPoint

WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Cut Tracker")
    app.state.container = container

    def _container(request: Request) -> AppContainer:
        return request.app.state.container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/days")
    async def list_days(request: Request) -> dict[str, object]:
        """Return every stored record in date order."""
        store = _container(request).record_store
        return {"days": [record_to_dict(record) for record in store.days]}

    @app.get("/days/{day}")
    async def get_day(day: date, request: Request) -> dict[str, object]:
        """Return the record for a date, blank when nothing was logged."""
        return record_to_dict(_container(request).record_store.get(day))

    @app.patch("/days/{day}")
    async def patch_day(
        day: date, patch: DailyRecordPatch, request: Request
    ) -> dict[str, object]:
        """Merge a partial update into a day's record."""
        record = _container(request).record_store.upsert(day, patch.changes())
        return record_to_dict(record)

    @app.get("/active")
    async def get_active(request: Request) -> dict[str, object]:
        """Return the active date, its record and the planned workout."""
        return _format_active(_container(request).record_store.active_record())

    @app.put("/active")
    async def select_active(
        update: ActiveDateUpdate, request: Request
    ) -> dict[str, object]:
        """Select the date being edited."""
        record = _container(request).record_store.select_date(update.date)
        return _format_active(record)

    @app.patch("/active")
    async def patch_active(
        patch: DailyRecordPatch, request: Request
    ) -> dict[str, object]:
        """Merge a partial update into the active date's record."""
        record = _container(request).record_store.save_active(patch.changes())
        return _format_active(record)

    @app.get("/goal")
    async def get_goal(request: Request) -> dict[str, float]:
        """Return the current goal."""
        return goal_to_dict(_container(request).record_store.goal)

    @app.put("/goal")
    async def put_goal(payload: GoalPayload, request: Request) -> dict[str, float]:
        """Replace the goal."""
        goal = _container(request).record_store.update_goal(
            Goal(
                start_weight=payload.start_weight,
                target_weight=payload.target_weight,
                start_body_fat=payload.start_body_fat,
                target_body_fat=payload.target_body_fat,
                height=payload.height,
            )
        )
        return goal_to_dict(goal)

    @app.get("/weekly")
    async def weekly(
        request: Request, day: date | None = Query(default=None, alias="date")
    ) -> dict[str, object]:
        """Return the weekly report for a date, default the active date."""
        summary = _container(request).stats_service.weekly(day)
        return _format_weekly(summary)

    @app.get("/trend")
    async def trend(request: Request) -> dict[str, object]:
        """Return the weight trend and a chart range around it."""
        stats_service = _container(request).stats_service
        low, high = stats_service.trend_bounds()
        return {
            "points": [_format_point(point) for point in stats_service.trend()],
            "bounds": {"low": low, "high": high},
        }

    @app.get("/guide")
    async def guide() -> dict[str, object]:
        """Return the weekday routine and daily targets."""
        return {
            "routine": dict(zip(WEEKDAY_NAMES, WEEKLY_ROUTINE, strict=True)),
            "targets": [
                {
                    "label": target.label,
                    "low": target.low,
                    "high": target.high,
                    "unit": target.unit,
                }
                for target in DAILY_TARGETS
            ],
        }

    @app.get("/export")
    async def export(request: Request) -> Response:
        """Download goal and records as a JSON backup."""
        store = _container(request).record_store
        return Response(
            content=store.export_snapshot(),
            media_type="application/json",
            headers={
                "Content-Disposition": (
                    f'attachment; filename="{store.export_filename()}"'
                )
            },
        )

    @app.post("/import")
    async def import_snapshot(request: Request) -> dict[str, object]:
        """Replace goal and records from an uploaded JSON backup."""
        payload = await request.body()
        store = _container(request).record_store
        if not store.import_snapshot(payload):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Import failed"
            )
        return {"status": "ok", "days": len(store.days)}

    @app.post("/reset")
    async def reset(request: Request, confirm: bool = False) -> dict[str, object]:
        """Delete every record. Requires ``confirm=true``."""
        if not confirm:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Reset requires confirm=true",
            )
        store = _container(request).record_store
        store.reset_all()
        logger.info("Store reset through the API")
        return {"status": "ok", "days": len(store.days)}

    return app


def _format_active(record: DailyRecord) -> dict[str, object]:
    """Format the active record with the workout planned for its weekday."""
    return {
        "active_date": record.date,
        "record": record_to_dict(record),
        "planned_workout": workout_plan_for(date.fromisoformat(record.date)),
    }


def _format_weekly(summary: WeeklySummary) -> dict[str, object]:
    """Format a weekly summary, rendering missing statistics as null."""
    return {
        "week_start": summary.window.start_key,
        "week_end": summary.window.end_key,
        "record_count": summary.record_count,
        "averages": {name: _stat(value) for name, value in summary.averages.items()},
        "totals": {name: _stat(value) for name, value in summary.totals.items()},
        "workouts": summary.workouts,
    }


def _format_point(point: WeightPoint) -> dict[str, object]:
    return {"date": point.date, "weight": point.weight}


def _stat(value: Stat) -> float | None:
    if isinstance(value, NoData):
        return None
    return value
