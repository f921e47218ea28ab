import logging

from fastapi import Depends, FastAPI

from core import config
from core.deps import get_store
from core.sheets import init_sheets
from routers.dashboard import router as dashboard_router
from services.refresh import RefreshLoop
from services.rows import team_series_loader
from services.snapshot import SnapshotStore

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Team Metrics")
app.state.store = SnapshotStore()
app.state.refresh = None


@app.on_event("startup")
def startup() -> None:
    # InitializationFailure propagates: the server must not start without a source.
    source = init_sheets()
    loop = RefreshLoop(
        app.state.store,
        team_series_loader(source.fetch_rows),
        config.TEAMS,
        interval=config.REFRESH_INTERVAL_SECONDS,
    )
    loop.start()
    app.state.refresh = loop
    logger.info("Refreshing %s every %ss", ", ".join(config.TEAMS), config.REFRESH_INTERVAL_SECONDS)


@app.on_event("shutdown")
def shutdown() -> None:
    if app.state.refresh is not None:
        app.state.refresh.stop()
        app.state.refresh = None


app.include_router(dashboard_router)


@app.get("/healthz")
def healthz(store: SnapshotStore = Depends(get_store)):
    snapshot = store.current()
    return {
        "ok": True,
        "charts": len(snapshot.charts),
        "last_update": snapshot.last_update.isoformat() if snapshot.last_update else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT)
