from fastapi import Request

from services.snapshot import SnapshotStore


def get_store(request: Request) -> SnapshotStore:
    return request.app.state.store
