from fastapi import APIRouter, Depends
from fastapi.responses import Response, StreamingResponse

from core.deps import get_store
from services.page import MAIN_CSS, iter_page
from services.snapshot import SnapshotStore

router = APIRouter()


@router.get("/")
def index(store: SnapshotStore = Depends(get_store)):
    snapshot = store.current()
    return StreamingResponse(iter_page(snapshot), media_type="text/html")


@router.get("/main.css")
def main_css():
    return Response(content=MAIN_CSS, media_type="text/css")
