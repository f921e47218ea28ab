"""
HTML page for one snapshot, plus the fixed stylesheet.
Only reads the snapshot it is given; never touches the store.
"""
from html import escape
from typing import Iterator

from schemas.charts import Snapshot

MAIN_CSS = "svg .background { fill: white; }\nsvg .canvas { fill: white; }\n"

_HEAD = (
    "<!DOCTYPE html><html><head>"
    "<meta charset=\"utf-8\">"
    "<title>team metrics</title>"
    "<link rel=\"stylesheet\" type=\"text/css\" href=\"/main.css\">"
    "</head>"
    "<body>"
)

_GLOSSARY = (
    "<p><ul>"
    "<li><b>cycle time</b> measures how long it takes an individual task to go "
    "through the process (lower is better)"
    "<li><b>throughput</b> measures the total amount of work delivered in a "
    "certain time period (higher is better)"
    "</ul></p>"
)

NOT_YET = "not yet"


def format_last_update(snapshot: Snapshot) -> str:
    if snapshot.last_update is None:
        return NOT_YET
    return snapshot.last_update.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def iter_page(snapshot: Snapshot) -> Iterator[str]:
    yield _HEAD
    yield _GLOSSARY
    yield f"<p>Data updated at {escape(format_last_update(snapshot))}</p>"
    for entry in snapshot.charts:
        yield f"<h2>{escape(entry.title)}</h2>"
        yield entry.svg
    yield "</body></html>"


def render_page(snapshot: Snapshot) -> str:
    return "".join(iter_page(snapshot))
