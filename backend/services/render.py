"""
SVG rendering of a ChartModel through matplotlib's object API (no pyplot, no global figure state),
so it is safe to call from the refresh thread.
"""
import io
import re

from matplotlib import rc_context
from matplotlib.figure import Figure
from matplotlib.ticker import FuncFormatter

from schemas.charts import ChartModel
from services.chart import format_date_tick

FIG_SIZE = (10.24, 4.0)
ANNOTATION_COLOR = "#555555"

_CLASS_GROUP = re.compile(r'<g id="(?P<cls>[\w-]+)--class">')


def _inline(svg: str) -> str:
    """Drop the XML prolog/doctype and turn marker ids into class attributes."""
    start = svg.find("<svg")
    if start > 0:
        svg = svg[start:]
    return _CLASS_GROUP.sub(r'<g class="\g<cls>">', svg)


def render_svg(chart: ChartModel) -> str:
    fig = Figure(figsize=FIG_SIZE)
    # gids are rewritten to classes so several charts on one page stay stylable by main.css
    fig.patch.set_gid(f"{chart.background_class}--class")
    ax = fig.add_subplot(111)
    ax.patch.set_gid(f"{chart.canvas_class}--class")

    cycle_style, throughput_style = chart.series
    (cycle_line,) = ax.plot(
        chart.x_values,
        chart.cycle_series,
        color=cycle_style.color,
        linewidth=cycle_style.stroke_width,
    )
    (throughput_line,) = ax.plot(
        chart.x_values,
        chart.throughput_series,
        color=throughput_style.color,
        linewidth=throughput_style.stroke_width,
    )

    if chart.annotations:
        ax.scatter(
            [a.x for a in chart.annotations],
            [a.y for a in chart.annotations],
            s=14,
            color=ANNOTATION_COLOR,
            zorder=3,
        )
        for a in chart.annotations:
            ax.annotate(
                a.label,
                xy=(a.x, a.y),
                xytext=(4, 6),
                textcoords="offset points",
                fontsize=8,
                bbox={"boxstyle": "round", "fc": "w", "ec": ANNOTATION_COLOR, "alpha": 0.9},
            )

    ax.set_xlabel(chart.x_axis.name)
    if chart.x_axis.time_based:
        ax.xaxis.set_major_formatter(FuncFormatter(lambda v, _pos: format_date_tick(v)))
    ax.legend([cycle_line, throughput_line], list(chart.legend), loc="upper left", frameon=False)
    fig.tight_layout()

    buf = io.BytesIO()
    with rc_context({"svg.fonttype": "none", "svg.hashsalt": chart.title}):
        fig.savefig(buf, format="svg", metadata={"Date": None})
    return _inline(buf.getvalue().decode("utf-8"))
