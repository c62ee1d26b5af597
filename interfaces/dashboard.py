from typing import Optional

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from interfaces.menu_layout import build_sidebar, build_status_header, compact_for_width
from modules.view_models import DashboardView
from utils.charts import ChartRenderer


KEY_ACTIONS = {
    "Enter": "Change Symbol",
    "Q": "Quit",
}

# Rows used by everything except the chart body: header, summary, info strip, borders.
_FIXED_ROWS = 19


class DashboardRenderer:
    """
    Stateless render surface.
    Turns a DashboardView into one rich renderable per frame.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, view: DashboardView, width: Optional[int] = None, height: Optional[int] = None) -> RenderableType:
        width = width or self.console.width
        height = height or self.console.height
        compact = compact_for_width(width)

        layout = Table.grid(expand=True)
        layout.add_column(ratio=1)
        layout.add_row(self._header(view))

        if not view.has_data:
            layout.add_row(
                Panel(
                    Text(view.notice, style="yellow"),
                    title="Warning",
                    box=box.ROUNDED,
                    border_style="yellow",
                )
            )
        else:
            top = Table.grid(expand=True)
            top.add_column(ratio=1)
            top.add_column(width=24 if compact else 28)
            top.add_row(self._summary(view, compact), build_sidebar([("Keys", KEY_ACTIONS)], compact=compact))
            layout.add_row(top)
            layout.add_row(self._chart(view, width, height))

        layout.add_row(self._info(view))
        return layout

    def _header(self, view: DashboardView) -> Panel:
        return Panel(Text(view.title.strip(), style="bold"), box=box.ROUNDED, border_style="cyan")

    def _summary(self, view: DashboardView, compact: bool) -> Panel:
        items = []
        for key, value in view.summary_rows:
            if key == "Change" and view.change is not None:
                items.append((key, Text.assemble(ChartRenderer.get_trend_arrow(view.change), " ", value)))
            else:
                items.append((key, value))
        closes = [price for _, price in view.points]
        items.append(("Trend", ChartRenderer.generate_sparkline(closes, length=30)))
        return build_status_header("Price Info", items, compact=compact)

    def _chart(self, view: DashboardView, width: int, height: int) -> Panel:
        chart = ChartRenderer.generate_line_chart(
            view.points,
            view.x_bounds,
            view.y_bounds,
            width=max(20, width - 4),
            height=max(5, height - _FIXED_ROWS),
            x_labels=view.x_labels,
        )
        return Panel(chart, title=view.chart_title, box=box.ROUNDED, border_style="white")

    def _info(self, view: DashboardView) -> Panel:
        text = Text(view.info_text, style="white")
        if view.error_text:
            text.highlight_words([view.error_text], style="bold red")
        return Panel(Group(text), title="Info", box=box.SQUARE, border_style="dim")
