from typing import List, Optional, Sequence, Tuple

from rich.text import Text

class ChartRenderer:
    """
    Utility for generating text-based visualizations (Sparklines, Line charts).
    """

    @staticmethod
    def generate_sparkline(data: list, length: int = 20, color_trend: bool = True) -> Text:
        """
        Converts a list of numerical values into a sparkline Text.
        """
        if not data or len(data) < 2:
            return Text("─" * length, style="dim")

        display_data = data[-length:] if len(data) > length else data

        bars = " ▂▃▄▅▆▇█"
        min_val = min(display_data)
        max_val = max(display_data)
        spread = max_val - min_val

        sparkline_str = ""
        if spread == 0:
            sparkline_str = "─" * len(display_data)
        else:
            for val in display_data:
                norm = (val - min_val) / spread
                idx = int(norm * (len(bars) - 1))
                sparkline_str += bars[idx]

        style = "white"
        if color_trend:
            style = "bold green" if display_data[-1] >= display_data[0] else "bold red"

        return Text(sparkline_str, style=style)

    @staticmethod
    def generate_line_chart(
        points: Sequence[Tuple[float, float]],
        x_bounds: Tuple[float, float],
        y_bounds: Tuple[float, float],
        width: int = 60,
        height: int = 12,
        style: str = "yellow",
        x_labels: Optional[Tuple[str, str]] = None,
    ) -> Text:
        """
        Plots (x, y) points as a connected dotted line on a character grid.

        The y-axis is labelled at the top, middle and bottom rows. Points
        outside the bounds are clamped to the edge of the plot.
        """
        height = max(2, int(height))
        y_min, y_max = float(y_bounds[0]), float(y_bounds[1])
        x_min, x_max = float(x_bounds[0]), float(x_bounds[1])
        y_span = (y_max - y_min) or 1.0
        x_span = (x_max - x_min) or 1.0

        labels = {
            0: f"{y_max:.2f}",
            (height - 1) // 2: f"{y_max - y_span * ((height - 1) // 2) / (height - 1):.2f}",
            height - 1: f"{y_min:.2f}",
        }
        label_width = max(len(v) for v in labels.values())
        plot_width = max(2, int(width) - label_width - 2)

        grid: List[List[str]] = [[" "] * plot_width for _ in range(height)]

        def _cell(x: float, y: float) -> Tuple[int, int]:
            col = round((x - x_min) / x_span * (plot_width - 1))
            row = round((y_max - y) / y_span * (height - 1))
            return min(max(col, 0), plot_width - 1), min(max(row, 0), height - 1)

        cells = [_cell(x, y) for x, y in points]
        for idx, (col, row) in enumerate(cells):
            grid[row][col] = "•"
            if idx == 0:
                continue
            prev_col, prev_row = cells[idx - 1]
            steps = max(abs(col - prev_col), abs(row - prev_row))
            for step in range(1, steps):
                c = prev_col + round((col - prev_col) * step / steps)
                r = prev_row + round((row - prev_row) * step / steps)
                grid[r][c] = "•"

        chart = Text()
        for row_idx, row in enumerate(grid):
            label = labels.get(row_idx, "")
            tick = "┤" if label else "│"
            chart.append(f"{label:>{label_width}} {tick}", style="dim")
            chart.append("".join(row), style=style)
            chart.append("\n")
        chart.append(" " * label_width + " └" + "─" * plot_width, style="dim")

        if x_labels and any(x_labels):
            left, right = x_labels
            gap = max(1, plot_width - len(left) - len(right))
            chart.append("\n")
            chart.append(" " * (label_width + 2) + left + " " * gap + right, style="dim")
        return chart

    @staticmethod
    def get_trend_arrow(change: float) -> Text:
        """Returns a colored trend arrow."""
        if change > 0:
            return Text("▲", style="bold green")
        if change < 0:
            return Text("▼", style="bold red")
        return Text("▶", style="dim white")
