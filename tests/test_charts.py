import unittest

from utils.charts import ChartRenderer


class TestChartRenderer(unittest.TestCase):
    def test_generate_sparkline_constant(self):
        text = ChartRenderer.generate_sparkline([1, 1, 1, 1], length=4)
        self.assertEqual(text.plain, "────")

    def test_generate_sparkline_rising_is_green(self):
        text = ChartRenderer.generate_sparkline([1, 2, 3], length=10)
        self.assertEqual(len(text.plain), 3)
        self.assertEqual(str(text.style), "bold green")

    def test_line_chart_dimensions_and_labels(self):
        points = [(0.0, 100.0), (1.0, 102.0), (2.0, 101.0), (3.0, 103.0), (4.0, 105.0)]
        text = ChartRenderer.generate_line_chart(points, (0.0, 5.0), (100.0, 105.0), width=40, height=8)
        lines = text.plain.split("\n")
        # 8 plot rows plus the x-axis line
        self.assertEqual(len(lines), 9)
        self.assertTrue(lines[0].startswith("105.00"))
        self.assertTrue(lines[7].startswith("100.00"))
        self.assertTrue(lines[8].strip().startswith("└"))
        self.assertTrue(all(len(line) <= 40 for line in lines))
        self.assertIn("•", text.plain)

    def test_line_chart_extremes_on_edge_rows(self):
        points = [(0.0, 10.0), (1.0, 20.0)]
        text = ChartRenderer.generate_line_chart(points, (0.0, 1.0), (10.0, 20.0), width=30, height=5)
        lines = text.plain.split("\n")
        self.assertIn("•", lines[0])
        self.assertIn("•", lines[4])

    def test_line_chart_x_labels(self):
        text = ChartRenderer.generate_line_chart(
            [(0.0, 1.0), (1.0, 2.0)], (0.0, 2.0), (0.0, 3.0), width=50, height=4,
            x_labels=("2024-01-01", "2024-01-02"),
        )
        last = text.plain.split("\n")[-1]
        self.assertIn("2024-01-01", last)
        self.assertIn("2024-01-02", last)

    def test_line_chart_empty_points(self):
        text = ChartRenderer.generate_line_chart([], (0.0, 1.0), (0.0, 1.0), width=20, height=3)
        self.assertNotIn("•", text.plain)

    def test_trend_arrow(self):
        up = ChartRenderer.get_trend_arrow(1.0)
        down = ChartRenderer.get_trend_arrow(-1.0)
        flat = ChartRenderer.get_trend_arrow(0.0)
        self.assertEqual(up.plain, "▲")
        self.assertEqual(down.plain, "▼")
        self.assertEqual(flat.plain, "▶")


if __name__ == "__main__":
    unittest.main()
