from concurrent.futures import ThreadPoolExecutor

from utils.charts import stats_chart


def _chart_input(n):
    series = [
        {"profileId": i, "name": f"Profile {i}", "color": color}
        for i, color in enumerate(["#ef4444", "#22c55e", "#3b82f6"][: 1 + n % 3], start=1)
    ]
    points = [
        {"date": f"2024-03-{day:02d}", **{str(s["profileId"]): (day * n * s["profileId"]) % 101 for s in series}}
        for day in range(1, 15)
    ]
    return points, series


def test_chart_is_png():
    points, series = _chart_input(1)
    assert stats_chart(points, series).startswith(b"\x89PNG")


def test_chart_without_profiles():
    points = [{"date": "2024-03-01"}, {"date": "2024-03-02"}]
    assert stats_chart(points, []).startswith(b"\x89PNG")


def test_charts_rendered_in_threads_match_serial():
    inputs = [_chart_input(n) for n in range(12)]
    expected = [stats_chart(points, series, title=f"Chart {n}") for n, (points, series) in enumerate(inputs)]

    def render(n):
        points, series = inputs[n]
        return stats_chart(points, series, title=f"Chart {n}")

    for _ in range(3):
        with ThreadPoolExecutor(max_workers=6) as pool:
            assert list(pool.map(render, range(len(inputs)))) == expected
