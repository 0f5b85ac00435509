import io

from matplotlib.figure import Figure


def stats_chart(points, series, title="Completion") -> bytes:
    """PNG line chart with one completion-percent line per profile.

    Builds a standalone Figure; pyplot's global figure state is not touched.
    """
    dates = [p["date"] for p in points]
    labels = [d[5:] for d in dates]
    xs = list(range(len(labels)))

    fig = Figure(figsize=(10, 4))
    ax = fig.subplots()
    for s in series:
        key = str(s["profileId"])
        ax.plot(xs, [p.get(key, 0) for p in points], label=s["name"], color=s["color"], linewidth=2)

    ax.set_ylim(0, 100)
    ax.set_ylabel("%")
    ax.set_title(title)
    ax.grid(True, alpha=0.2)
    if series:
        ax.legend()

    step = max(1, len(labels) // 10)
    ax.set_xticks(xs[::step])
    ax.set_xticklabels(labels[::step])

    buf = io.BytesIO()
    fig.savefig(buf, format="png", bbox_inches="tight")
    return buf.getvalue()
