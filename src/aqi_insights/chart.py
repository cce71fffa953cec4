# Project: aqi-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
chart.py — ASCII charts and tables for terminal reports, plus the stat-card
and HTML snippets shared with the Streamlit dashboard.

Uses only the Python standard library (html, os).
All rendering functions return strings ready to print.
"""

import html
import os

from aqi_insights.records import MeasurementRecord

FALLBACK_TERMINAL_WIDTH: int = 80
BAR_LABEL_RESERVE: int = 30  # characters reserved for label + value outside the bar

MONTH_ABBR = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


def format_cards(summary: dict, trend: dict) -> list[tuple[str, str]]:
    """Format the four headline stats as (title, value) pairs.

    Args:
        summary: Dict from analysis.summarize.
        trend: Dict from analysis.estimate_trend.

    Returns:
        List of (title, display value) in dashboard order.
    """
    return [
        ("Average AQI",             f"{summary['mean_aqi']:.1f}"),
        ("Max PM2.5",               f"{summary['max_pm25']:g}"),
        ("Trend Slope",             f"{trend['slope']:.2f}"),
        ("Predicted Next Year AQI", f"{trend['predicted_next']:.1f}"),
    ]


def render_daily_table(records: list[MeasurementRecord]) -> str:
    """Render the readings as a fixed-width date / AQI / PM2.5 table.

    Args:
        records: Records in the order they should be listed.

    Returns:
        Multi-line string containing the formatted table.
    """
    sep = "─" * 32
    lines = [f"Daily AQI & PM2.5 — {len(records)} readings", sep,
             f"{'Date':<12}  {'AQI':>7}  {'PM2.5':>7}", sep]
    for r in records:
        lines.append(f"{r.date.isoformat():<12}  {r.aqi:>7.1f}  {r.pm25:>7.1f}")
    lines.append(sep)
    return "\n".join(lines)


# ─────────────────────────────────────────────────────────────
# Bar chart helpers
# ─────────────────────────────────────────────────────────────

def _bar(value: float, max_value: float, bar_width: int) -> str:
    """Render a single filled/empty bar scaled to bar_width.

    Args:
        value: The data value to represent.
        max_value: The maximum value (maps to full bar width).
        bar_width: Total character width of the bar.

    Returns:
        String of '█' and '░' characters of length bar_width.
    """
    if max_value == 0:
        filled = 0
    else:
        filled = round((value / max_value) * bar_width)
    filled = max(0, min(filled, bar_width))
    return "█" * filled + "░" * (bar_width - filled)


def render_bar_chart(
    labels: list[str],
    values: list[float],
    title: str,
    unit: str = "",
    bar_width: int | None = None,
) -> str:
    """Render a labelled horizontal bar chart.

    Args:
        labels: List of row label strings.
        values: List of numeric values corresponding to each label.
        title: Chart title printed above the bars.
        unit: Optional unit suffix appended to each value.
        bar_width: Width of the bar in characters. Auto-detected from terminal if None.

    Returns:
        Multi-line string containing the chart.
    """
    if bar_width is None:
        try:
            terminal_width = os.get_terminal_size().columns
        except OSError:
            terminal_width = FALLBACK_TERMINAL_WIDTH
        bar_width = max(10, terminal_width - BAR_LABEL_RESERVE)

    max_val = max(values) if values else 1
    if max_val == 0:
        max_val = 1  # avoid division by zero

    label_w = max(len(lbl) for lbl in labels) if labels else 3
    lines = [title]
    for label, value in zip(labels, values):
        bar = _bar(value, max_val, bar_width)
        val_str = f"{value:.1f}{unit}"
        lines.append(f"  {label:<{label_w}} │{bar}│ {val_str:>6}")

    return "\n".join(lines)


def render_yearly_chart(yearly: list[tuple[int, float]], bar_width: int | None = None) -> str:
    """Bar chart of mean AQI per year."""
    if not yearly:
        return "Pollution Trend (mean AQI per year)\n  (no data)"
    return render_bar_chart(
        [str(year) for year, _ in yearly],
        [mean for _, mean in yearly],
        "Pollution Trend (mean AQI per year)",
        bar_width=bar_width,
    )


def render_seasonal_chart(seasonal: list[tuple[int, float]], bar_width: int | None = None) -> str:
    """Bar chart of mean AQI per calendar month, January first."""
    return render_bar_chart(
        [MONTH_ABBR[month] for month, _ in seasonal],
        [mean for _, mean in seasonal],
        "Seasonal Variation (mean AQI per month)",
        bar_width=bar_width,
    )


# ─────────────────────────────────────────────────────────────
# HTML snippets for the Streamlit dashboard
# ─────────────────────────────────────────────────────────────
# Values come from the air-data service or config.toml; escape before
# handing them to unsafe_allow_html.

def card_html(title: str, value: str) -> str:
    """Render a stat card as HTML."""
    return f"""
    <div class="aq-card">
      <div class="aq-card-title">{html.escape(title)}</div>
      <div class="aq-card-value">{html.escape(value)}</div>
    </div>
    """


def user_badge_html(user: dict) -> str:
    """Profile picture (if any) and display name for the page header."""
    pic = ""
    if user.get("profile_pic"):
        pic = f'<img src="{html.escape(str(user["profile_pic"]), quote=True)}" alt="profile"/>'
    name = html.escape(str(user.get("name", "")))
    return f'<div class="user-line">{pic}<span>{name}</span></div>'


def heading_html(title: str) -> str:
    return f"<h1>{html.escape(title)}</h1>"


def error_html(message: str) -> str:
    return f'<div class="error-card">⚠️ {html.escape(message)}</div>'
