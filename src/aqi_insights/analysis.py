# Project: aqi-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
analysis.py — Summary statistics, period aggregation and trend estimation
for air-quality measurement records.

All calculations use the Python standard library only (no numpy/scipy).
Linear regression uses the closed-form OLS formula.
"""

from __future__ import annotations
from collections import defaultdict

from aqi_insights.chart import format_cards
from aqi_insights.records import MeasurementRecord

MONTHS_PER_YEAR = 12
TREND_STABLE_BAND = 0.05  # AQI points per year


def summarize(records: list[MeasurementRecord]) -> dict:
    """Mean AQI and maximum PM2.5 over all records.

    Returns dict with keys mean_aqi, max_pm25. Both are 0.0 for an empty
    record list.
    """
    if not records:
        return {"mean_aqi": 0.0, "max_pm25": 0.0}

    return {
        "mean_aqi": sum(r.aqi for r in records) / len(records),
        "max_pm25": max(r.pm25 for r in records),
    }


def aggregate_by_year(records: list[MeasurementRecord]) -> list[tuple[int, float]]:
    """Mean AQI per calendar year.

    Returns a list of (year, mean_aqi) pairs, one per distinct year present
    in the input, sorted by year. Missing years are not filled in.
    """
    totals: dict[int, list[float]] = defaultdict(lambda: [0.0, 0])
    for r in records:
        acc = totals[r.date.year]
        acc[0] += r.aqi
        acc[1] += 1

    return [(year, totals[year][0] / totals[year][1]) for year in sorted(totals)]


def aggregate_by_season(records: list[MeasurementRecord]) -> list[tuple[int, float]]:
    """Mean AQI per month of year (0 = January … 11 = December) across all years.

    Always returns exactly 12 (month_index, mean_aqi) pairs in calendar
    order; months without records have a mean of 0.0.
    """
    sums = [0.0] * MONTHS_PER_YEAR
    counts = [0] * MONTHS_PER_YEAR
    for r in records:
        month = r.date.month - 1
        sums[month] += r.aqi
        counts[month] += 1

    return [
        (month, sums[month] / counts[month] if counts[month] else 0.0)
        for month in range(MONTHS_PER_YEAR)
    ]


def estimate_trend(yearly: list[tuple[int, float]]) -> dict:
    """Fit an OLS line through the yearly means and extrapolate one period.

    The regression's x values are the positions 0..n-1 in the series, not the
    year numbers, so non-contiguous years are treated as evenly spaced.

    OLS formula: slope = (n*sum(xy) - sum(x)*sum(y)) / (n*sum(x^2) - sum(x)^2)

    Returns dict with keys:
        slope (float, AQI per period; 0.0 for fewer than 2 points),
        predicted_next (float, last mean + slope; 0.0 for an empty series)
    """
    ys = [float(mean) for _, mean in yearly]
    n = len(ys)

    slope = 0.0
    if n >= 2:
        xs = [float(i) for i in range(n)]
        sum_x = sum(xs)
        sum_y = sum(ys)
        sum_xy = sum(x * y for x, y in zip(xs, ys))
        sum_x2 = sum(x * x for x in xs)

        denom = n * sum_x2 - sum_x ** 2
        if denom != 0:
            slope = (n * sum_xy - sum_x * sum_y) / denom

    predicted_next = ys[-1] + slope if ys else 0.0
    return {"slope": slope, "predicted_next": predicted_next}


def trend_direction(slope: float) -> str:
    """Classify a yearly AQI slope as 'worsening', 'improving' or 'stable'."""
    if slope > TREND_STABLE_BAND:
        return "worsening"
    if slope < -TREND_STABLE_BAND:
        return "improving"
    return "stable"


def daily_series(records: list[MeasurementRecord]) -> dict:
    """Input-ordered dates, AQI and PM2.5 values for the daily chart."""
    return {
        "dates": [r.date for r in records],
        "aqi":   [r.aqi for r in records],
        "pm25":  [r.pm25 for r in records],
    }


def analyze(records: list[MeasurementRecord]) -> dict:
    """Run every analysis pass over one record set.

    Returns dict with keys summary, yearly, seasonal, trend, daily.
    """
    yearly = aggregate_by_year(records)
    return {
        "summary":  summarize(records),
        "yearly":   yearly,
        "seasonal": aggregate_by_season(records),
        "trend":    estimate_trend(yearly),
        "daily":    daily_series(records),
    }


def terminal_summary(title: str, report: dict) -> str:
    """Return a formatted multi-line terminal summary string.

    Example:
        🌫  Air Quality Dashboard — 730 readings (2023–2024)
        ──────────────────────────────────────────────────────────────
        Average AQI:               58.3
        ...
    """
    yearly = report["yearly"]
    if not yearly:
        return f"🌫  {title} — No air-quality data available."

    n_records = len(report["daily"]["dates"])
    start_yr = yearly[0][0]
    end_yr = yearly[-1][0]
    span = f"{start_yr}" if start_yr == end_yr else f"{start_yr}–{end_yr}"
    direction = trend_direction(report["trend"]["slope"])
    sep = "─" * 62

    lines = [f"🌫  {title} — {n_records} readings ({span})", sep]
    for label, value in format_cards(report["summary"], report["trend"]):
        lines.append(f"{label + ':':<26} {value}")
    lines.append("")
    lines.append(f"📈  Trend: {direction} ({len(yearly)} year(s) of data)")
    lines.append(sep)
    return "\n".join(lines)
