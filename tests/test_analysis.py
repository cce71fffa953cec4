# Project: aqi-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""Tests for analysis.py — summarize, aggregate_by_year, aggregate_by_season,
estimate_trend, trend_direction, analyze, terminal_summary."""

import pytest
from datetime import date

from aqi_insights.analysis import (
    aggregate_by_season,
    aggregate_by_year,
    analyze,
    daily_series,
    estimate_trend,
    summarize,
    terminal_summary,
    trend_direction,
)
from aqi_insights.records import MeasurementRecord


def rec(y: int, m: int, d: int, aqi: float, pm25: float = 10.0) -> MeasurementRecord:
    return MeasurementRecord(date(y, m, d), float(aqi), float(pm25))


# ---------------------------------------------------------------------------
# Shared sample data (no API calls)
# ---------------------------------------------------------------------------

# Deliberately out of chronological order
SAMPLE_RECORDS = [
    rec(2021, 7, 15, 80, pm25=35.0),
    rec(2019, 1, 10, 40, pm25=12.0),
    rec(2020, 1, 20, 55, pm25=18.5),
    rec(2019, 1, 25, 60, pm25=20.0),
    rec(2021, 12, 5, 60, pm25=22.0),
    rec(2020, 7, 1, 65, pm25=40.5),
]


# ---------------------------------------------------------------------------
# summarize
# ---------------------------------------------------------------------------

class TestSummarize:

    def test_mean_aqi(self):
        """(80+40+55+60+60+65) / 6 = 60.0"""
        assert summarize(SAMPLE_RECORDS)["mean_aqi"] == pytest.approx(60.0)

    def test_max_pm25(self):
        assert summarize(SAMPLE_RECORDS)["max_pm25"] == 40.5

    def test_empty_input_is_zero(self):
        """Empty input is a defined case, not an error."""
        assert summarize([]) == {"mean_aqi": 0.0, "max_pm25": 0.0}

    def test_mean_within_min_and_max_aqi(self):
        result = summarize(SAMPLE_RECORDS)
        aqis = [r.aqi for r in SAMPLE_RECORDS]
        assert min(aqis) <= result["mean_aqi"] <= max(aqis)

    def test_larger_pm25_strictly_increases_max(self):
        before = summarize(SAMPLE_RECORDS)["max_pm25"]
        after = summarize(SAMPLE_RECORDS + [rec(2022, 3, 3, 10, pm25=before + 0.5)])["max_pm25"]
        assert after > before

    def test_single_record(self):
        assert summarize([rec(2020, 1, 1, 33, pm25=7)]) == {"mean_aqi": 33.0, "max_pm25": 7.0}

    def test_repeated_calls_are_identical(self):
        assert summarize(SAMPLE_RECORDS) == summarize(SAMPLE_RECORDS)


# ---------------------------------------------------------------------------
# aggregate_by_year
# ---------------------------------------------------------------------------

class TestAggregateByYear:

    def test_one_entry_per_distinct_year_sorted(self):
        years = [year for year, _ in aggregate_by_year(SAMPLE_RECORDS)]
        assert years == [2019, 2020, 2021]

    def test_yearly_means(self):
        """2019: (40+60)/2, 2020: (55+65)/2, 2021: (80+60)/2."""
        assert aggregate_by_year(SAMPLE_RECORDS) == [
            (2019, pytest.approx(50.0)),
            (2020, pytest.approx(60.0)),
            (2021, pytest.approx(70.0)),
        ]

    def test_empty_input_returns_empty_list(self):
        assert aggregate_by_year([]) == []

    def test_missing_years_are_not_filled(self):
        result = aggregate_by_year([rec(2015, 1, 1, 10), rec(2018, 1, 1, 20)])
        assert [year for year, _ in result] == [2015, 2018]

    def test_input_order_does_not_matter(self):
        assert aggregate_by_year(SAMPLE_RECORDS) == aggregate_by_year(list(reversed(SAMPLE_RECORDS)))


# ---------------------------------------------------------------------------
# aggregate_by_season
# ---------------------------------------------------------------------------

class TestAggregateBySeason:

    def setup_method(self):
        self.seasonal = aggregate_by_season(SAMPLE_RECORDS)
        self.by_month = dict(self.seasonal)

    def test_returns_exactly_12_entries(self):
        assert len(self.seasonal) == 12

    def test_month_keys_are_0_to_11_in_order(self):
        assert [month for month, _ in self.seasonal] == list(range(12))

    def test_january_mean_across_years(self):
        """January: 40, 55, 60 → 51.67 (key 0)."""
        assert self.by_month[0] == pytest.approx(155 / 3)

    def test_july_mean(self):
        """July: 80, 65 → 72.5 (key 6)."""
        assert self.by_month[6] == pytest.approx(72.5)

    def test_december_is_last(self):
        assert self.seasonal[-1] == (11, pytest.approx(60.0))

    def test_months_without_records_are_zero(self):
        for month in set(range(12)) - {0, 6, 11}:
            assert self.by_month[month] == 0.0, f"Month {month} should be 0.0"

    def test_empty_input_gives_twelve_zeros(self):
        assert aggregate_by_season([]) == [(m, 0.0) for m in range(12)]


# ---------------------------------------------------------------------------
# estimate_trend
# ---------------------------------------------------------------------------

class TestEstimateTrend:

    def test_worked_example(self):
        """2019→50, 2020→60, 2021→70 gives slope 10 and a forecast of 80."""
        result = estimate_trend([(2019, 50.0), (2020, 60.0), (2021, 70.0)])
        assert result["slope"] == pytest.approx(10.0)
        assert result["predicted_next"] == pytest.approx(80.0)

    @pytest.mark.parametrize("a, b, n", [(5.0, 2.5, 4), (100.0, -3.0, 7), (0.0, 0.1, 12)])
    def test_perfectly_linear_series(self, a, b, n):
        yearly = [(2000 + i, a + b * i) for i in range(n)]
        result = estimate_trend(yearly)
        assert result["slope"] == pytest.approx(b)
        assert result["predicted_next"] == pytest.approx(a + b * (n - 1) + b)

    def test_constant_series_has_zero_slope(self):
        result = estimate_trend([(2000 + i, 42.0) for i in range(5)])
        assert result["slope"] == pytest.approx(0.0)
        assert result["predicted_next"] == pytest.approx(42.0)

    def test_single_point(self):
        """One point: no slope, forecast equals the only observation."""
        assert estimate_trend([(2020, 55.0)]) == {"slope": 0.0, "predicted_next": 55.0}

    def test_empty_series(self):
        assert estimate_trend([]) == {"slope": 0.0, "predicted_next": 0.0}

    def test_uses_position_not_year_value(self):
        """Gaps between years are ignored: 2010 and 2020 are one step apart."""
        result = estimate_trend([(2010, 10.0), (2020, 30.0)])
        assert result["slope"] == pytest.approx(20.0)
        assert result["predicted_next"] == pytest.approx(50.0)

    def test_noisy_series_slope(self):
        """x=0..3, y=[1,3,2,6]: slope = (4*25 - 6*12) / (4*14 - 36) = 1.4"""
        result = estimate_trend([(2000, 1.0), (2001, 3.0), (2002, 2.0), (2003, 6.0)])
        assert result["slope"] == pytest.approx(1.4)
        assert result["predicted_next"] == pytest.approx(7.4)


# ---------------------------------------------------------------------------
# trend_direction
# ---------------------------------------------------------------------------

class TestTrendDirection:

    def test_rising_aqi_is_worsening(self):
        assert trend_direction(1.2) == "worsening"

    def test_falling_aqi_is_improving(self):
        assert trend_direction(-0.8) == "improving"

    def test_small_slope_is_stable(self):
        assert trend_direction(0.01) == "stable"
        assert trend_direction(0.0) == "stable"


# ---------------------------------------------------------------------------
# daily_series / analyze
# ---------------------------------------------------------------------------

class TestAnalyze:

    def test_daily_series_keeps_input_order(self):
        series = daily_series(SAMPLE_RECORDS)
        assert series["dates"][0] == date(2021, 7, 15)
        assert series["aqi"] == [80.0, 40.0, 55.0, 60.0, 60.0, 65.0]
        assert len(series["pm25"]) == len(SAMPLE_RECORDS)

    def test_report_keys(self):
        report = analyze(SAMPLE_RECORDS)
        assert set(report.keys()) == {"summary", "yearly", "seasonal", "trend", "daily"}

    def test_trend_is_computed_from_yearly_series(self):
        report = analyze(SAMPLE_RECORDS)
        assert report["trend"] == estimate_trend(report["yearly"])
        assert report["trend"]["slope"] == pytest.approx(10.0)

    def test_empty_input(self):
        report = analyze([])
        assert report["summary"] == {"mean_aqi": 0.0, "max_pm25": 0.0}
        assert report["yearly"] == []
        assert [mean for _, mean in report["seasonal"]] == [0.0] * 12
        assert report["trend"] == {"slope": 0.0, "predicted_next": 0.0}


# ---------------------------------------------------------------------------
# terminal_summary
# ---------------------------------------------------------------------------

class TestTerminalSummary:

    def setup_method(self):
        self.output = terminal_summary("Test City", analyze(SAMPLE_RECORDS))

    def test_contains_title(self):
        assert "Test City" in self.output

    def test_contains_year_span(self):
        assert "2019–2021" in self.output

    def test_contains_reading_count(self):
        assert "6 readings" in self.output

    def test_contains_cards(self):
        assert "Average AQI" in self.output
        assert "60.0" in self.output
        assert "Predicted Next Year AQI" in self.output
        assert "80.0" in self.output

    def test_contains_trend_direction(self):
        assert "worsening" in self.output

    def test_is_multiline(self):
        assert "\n" in self.output

    def test_empty_report_returns_no_data_message(self):
        result = terminal_summary("Nowhere", analyze([]))
        assert "No air-quality data" in result
        assert "Nowhere" in result
