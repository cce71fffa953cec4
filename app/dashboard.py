# Project: aqi-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
dashboard.py — Streamlit air-quality dashboard with a dark navy UI.

Run with:
    streamlit run app/dashboard.py

Requires: pip install -e ".[ui]"
Reads the same config.toml and session token as the CLI.
"""

import sys
from pathlib import Path

# Ensure the src/ package is importable when running from the project root
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import plotly.graph_objects as go
import streamlit as st

from aqi_insights.analysis import analyze
from aqi_insights.chart import (
    MONTH_ABBR,
    card_html,
    error_html,
    format_cards,
    heading_html,
    user_badge_html,
)
from aqi_insights.client import SessionExpiredError, fetch_air_data, fetch_user
from aqi_insights.config import load_config
from aqi_insights.records import MalformedRecordError
from aqi_insights.session import clear_token, load_token


# ─────────────────────────────────────────────────────────────
# Page config — must be first Streamlit call
# ─────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Air Quality Dashboard",
    page_icon="🌫",
    layout="wide",
    initial_sidebar_state="collapsed",
)


# ─────────────────────────────────────────────────────────────
# CSS injection
# ─────────────────────────────────────────────────────────────

DASHBOARD_CSS = """
<style>
  #MainMenu, footer, header { visibility: hidden; }
  .block-container { padding-top: 2rem; padding-bottom: 4rem; max-width: 1100px; }

  html, body, [class*="css"] {
    background-color: #0b1f3a;
    color: #ffffff;
  }

  .stButton > button {
    background: #f43f5e !important;
    color: #ffffff !important;
    border: none !important;
    border-radius: 5px !important;
    padding: 0.4rem 1rem !important;
  }

  .aq-card {
    background: #1c3c5d;
    border-radius: 10px;
    padding: 20px;
    text-align: center;
  }
  .aq-card-title { font-size: 0.95rem; color: #cbd5e1; font-weight: 600; }
  .aq-card-value { font-size: 1.8rem; font-weight: 700; color: #ffffff; }

  .section-label {
    font-size: 1.2rem;
    font-weight: 700;
    margin: 2rem 0 0.75rem;
  }

  .error-card {
    background: rgba(244, 63, 94, 0.1);
    border: 1px solid rgba(244, 63, 94, 0.4);
    border-radius: 10px;
    color: #f43f5e;
    padding: 20px 24px;
    text-align: center;
    margin: 1rem 0;
  }

  .user-line { display: flex; align-items: center; gap: 15px; justify-content: flex-end; }
  .user-line img { width: 40px; border-radius: 50%; }
</style>
"""

st.markdown(DASHBOARD_CSS, unsafe_allow_html=True)


# ─────────────────────────────────────────────────────────────
# Plotly base layout
# ─────────────────────────────────────────────────────────────

PLOTLY_LAYOUT = dict(
    paper_bgcolor="#122b4a",
    plot_bgcolor="rgba(0,0,0,0)",
    font=dict(color="#cbd5e1", size=12),
    margin=dict(l=16, r=16, t=32, b=16),
    legend=dict(orientation="h", y=1.12, bgcolor="rgba(0,0,0,0)"),
    xaxis=dict(showgrid=False, zeroline=False),
    yaxis=dict(gridcolor="#1c3c5d", zeroline=False),
    hovermode="x unified",
)


def filled_line(x: list, y: list, name: str, color: str, fill_rgba: str) -> go.Scatter:
    """Smoothed line with the area beneath it shaded."""
    return go.Scatter(
        x=x,
        y=y,
        name=name,
        mode="lines+markers",
        line=dict(color=color, width=2, shape="spline", smoothing=0.8),
        marker=dict(color=color, size=4),
        fill="tozeroy",
        fillcolor=fill_rgba,
    )


def show_chart(fig: go.Figure, height: int = 320) -> None:
    fig.update_layout(**PLOTLY_LAYOUT, height=height)
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})


# ─────────────────────────────────────────────────────────────
# Cached data loader
# ─────────────────────────────────────────────────────────────


@st.cache_data(ttl=300)
def load_data(api_url: str, token: str, timeout: int) -> dict:
    """Fetch the user and readings, then run all analysis passes.

    Returns a dict with keys user, records, report — or {"error": str},
    with "expired": True when the session token was rejected.
    """
    try:
        user = fetch_user(api_url, token, timeout=timeout)
        records = fetch_air_data(api_url, token, timeout=timeout)
    except SessionExpiredError as exc:
        return {"error": str(exc), "expired": True}
    except (RuntimeError, MalformedRecordError) as exc:
        return {"error": f"Air data fetch failed: {exc}"}

    return {"user": user, "records": records, "report": analyze(records)}


# ─────────────────────────────────────────────────────────────
# Main dashboard
# ─────────────────────────────────────────────────────────────


def main() -> None:
    """Render the full air-quality dashboard."""
    config = load_config()
    api = config["api"]
    token_path = Path(api["token_file"])
    title = config["report"]["title"]

    token = load_token(token_path)
    if token is None:
        st.markdown(
            '<div class="error-card">Not logged in. '
            "Run <code>aqi-insights login --token &lt;TOKEN&gt;</code> and reload.</div>",
            unsafe_allow_html=True,
        )
        return

    with st.spinner("Loading air-quality data…"):
        data = load_data(api["url"], token, int(api["timeout"]))

    if "error" in data:
        if data.get("expired"):
            clear_token(token_path)
        # Failures must not stay cached for the ttl
        load_data.clear()
        st.markdown(error_html(data["error"]), unsafe_allow_html=True)
        return

    user: dict = data["user"]
    report: dict = data["report"]

    # ── SECTION 1: Header + user ─────────────────────────────

    head_col, user_col, btn_col = st.columns([3, 2, 1])
    with head_col:
        st.markdown(heading_html(title), unsafe_allow_html=True)
    with user_col:
        st.markdown(user_badge_html(user), unsafe_allow_html=True)
    with btn_col:
        if st.button("Logout", key="logout_btn"):
            clear_token(token_path)
            load_data.clear()
            st.rerun()

    # ── SECTION 2: Stat cards ────────────────────────────────

    for col, (label, value) in zip(st.columns(4), format_cards(report["summary"], report["trend"])):
        with col:
            st.markdown(card_html(label, value), unsafe_allow_html=True)

    # ── SECTION 3: Daily AQI & PM2.5 ─────────────────────────

    st.markdown('<div class="section-label">Daily AQI &amp; PM2.5</div>', unsafe_allow_html=True)
    daily = report["daily"]
    date_labels = [d.isoformat() for d in daily["dates"]]
    fig_daily = go.Figure()
    fig_daily.add_trace(filled_line(date_labels, daily["pm25"], "PM2.5", "#38bdf8", "rgba(56,189,248,0.2)"))
    fig_daily.add_trace(filled_line(date_labels, daily["aqi"], "AQI", "#f43f5e", "rgba(244,63,94,0.2)"))
    show_chart(fig_daily)

    # ── SECTION 4: Pollution trend ───────────────────────────

    st.markdown('<div class="section-label">Pollution Trend</div>', unsafe_allow_html=True)
    yearly = report["yearly"]
    fig_trend = go.Figure(
        filled_line(
            [str(year) for year, _ in yearly],
            [mean for _, mean in yearly],
            "Yearly AQI Trend",
            "#f97316",
            "rgba(249,115,22,0.2)",
        )
    )
    show_chart(fig_trend, height=300)

    # ── SECTION 5: Seasonal variation ────────────────────────

    st.markdown('<div class="section-label">Seasonal Variation</div>', unsafe_allow_html=True)
    seasonal = report["seasonal"]
    fig_season = go.Figure(
        filled_line(
            [MONTH_ABBR[month] for month, _ in seasonal],
            [mean for _, mean in seasonal],
            "Seasonal AQI Variation",
            "#22c55e",
            "rgba(34,197,94,0.2)",
        )
    )
    show_chart(fig_season, height=300)


main()
