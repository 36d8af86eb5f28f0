"""
Flight Dashboard - LSGL arrivals and departures.

Loads the tracker CSVs once per session and queries the controller for the
selected window.

Run with: uv run streamlit run streamlit/flight_dashboard.py
"""

from datetime import date, timedelta

import pandas as pd
import plotly.express as px
import streamlit as st

from lsgl_tracker.store import FlightDataController
from lsgl_tracker.store.service import DEFAULT_DAYS
from lsgl_tracker.store.stats import daily_counts_dataframe


@st.cache_resource
def get_controller() -> FlightDataController:
    """Create and load the session's controller."""
    controller = FlightDataController()
    controller.load_data()
    return controller


def daily_counts_chart(counts_df: pd.DataFrame):
    long_df = counts_df.melt(
        id_vars="date",
        value_vars=["arrivals", "departures"],
        var_name="Direction",
        value_name="Flights",
    )
    fig = px.bar(
        long_df,
        x="date",
        y="Flights",
        color="Direction",
        barmode="group",
        labels={"date": "Date"},
    )
    fig.update_layout(height=400, xaxis={"type": "date"})
    return fig


def main() -> None:
    st.set_page_config(
        page_title="LSGL Flight Tracker",
        page_icon="✈️",
        layout="wide",
    )
    st.title("✈️ LSGL Flight Tracker")
    st.caption("Arrivals and departures at Lausanne-Blécherette")

    controller = get_controller()

    if controller.loading:
        st.info("Loading flight data...")
    if controller.error:
        st.error(controller.error)
        st.stop()
    if controller.load_errors:
        st.warning("Some datasets failed to load: " + "; ".join(controller.load_errors))

    # Sidebar filters
    with st.sidebar:
        st.header("Filters")
        mode = st.radio(
            "Period",
            options=["Last N days", "Date range"],
            index=0,
        )
        if mode == "Last N days":
            days = st.slider("Days", min_value=0, max_value=90, value=DEFAULT_DAYS)
            start_date = end_date = None
        else:
            start_date = st.date_input("Start date", value=date.today() - timedelta(days=30))
            end_date = st.date_input("End date", value=date.today())
            if start_date > end_date:
                st.error("Start date must be before or equal to end date.")
                return
            days = None
        if st.button("Reload data"):
            get_controller.clear()
            st.rerun()

    # The controller is shared across sessions, so the window is passed per query
    flights = controller.get_filtered_flights(days, start_date, end_date)
    counts = controller.get_daily_counts(days, start_date, end_date)

    m1, m2, m3 = st.columns(3)
    with m1:
        st.metric("Flights", f"{len(flights):,}")
    with m2:
        st.metric("Arrivals", f"{sum(c.arrivals for c in counts):,}")
    with m3:
        st.metric("Departures", f"{sum(c.departures for c in counts):,}")

    st.header("Daily movements")
    counts_df = daily_counts_dataframe(counts)
    if counts_df.empty:
        st.caption("No flights in the selected period.")
    else:
        st.plotly_chart(daily_counts_chart(counts_df), width="stretch")
        with st.expander("View table"):
            st.dataframe(counts_df, width="stretch")

    st.header("Flights")
    df = controller.to_dataframe(list(reversed(flights)))
    col_config = {
        "date": st.column_config.DatetimeColumn("Date", format="YYYY-MM-DD HH:mm"),
        "departure_time": st.column_config.DatetimeColumn("Departure", format="YYYY-MM-DD HH:mm"),
        "arrival_time": st.column_config.DatetimeColumn("Arrival", format="YYYY-MM-DD HH:mm"),
    }
    st.dataframe(df, width="stretch", column_config=col_config)

    st.header("Top airports")
    if not df.empty:
        airport_df = (
            df.dropna(subset=["airport_name"])
            .groupby(["airport_name", "airport_country"], dropna=False)
            .size()
            .reset_index(name="Flights")
            .sort_values("Flights", ascending=False)
            .head(10)
        )
        if not airport_df.empty:
            fig_apt = px.bar(
                airport_df,
                x="Flights",
                y="airport_name",
                orientation="h",
                color="Flights",
                color_continuous_scale="Blues",
                labels={"airport_name": "Airport"},
            )
            fig_apt.update_layout(yaxis={"categoryorder": "total ascending"}, showlegend=False)
            st.plotly_chart(fig_apt, width="stretch")


if __name__ == "__main__":
    main()
