"""
Results Display Components

Result card (footprint, category, message), personalised recommendations and
the per-category breakdown chart.
"""

import altair as alt
import pandas as pd
import streamlit as st
from typing import Dict

from ecotrace.scoring import FootprintResult

# Display labels for the scoring terms
TERM_LABELS: Dict[str, str] = {
    "car_travel": "Car travel",
    "public_transport": "Public transport",
    "home_size": "Home size",
    "heating_energy": "Heating",
    "meat_consumption": "Meat",
    "local_food": "Food sourcing",
    "shopping_habits": "Clothing",
    "electronics": "Electronics",
    "baseline": "Shared services",
}

ACCENT_COLORS: Dict[str, str] = {
    "good": "#2E7D32",
    "medium": "#F9A825",
    "bad": "#C62828",
}

ACCENT_ICONS: Dict[str, str] = {
    "good": "🌳",
    "medium": "🌤️",
    "bad": "🔥",
}


def contributions_frame(result: FootprintResult) -> pd.DataFrame:
    """Breakdown as a DataFrame (category, tonnes, share %), largest first; zero terms dropped."""
    rows = [
        {"category": TERM_LABELS.get(term, term), "tonnes": tonnes}
        for term, tonnes in result.contributions.items()
        if tonnes > 0
    ]
    df = pd.DataFrame(rows, columns=["category", "tonnes"])
    if df.empty:
        return df.assign(share_pct=pd.Series(dtype=float))
    total = df["tonnes"].sum()
    df["share_pct"] = df["tonnes"] / total * 100.0
    return df.sort_values("tonnes", ascending=False, kind="stable").reset_index(drop=True)


def display_breakdown(result: FootprintResult, color: str) -> None:
    df = contributions_frame(result)
    if df.empty:
        return
    st.markdown("##### Where your emissions come from")
    chart = (
        alt.Chart(df)
        .mark_bar(color=color)
        .encode(
            x=alt.X("tonnes:Q", title="Tonnes CO₂e / year (household)"),
            y=alt.Y("category:N", sort="-x", title=""),
            tooltip=[
                alt.Tooltip("category:N", title="Category"),
                alt.Tooltip("tonnes:Q", title="Tonnes", format=",.2f"),
                alt.Tooltip("share_pct:Q", title="Share (%)", format=",.1f"),
            ],
        )
        .properties(height=40 * len(df))
    )
    st.altair_chart(chart, use_container_width=True)


def display_result(result: FootprintResult, show_breakdown: bool = True) -> None:
    """Main results page body."""
    color = ACCENT_COLORS.get(result.accent, "#2E7D32")
    icon = ACCENT_ICONS.get(result.accent, "")

    st.subheader("Your Carbon Footprint")
    with st.container(border=True):
        st.markdown(
            f"<div style='text-align:center;font-size:5rem'>{icon}</div>"
            f"<h1 style='text-align:center;color:{color};margin-bottom:0'>"
            f"{result.footprint_tonnes} <span style='font-size:1.5rem;color:#6b7280'>tonnes of CO₂ per year</span></h1>"
            f"<h3 style='text-align:center;color:{color}'>{result.category.value}</h3>",
            unsafe_allow_html=True,
        )
        st.write(result.message)

    if show_breakdown:
        display_breakdown(result, color)

    if result.recommendations:
        st.markdown("##### Personalised recommendations")
        for tip in result.recommendations:
            st.info(tip)
