"""Streamlit dashboard for the short-term-rental pricing helper."""

from __future__ import annotations

import datetime
from typing import Any

import streamlit as st

from pricing_helper.domain.models import FeatureInput, PipelineMode
from pricing_helper.domain.session import PricingSession
from pricing_helper.services.workflow_service import PricingWorkflowService
from pricing_helper.utils.config import get_settings
from pricing_helper.utils.logger import configure_logging

settings = get_settings()

st.set_page_config(
    page_title=settings.app_name,
    page_icon="🏠",
    layout="wide",
)

MODE_LABELS = {
    PipelineMode.BY_IDENTIFIER: "Example listing",
    PipelineMode.BY_FEATURE_SET: "Custom listing",
}


# ==========================================
# Formatting helpers (presentation only)
# ==========================================
def fmt_money(value: Any) -> str:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "-"
    return f"${number:,.0f}"


def fmt_pct(value: Any) -> str:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "-"
    return f"{number:.1f}%"


def get_workflow() -> PricingWorkflowService:
    """One workflow (and session) per browser session, rebuilt on page reload."""
    if "workflow" not in st.session_state:
        st.session_state["workflow"] = PricingWorkflowService(settings=settings)
    return st.session_state["workflow"]


# ==========================================
# UI sections
# ==========================================
def render_connection(workflow: PricingWorkflowService) -> None:
    session = workflow.session
    st.sidebar.title(settings.app_name)
    st.sidebar.markdown("---")
    api_base = st.sidebar.text_input("API Base URL", value=session.api_base)
    if api_base != session.api_base:
        workflow.set_api_base(api_base)
    st.sidebar.caption("If you run the backend locally, keep the default.")

    if st.sidebar.button("Check /health", use_container_width=True):
        with st.spinner("Checking…"):
            workflow.check_health()

    if session.health_state.error:
        st.sidebar.error(f"Connection error: {session.health_state.error}")
    elif session.health is not None:
        st.sidebar.success(
            f"Status: {session.health.status} · rows: {session.health.n_rows} · "
            f"booking model: {'loaded' if session.health.booking_model_loaded else 'missing'}"
        )


def render_identifier_form(workflow: PricingWorkflowService) -> None:
    session = workflow.session
    row_index = st.text_input(
        "Row index (listing from the dataset)",
        value=session.identifier_input.row_index,
        placeholder="0",
    )
    workflow.set_row_index(row_index)


def render_feature_form(workflow: PricingWorkflowService) -> None:
    current = workflow.session.feature_input
    choices = list(settings.room_type_choices)
    col1, col2 = st.columns(2)
    with col1:
        room_type = st.selectbox(
            "Room type",
            choices,
            index=choices.index(current.room_type) if current.room_type in choices else 0,
        )
        accommodates = st.text_input("Accommodates", value=current.accommodates)
        amenities = st.text_input(
            "Amenities (comma-separated)",
            value=current.amenities,
            placeholder="Wifi,Kitchen,Heating",
        )
        rating = st.text_input("Rating (optional)", value=current.rating)
        latitude = st.text_input("Latitude (optional)", value=current.latitude, placeholder="47.6")
        instant_bookable = st.toggle("Instant bookable", value=current.instant_bookable)
    with col2:
        property_type = st.text_input("Property type", value=current.property_type, placeholder="House")
        bathrooms = st.text_input("Bathrooms", value=current.bathrooms)
        minimum_nights = st.text_input("Minimum nights", value=current.minimum_nights)
        reviews = st.text_input("Number of reviews (optional)", value=current.reviews)
        longitude = st.text_input("Longitude (optional)", value=current.longitude, placeholder="-122.3")
        superhost = st.toggle("Superhost", value=current.superhost)

    workflow.set_feature_input(
        FeatureInput(
            room_type=room_type,
            property_type=property_type,
            accommodates=accommodates,
            bathrooms=bathrooms,
            amenities=amenities,
            minimum_nights=minimum_nights,
            instant_bookable=instant_bookable,
            rating=rating,
            reviews=reviews,
            superhost=superhost,
            latitude=latitude,
            longitude=longitude,
        )
    )


def render_recommendation(session: PricingSession) -> None:
    if session.recommendation_state.error:
        st.error(f"Recommendation failed: {session.recommendation_state.error}")

    recommendation = session.recommendation
    if recommendation is None:
        st.info("No recommendation yet.")
        return

    location = ", ".join(
        part for part in (recommendation.neighbourhood, recommendation.city) if part
    )
    if location:
        st.caption(f"📍 {location}")
    col_a, col_b, col_c = st.columns(3)
    col_a.metric("Peer median", fmt_money(recommendation.peer_median_price))
    col_b.metric("Regression", fmt_money(recommendation.regression_price))
    col_c.metric("Final price", fmt_money(recommendation.final_price))
    details = []
    if recommendation.listing_id is not None:
        details.append(f"Listing {recommendation.listing_id}")
    if recommendation.price_bucket_static:
        details.append(f"Bucket: {recommendation.price_bucket_static}")
    if details:
        st.caption(" · ".join(details))


def render_pricing_section(workflow: PricingWorkflowService) -> None:
    session = workflow.session
    st.header("💡 Price Recommendation")

    modes = list(MODE_LABELS)
    selected = st.radio(
        "Input pipeline",
        modes,
        index=modes.index(session.mode),
        format_func=MODE_LABELS.get,
        horizontal=True,
    )
    if selected is not session.mode:
        workflow.select_mode(selected)

    if session.mode is PipelineMode.BY_IDENTIFIER:
        render_identifier_form(workflow)
    else:
        render_feature_form(workflow)

    col1, col2 = st.columns(2)
    with col1:
        weekend = st.toggle("Weekend", value=session.flags.weekend)
    with col2:
        holiday = st.toggle("Holiday", value=session.flags.holiday)
    workflow.set_flags(weekend=weekend, holiday=holiday)

    if st.button("Recommend price", type="primary"):
        with st.spinner("Requesting recommendation…"):
            workflow.recommend()

    render_recommendation(session)


def render_booking_section(workflow: PricingWorkflowService) -> None:
    session = workflow.session
    st.header("📅 7-Day Booking Simulation")

    col1, col2 = st.columns(2)
    with col1:
        try:
            default_date = datetime.date.fromisoformat(session.start_date)
        except ValueError:
            default_date = datetime.date.today()
        start_date = st.date_input("Start date", value=default_date)
        workflow.edit_start_date(start_date.isoformat() if start_date else "")
    with col2:
        base_price = st.text_input(
            "Base price",
            value=session.base_price,
            placeholder=session.recommended_price or "e.g., 120",
        )
        if base_price != session.base_price:
            workflow.edit_base_price(base_price)

    if st.button("Simulate booking week", type="primary"):
        with st.spinner("Simulating…"):
            workflow.simulate_week()

    if session.booking_state.error:
        st.error(f"Simulation failed: {session.booking_state.error}")

    if session.booking_week is None:
        return
    frame = workflow.booking_week_frame()
    frame["effective_price"] = frame["effective_price"].map(fmt_money)
    frame["prob_booked_pct"] = frame["prob_booked_pct"].map(fmt_pct)
    frame["prob_vacant_pct"] = frame["prob_vacant_pct"].map(fmt_pct)
    st.caption(f"Base price: {fmt_money(session.booking_week.base_price)}")
    st.dataframe(frame, use_container_width=True, hide_index=True)


def main() -> None:
    configure_logging()
    workflow = get_workflow()
    render_connection(workflow)
    st.title(settings.app_name)
    st.markdown("Recommend nightly prices and simulate 7-day booking probability.")
    render_pricing_section(workflow)
    st.markdown("---")
    render_booking_section(workflow)


if __name__ == "__main__":
    main()
