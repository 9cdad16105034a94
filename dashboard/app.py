"""Streamlit operator dashboard for the hotel booking service."""

from __future__ import annotations

import datetime
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import requests
import streamlit as st

# ==========================================
# Configuration & Constants
# ==========================================
# Point this to your local FastAPI server
API_BASE_URL = "http://127.0.0.1:8000"

st.set_page_config(
    page_title="Hotel Booking Dashboard",
    page_icon="🏨",
    layout="wide",
)


# ==========================================
# API Helper Functions
# ==========================================
def _error_detail(response: requests.Response) -> str:
    try:
        return str(response.json().get("detail", response.text))
    except ValueError:
        return response.text


def fetch_rooms() -> List[Dict[str, Any]]:
    try:
        response = requests.get(f"{API_BASE_URL}/rooms", timeout=5)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        st.error(f"Backend connection failed: {e}")
        return []


def fetch_bookings() -> List[Dict[str, Any]]:
    try:
        response = requests.get(f"{API_BASE_URL}/bookings", timeout=5)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        st.error(f"Backend connection failed: {e}")
        return []


def submit_booking(
    start_date: str, end_date: str, customer_id: int
) -> Tuple[int, Optional[Dict[str, Any]], str]:
    """Returns (status_code, created booking or None, error detail)."""
    try:
        response = requests.post(
            f"{API_BASE_URL}/bookings",
            json={
                "start_date": start_date,
                "end_date": end_date,
                "customer_id": customer_id,
            },
            timeout=5,
        )
    except requests.exceptions.RequestException as e:
        st.error(f"Backend connection failed: {e}")
        return 0, None, str(e)
    if response.status_code == 201:
        return response.status_code, response.json(), ""
    return response.status_code, None, _error_detail(response)


def fetch_fully_occupied_dates(start_date: str, end_date: str) -> Optional[List[str]]:
    try:
        response = requests.get(
            f"{API_BASE_URL}/bookings/fully-occupied",
            params={"start_date": start_date, "end_date": end_date},
            timeout=10,
        )
    except requests.exceptions.RequestException as e:
        st.error(f"Occupancy query failed: {e}")
        return None
    if response.status_code != 200:
        st.error(f"Occupancy query rejected: {_error_detail(response)}")
        return None
    return response.json()


# ==========================================
# UI Page Functions
# ==========================================
def render_overview_page() -> None:
    st.header("🛏️ Rooms & Bookings")

    rooms = fetch_rooms()
    bookings = fetch_bookings()

    col1, col2, col3 = st.columns(3)
    col1.metric("Rooms", len(rooms))
    col2.metric("Bookings", len(bookings))
    col3.metric("Active Bookings", sum(1 for item in bookings if item.get("is_active")))

    st.write("### Rooms")
    if rooms:
        st.dataframe(pd.DataFrame(rooms), use_container_width=True)
    else:
        st.info("No rooms in the catalog.")

    st.write("### Bookings")
    if bookings:
        df = pd.DataFrame(bookings).sort_values(["start_date", "room_id"])
        st.dataframe(df, use_container_width=True)
    else:
        st.info("No bookings recorded yet.")


def render_booking_page() -> None:
    st.header("📝 New Booking")
    st.markdown("Rooms are assigned automatically: the first free room in catalog order.")

    tomorrow = datetime.date.today() + datetime.timedelta(days=1)
    col1, col2, col3 = st.columns(3)
    with col1:
        start_date = st.date_input("Start Date", tomorrow)
    with col2:
        end_date = st.date_input("End Date", tomorrow)
    with col3:
        customer_id = st.number_input("Customer ID", min_value=1, value=1)

    if st.button("Create Booking", type="primary"):
        status_code, booking, detail = submit_booking(
            str(start_date), str(end_date), int(customer_id)
        )
        if status_code == 201 and booking:
            st.success(
                f"Booking #{booking['booking_id']} created in room {booking['room_id']}."
            )
        elif status_code == 409:
            st.warning(f"No room available: {detail}")
        elif status_code in (400, 422):
            st.error(f"Invalid request: {detail}")
        elif status_code:
            st.error(f"Unexpected response ({status_code}): {detail}")


def render_occupancy_page() -> None:
    st.header("📅 Occupancy")
    st.markdown("Dates on which every room is booked.")

    today = datetime.date.today()
    col1, col2 = st.columns(2)
    with col1:
        start_date = st.date_input("From", today)
    with col2:
        end_date = st.date_input("To", today + datetime.timedelta(days=30))

    if st.button("Find Fully Occupied Dates", type="primary"):
        dates = fetch_fully_occupied_dates(str(start_date), str(end_date))
        if dates is None:
            return
        if dates:
            st.metric("Fully Occupied Days", len(dates))
            st.dataframe(pd.DataFrame({"date": dates}), use_container_width=True)
        else:
            st.success("No fully occupied dates in this range.")


# ==========================================
# Main App Router
# ==========================================
def main() -> None:
    st.sidebar.title("Hotel Booking")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigation",
        ["Overview", "New Booking", "Occupancy"]
    )

    if page == "Overview":
        render_overview_page()
    elif page == "New Booking":
        render_booking_page()
    elif page == "Occupancy":
        render_occupancy_page()


if __name__ == "__main__":
    main()
