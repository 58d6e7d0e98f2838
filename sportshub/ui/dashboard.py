"""Dashboard UI: report cards, booking and registration forms, detailed report dialog."""
import asyncio
from typing import Any, Callable, Coroutine, List, Optional, TypeVar, Union

import streamlit as st

from sportshub.models.report import DetailedReport, EventItem
from sportshub.services.action_service import ActionOrchestrator, ActionResult
from sportshub.services.booking_client import BookingClient
from sportshub.services.event_service import get_event_inventory, get_sports
from sportshub.services.report_service import METRIC_KEYS, participant_lines, sport_lines
from sportshub.services.storage_service import JsonFileStore, LocalStoreAdapter
from sportshub.ui.html_utils import html_block, html_list
from sportshub.utils.config import Settings, load_settings

T = TypeVar("T")

DIALOG_DECORATOR = getattr(st, "dialog", None) or getattr(st, "experimental_dialog", None)

REPORT_STATE = "report_metrics"
SETTINGS_STATE = "dashboard_settings"
ORCHESTRATOR_STATE = "dashboard_orchestrator"
FEEDBACK_STATE = "dashboard_feedback"
DETAIL_DIALOG_FLAG = "dashboard_detail_dialog_open"

BOOKING_KEYS = ("booking_sport", "booking_date", "booking_time")
REGISTRATION_KEYS = ("registration_event", "registration_name", "registration_email", "registration_phone")

CARD_TITLES = {
    "total_events": "Total Events",
    "total_participants": "Total Participants",
    "slots_booked": "Slots Booked",
    "most_popular_sport": "Most Popular Sport",
}


class SessionStateTarget:
    """Report target that keeps projected metrics in Streamlit session state."""

    def __init__(self, state_key: str = REPORT_STATE):
        self.state_key = state_key

    def set_slot(self, metric_key: str, value: Union[int, str]) -> None:
        slots = st.session_state.setdefault(self.state_key, {})
        slots[metric_key] = value

    def get_slot(self, metric_key: str) -> Optional[Union[int, str]]:
        return st.session_state.get(self.state_key, {}).get(metric_key)


def _run_async(factory: Callable[[], Coroutine[Any, Any, T]]) -> T:
    """Execute coroutine on a fresh event loop (the script thread has none running)."""
    return asyncio.run(factory())


def build_orchestrator(settings: Settings) -> ActionOrchestrator:
    """Wire the services for the given settings."""
    adapter = LocalStoreAdapter(JsonFileStore(settings.store_file))

    def client_factory() -> BookingClient:
        return BookingClient(settings.api_base, timeout=settings.http_timeout)

    def inventory_loader() -> List[EventItem]:
        return get_event_inventory(settings.events_file)

    return ActionOrchestrator(adapter, client_factory, inventory_loader, SessionStateTarget())


def _get_settings() -> Settings:
    if SETTINGS_STATE not in st.session_state:
        st.session_state[SETTINGS_STATE] = load_settings()
    return st.session_state[SETTINGS_STATE]


def _get_orchestrator() -> ActionOrchestrator:
    if ORCHESTRATOR_STATE not in st.session_state:
        st.session_state[ORCHESTRATOR_STATE] = build_orchestrator(_get_settings())
    return st.session_state[ORCHESTRATOR_STATE]


def _report_card_html(metric_key: str, value: Optional[Union[int, str]]) -> str:
    """Build one report card; value None renders a dash."""
    shown = "—" if value is None else value
    return html_block(
        f"""
        <div class="report-card" data-metric="{metric_key}">
            <h3 class="report-card__title">{CARD_TITLES[metric_key]}</h3>
            <p class="report-card__value">{shown}</p>
        </div>
        """
    )


def _detailed_report_html(report: DetailedReport) -> str:
    """Render the three detailed listings."""
    return html_block(
        f"""
        <h4>Bookings per Sport</h4>
        {html_list(sport_lines(report))}
        <h4>Upcoming Events</h4>
        {html_list(report.events)}
        <h4>Registered Participants</h4>
        {html_list(participant_lines(report))}
        """
    )


def _set_feedback(result: ActionResult) -> None:
    st.session_state[FEEDBACK_STATE] = {
        "type": "success" if result.success else "error",
        "message": result.message,
    }


def _reset_inputs(keys) -> None:
    for key in keys:
        st.session_state.pop(key, None)


def _preselect_sport(sport: str) -> None:
    st.session_state["booking_sport"] = sport


def _render_feedback() -> None:
    feedback = st.session_state.pop(FEEDBACK_STATE, None)
    if not feedback:
        return
    if feedback.get("type") == "success":
        st.success(feedback.get("message", ""))
    else:
        st.error(feedback.get("message", ""))


def _render_report_cards(target: SessionStateTarget) -> None:
    cols = st.columns(len(METRIC_KEYS), gap="medium")
    for col, metric_key in zip(cols, METRIC_KEYS):
        with col:
            st.markdown(
                _report_card_html(metric_key, target.get_slot(metric_key)),
                unsafe_allow_html=True,
            )


def _render_sport_picker(sports: List[str]) -> None:
    st.markdown("### Sports")
    cols = st.columns(len(sports) or 1, gap="small")
    for col, sport in zip(cols, sports):
        with col:
            st.button(
                f"Book {sport}",
                key=f"sport_pick_{sport}",
                use_container_width=True,
                on_click=_preselect_sport,
                args=(sport,),
            )


def _render_booking_form(orchestrator: ActionOrchestrator, sports: List[str]) -> None:
    st.markdown("### Book a Slot")
    with st.form("booking_form", clear_on_submit=False):
        sport = st.selectbox("Sport", sports, index=None, key="booking_sport", placeholder="Choose a sport")
        date_value = st.date_input("Date", value=None, key="booking_date")
        time_value = st.time_input("Time", value=None, key="booking_time", step=1800)
        submitted = st.form_submit_button("Book Slot", type="primary", use_container_width=True)

    if not submitted:
        return

    form = {
        "sport": sport or "",
        "date": date_value.isoformat() if date_value else "",
        "time": time_value.strftime("%H:%M") if time_value else "",
    }
    result = _run_async(lambda: orchestrator.submit_booking(form))
    _set_feedback(result)
    if result.reset_form:
        _reset_inputs(BOOKING_KEYS)
    st.rerun()


def _render_registration_form(orchestrator: ActionOrchestrator, events: List[EventItem]) -> None:
    st.markdown("### Register for an Event")
    titles = [item.title for item in events]
    with st.form("registration_form", clear_on_submit=False):
        event = st.selectbox("Event", titles, index=None, key="registration_event", placeholder="Choose an event")
        name = st.text_input("Name", key="registration_name")
        email = st.text_input("Email", key="registration_email")
        phone = st.text_input("Contact number", key="registration_phone", max_chars=10)
        submitted = st.form_submit_button("Register", type="primary", use_container_width=True)

    if not submitted:
        return

    form = {"event": event or "", "name": name, "email": email, "phone": phone}
    result = _run_async(lambda: orchestrator.submit_registration(form))
    _set_feedback(result)
    if result.reset_form:
        _reset_inputs(REGISTRATION_KEYS)
    st.rerun()


def _render_detailed_report(orchestrator: ActionOrchestrator) -> None:
    report = _run_async(orchestrator.build_detailed_report)
    content = _detailed_report_html(report)

    if DIALOG_DECORATOR:
        @DIALOG_DECORATOR("Detailed Reports")
        def _dialog():
            st.markdown(content, unsafe_allow_html=True)

        _dialog()
    else:
        with st.expander("Detailed Reports", expanded=True):
            st.markdown(content, unsafe_allow_html=True)
    st.session_state[DETAIL_DIALOG_FLAG] = False


def render_dashboard():
    """Render the main dashboard page."""
    orchestrator = _get_orchestrator()
    target = orchestrator.target

    if REPORT_STATE not in st.session_state:
        st.session_state[REPORT_STATE] = {}
        _run_async(orchestrator.refresh_reports)

    _render_feedback()

    st.markdown("## Reports")
    _render_report_cards(target)

    action_cols = st.columns([1, 1, 2], gap="small")
    with action_cols[0]:
        if st.button("🔄 Refresh", key="reports_refresh", use_container_width=True):
            _run_async(orchestrator.refresh_reports)
            st.rerun()
    with action_cols[1]:
        if st.button("View Detailed Reports", key="view_detailed_reports", use_container_width=True):
            st.session_state[DETAIL_DIALOG_FLAG] = True

    events = orchestrator.inventory_loader()
    sports = get_sports(_get_settings().events_file)

    _render_sport_picker(sports)

    form_cols = st.columns(2, gap="large")
    with form_cols[0]:
        _render_booking_form(orchestrator, sports)
    with form_cols[1]:
        _render_registration_form(orchestrator, events)

    if st.session_state.get(DETAIL_DIALOG_FLAG):
        _render_detailed_report(orchestrator)
