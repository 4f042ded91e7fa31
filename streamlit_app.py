from datetime import date

import streamlit as st
from streamlit.errors import StreamlitSecretNotFoundError

from calculator import WINDOW_DAYS, MalformedIntervalError, calculate_rolling_absences
from loader import AbsenceFileError, parse_upload


def _dev_details_enabled() -> bool:
    """Read SHOW_DEV_DETAILS from .streamlit/secrets.toml; off when no secrets file exists."""
    try:
        return bool(st.secrets.get("SHOW_DEV_DETAILS", False))
    except (StreamlitSecretNotFoundError, FileNotFoundError):
        return False


SHOW_DEV_DETAILS = _dev_details_enabled()

PERIODS_KEY = "absence_periods"
EARLIEST_DATE = date(1900, 1, 1)


def format_date_uk(d: date) -> str:
    """Format date with weekday in UK style."""
    return d.strftime("%A %d/%m/%Y")


def _show_exception(e: Exception) -> None:
    if SHOW_DEV_DETAILS:
        with st.expander("Details (developer)"):
            st.exception(e)


# -------------------------
# PAGE CONFIG
# -------------------------
st.set_page_config(page_title="Rolling Absence Calculator", page_icon="📅")

# -------------------------
# GLOBAL CSS
# -------------------------
st.markdown(
    """
    <style>
    /* Hide Streamlit's "Press Enter to submit form" hint */
    div[data-testid="InputInstructions"] {
        display: none !important;
    }

    /* Narrow + centre page */
    div.block-container {
        max-width: 880px;
        padding-top: 2.2rem;
    }

    div[data-testid="stButton"] > button {
        border-radius: 999px !important;
        padding: 0.65rem 1rem !important;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

if PERIODS_KEY not in st.session_state:
    st.session_state[PERIODS_KEY] = []

st.title("📅 Rolling Absence Calculator")
st.caption(f"Absence days in the {WINDOW_DAYS}-day window ending on each absence period.")

st.markdown(
    f"""
For every absence period you enter, this tool looks at the **{WINDOW_DAYS} days**
ending on that period's **end date** and counts the absence days inside it.

- Both start and end dates **count** as absence days.
- Overlapping periods, or periods separated by a **single day**, are treated as one
  continuous absence, so no day is counted twice.
- Periods are kept for this browser session only.
"""
)


# -------------------------
# 1. ENTERED PERIODS
# -------------------------
st.header("1. Your absence periods")

periods = st.session_state[PERIODS_KEY]

if periods:
    for idx, (start, end) in enumerate(periods, start=1):
        col_period, col_btn = st.columns([6, 1])

        with col_period:
            st.markdown(f"**Period {idx}:** {format_date_uk(start)} → {format_date_uk(end)}")
            st.write(f"- Days: **{(end - start).days + 1}**")

        with col_btn:
            if st.button("Delete", key=f"del_{idx}"):
                del periods[idx - 1]
                st.rerun()

    if st.button("Clear all"):
        st.session_state[PERIODS_KEY] = []
        st.rerun()
else:
    st.info("No absence periods yet.")


# -------------------------
# 2. ADD PERIODS
# -------------------------
st.header("2. Add absence periods")

with st.form("add_period_form"):
    col1, col2 = st.columns(2)

    start = col1.date_input(
        "Absence start date", value=date.today(), min_value=EARLIEST_DATE, format="YYYY-MM-DD"
    )
    end = col2.date_input(
        "Absence end date", value=date.today(), min_value=EARLIEST_DATE, format="YYYY-MM-DD"
    )

    submitted = st.form_submit_button("Add period")

    if submitted:
        if end < start:
            st.error("End date must be on or after the start date.")
        else:
            periods.append((start, end))
            st.success("Period added.")
            st.rerun()

uploaded = st.file_uploader(
    'Or import a JSON file: [{"start_date": "YYYY-MM-DD", "end_date": "YYYY-MM-DD"}, ...]',
    type=["json"],
)
if uploaded is not None and st.button("Import periods from file"):
    try:
        imported = parse_upload(uploaded.getvalue())
    except AbsenceFileError as e:
        st.error(f"Failed to process file '{uploaded.name}'. Reason: {e}")
        _show_exception(e)
    else:
        periods.extend(imported)
        st.success(f"Imported {len(imported)} period(s).")
        st.rerun()


# -------------------------
# 3. RESULTS
# -------------------------
st.header(f"3. Absence days per {WINDOW_DAYS}-day window")

max_days = st.number_input(
    "Maximum absence days allowed in any window (0 = no limit)",
    min_value=0,
    value=0,
    step=1,
)

if periods:
    try:
        results = calculate_rolling_absences(periods)
    except MalformedIntervalError as e:
        st.error(str(e))
        _show_exception(e)
        st.stop()

    for idx, result in enumerate(results, start=1):
        st.markdown(
            f"**Period {idx}:** {format_date_uk(result.absence_start)} → "
            f"{format_date_uk(result.absence_end)}"
        )
        st.write(
            f"- Window: {format_date_uk(result.window_start)} → {format_date_uk(result.window_end)}"
        )
        if max_days and result.exceeds(max_days):
            st.error(f"- Absence days in window: **{result.total_days_in_window}** / {max_days}")
        elif max_days:
            st.write(f"- Absence days in window: **{result.total_days_in_window}** / {max_days}")
        else:
            st.write(f"- Absence days in window: **{result.total_days_in_window}**")
else:
    st.info("Add absence periods to see your results.")

st.markdown("---")
st.caption("This tool is for information only and does not constitute legal advice.")
