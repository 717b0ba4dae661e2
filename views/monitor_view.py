import streamlit as st

import ui
from use_cases import hostel_flow
from views import warden_view


def render_early_absences(ctx):
    st.header("🎖️ Early Absence Requests")
    st.caption("Requests submitted before the cutoff time. As monitor you approve or reject them.")
    ui.show_flash()
    warden_view.render_absence_queue(
        ctx,
        hostel_flow.early_absence_requests(ctx),
        hostel_flow.approve_early_absence,
        hostel_flow.reject_early_absence,
        "early",
    )
