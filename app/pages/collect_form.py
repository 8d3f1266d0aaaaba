from dataclasses import asdict

import streamlit as st
from relief.api import ReliefApiClient
from relief.config import configure_logging, load_config
from relief.draft import (
    BOOL_FIELDS, FORM_SECTIONS, LIVING_OPTIONS, YES_NO_OPTIONS,
    living_label, new_draft, set_field,
)
from relief.readiness import CHECK_LABELS, completion_checklist
from relief.submit import SubmissionGuard, submit_assessment
from relief.summary import summary_tags

cfg = load_config()
configure_logging(cfg)

st.set_page_config(page_title="Household Assessment • Flood Relief", layout="wide")
st.title("📝 Household Assessment Form")
st.caption("Flood-Relief Needs Collection • Today")


@st.cache_resource
def get_client():
    return ReliefApiClient.from_config(cfg)


client = get_client()

TEXT_AREAS = ("issues_returning_to_school", "illnesses_after_flood", "notes")
PLACEHOLDERS = {
    "name": "Full name",
    "contact_number": "07X XXXXXXX",
    "previous_job_business": "e.g., Daily wage worker, shop owner...",
    "issues_returning_to_school": "Write a short note (optional)",
    "illnesses_after_flood": "e.g., fever, cough, skin issues...",
    "priority_1": "Most urgent need",
    "priority_2": "Second urgent need",
    "priority_3": "Third urgent need",
    "notes": "Any additional notes",
}
CHOICES = {
    "living_status": [""] + [v for v, _ in LIVING_OPTIONS],
    "enough_daily_food": [""] + [v for v, _ in YES_NO_OPTIONS],
}
CHOICE_LABELS = {**dict(LIVING_OPTIONS), **dict(YES_NO_OPTIONS), "": "Select"}


def _wkey(name):
    return f"field_{name}"


def sync_widgets(since=None):
    """Push draft values into their widgets; with `since`, only the fields that differ from it."""
    for name, value in asdict(st.session_state.draft).items():
        if since is None or getattr(since, name) != value:
            st.session_state[_wkey(name)] = value


def on_change(name):
    # Other widgets changed in the same run still have their own callbacks pending
    before = st.session_state.draft
    st.session_state.draft = set_field(before, name, st.session_state[_wkey(name)])
    sync_widgets(since=before)


def flash(kind, message):
    st.session_state.flash = (kind, message)


def reset_form():
    st.session_state.draft = new_draft()
    st.session_state.review_open = False
    sync_widgets()
    flash("success", "Form cleared.")


def request_submit():
    # The save itself runs in the script body so this run renders Submit disabled
    st.session_state.guard.claim()


def apply_outcome(outcome):
    flash("success" if outcome.ok else "error", outcome.message)
    if outcome.ok:
        st.session_state.draft = outcome.draft
        st.session_state.review_open = False
        sync_widgets()


def open_review(flag=True):
    st.session_state.review_open = flag


if "draft" not in st.session_state:
    st.session_state.draft = new_draft()
    st.session_state.guard = SubmissionGuard()
    st.session_state.review_open = False
    st.session_state.flash = None
    st.session_state.outcome = None
    sync_widgets()

# Results of the previous run's save are applied before any widget is created
if st.session_state.outcome is not None:
    apply_outcome(st.session_state.outcome)
    st.session_state.outcome = None

if st.session_state.flash:
    kind, message = st.session_state.flash
    (st.success if kind == "success" else st.error)(message)
    st.session_state.flash = None


def render_field(name, label):
    key = _wkey(name)
    if name in BOOL_FIELDS:
        st.checkbox(label, key=key, on_change=on_change, args=(name,))
    elif name in CHOICES:
        st.radio(label, CHOICES[name], key=key, horizontal=True,
                 format_func=lambda v: CHOICE_LABELS[v], on_change=on_change, args=(name,))
    elif name == "family_members":
        st.number_input(label, min_value=0, step=1, key=key, on_change=on_change, args=(name,))
    elif name in TEXT_AREAS:
        st.text_area(label, key=key, placeholder=PLACEHOLDERS.get(name), on_change=on_change, args=(name,))
    else:
        st.text_input(label, key=key, placeholder=PLACEHOLDERS.get(name), on_change=on_change, args=(name,))


draft = st.session_state.draft
busy = st.session_state.guard.busy
checklist = completion_checklist(draft)
tags = summary_tags(draft)

form_col, side_col = st.columns([2, 1])

with form_col:
    for title, groups in FORM_SECTIONS:
        with st.container(border=True):
            st.subheader(title)
            for group_label, items in groups:
                # single-field groups already carry their own widget label
                if group_label and len(items) > 1:
                    st.caption(group_label)
                cols = st.columns(2) if len(items) > 1 else [st.container()]
                for i, (name, label) in enumerate(items):
                    with cols[i % len(cols)]:
                        render_field(name, label)

    b1, b2 = st.columns(2)
    b1.button("Review & Submit", on_click=open_review, use_container_width=True, key="review_bottom")
    b2.button("Reset", on_click=reset_form, disabled=busy, use_container_width=True, key="reset_bottom")

with side_col:
    with st.container(border=True):
        st.subheader(f"Review {checklist['complete_count']}/{checklist['total_count']}")
        for key, label in CHECK_LABELS.items():
            st.write(("✅ " if checklist[key] else "⬜️ ") + label)

        if tags:
            st.caption("Quick summary")
            st.write(" · ".join(tags))

        st.button("Saving..." if busy else "Review & Submit", on_click=open_review,
                  disabled=busy, use_container_width=True, key="review_side")
        st.button("Reset form", on_click=reset_form, disabled=busy, use_container_width=True, key="reset_side")

    st.caption("Tip: Keep entries short and consistent (e.g., “Water”, “Bedding”, “Medicine”) for clean stats.")

    if st.session_state.review_open:
        with st.container(border=True):
            st.subheader("Review & Submit")
            st.write("**Household**")
            st.write(f"Name: {draft.name or '-'}")
            st.write(f"Contact: {draft.contact_number or '-'}")
            st.write(f"Family members: {draft.family_members}")
            st.write(f"Living: {living_label(draft.living_status)}")

            if tags:
                st.write("**Quick Summary**")
                st.write(" · ".join(tags))

            st.write("**Top Priorities**")
            for p in (draft.priority_1, draft.priority_2, draft.priority_3):
                st.write(f"- {p or '-'}")

            r1, r2 = st.columns(2)
            r1.button("Back", on_click=open_review, args=(False,), disabled=busy,
                      use_container_width=True, key="review_back")
            r2.button("Saving..." if busy else "Submit", on_click=request_submit, disabled=busy, key="submit",
                      type="primary", use_container_width=True)

if busy:
    with st.spinner("Saving..."):
        st.session_state.outcome = submit_assessment(st.session_state.draft, client, st.session_state.guard)
    st.rerun()
