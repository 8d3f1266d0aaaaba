import pandas as pd
import streamlit as st
from relief.api import ReliefApiClient
from relief.config import configure_logging, load_config
from relief.dashboard import (
    DashboardData, bar_percent, fetch_dashboard, filter_rows,
    max_need, needs_breakdown, stat_cards, top_priorities,
)
from relief.export import XLSX_MIME, prepare_export
from relief.formatting import fmt_datetime, fmt_text, fmt_yes_no

cfg = load_config()
configure_logging(cfg)
event = cfg["event"]

st.set_page_config(page_title="Flood Relief Dashboard", layout="wide")


@st.cache_resource
def get_client():
    return ReliefApiClient.from_config(cfg)


client = get_client()

if "dashboard" not in st.session_state:
    st.session_state.dashboard = None
    st.session_state.loading = True
    st.session_state.fetch_errors = []
if "export_file" not in st.session_state:
    st.session_state.export_file = None


def start_refresh():
    st.session_state.loading = True


head_l, head_r = st.columns([4, 1])
with head_l:
    st.title(f"{event['title']} Dashboard")
    st.caption("Live overview + entries collected today")
with head_r:
    st.button("Refreshing..." if st.session_state.loading else "Refresh", on_click=start_refresh,
              disabled=st.session_state.loading, use_container_width=True, key="refresh")

if st.session_state.loading:
    # One spinner covers both requests until both have settled
    with st.spinner("Refreshing..."):
        fetched = fetch_dashboard(client, previous=st.session_state.dashboard)
    st.session_state.dashboard = fetched
    st.session_state.fetch_errors = fetched.errors
    st.session_state.loading = False
    st.rerun()

for msg in st.session_state.fetch_errors:
    st.error(msg)
st.session_state.fetch_errors = []

data: DashboardData = st.session_state.dashboard or DashboardData()
stats = data.stats

# Stat cards
cards = stat_cards(stats)
for start in range(0, len(cards), 4):
    cols = st.columns(4)
    for col, card in zip(cols, cards[start:start + 4]):
        with col:
            st.metric(card["label"], card["value"])

st.divider()

# Charts
c1, c2 = st.columns(2)
with c1:
    st.subheader("Immediate Needs Breakdown")
    needs = needs_breakdown(stats)
    top = max_need(needs)
    for n in needs:
        st.progress(bar_percent(n["value"], top) / 100, text=f"{n['label']}: {n['value']}")
    st.caption("Shows how many households selected each immediate need.")

with c2:
    st.subheader("Top Priorities (Top 5)")
    priorities = top_priorities(stats)
    if not priorities:
        st.write("No priorities recorded yet.")
    else:
        for p in priorities:
            pc1, pc2 = st.columns([4, 1])
            pc1.write(fmt_text(p["priority"]))
            pc2.write(f"**{p['count']}**")
    st.caption("Tip: keep priority words consistent (e.g., “Water”, “Food”, “Medicine”) for cleaner charts.")

st.divider()

# Today's entries
st.subheader("Today's Entries")
search = st.text_input("Search name, contact, priority or token", key="row_search")
rows = filter_rows(data.rows, search)

if not rows:
    st.info("No entries match." if data.rows else "No entries collected yet.")
else:
    table = pd.DataFrame([{
        "Token": r.get("token_number") or "-",
        "Name": r.get("name"),
        "Contact": r.get("contact_number"),
        "Family members": r.get("family_members"),
        "Priority 1": fmt_text(r.get("priority_1")),
        "Priority 2": fmt_text(r.get("priority_2")),
        "Priority 3": fmt_text(r.get("priority_3")),
        "Collected at": fmt_datetime(r.get("collected_at")),
    } for r in rows])
    st.dataframe(table, use_container_width=True, hide_index=True)

    picked = st.selectbox(
        "View details",
        options=[None] + list(range(len(rows))),
        format_func=lambda i: "Select an entry" if i is None
        else f"{rows[i].get('token_number') or '-'} • {rows[i].get('name') or '-'}",
    )
    if picked is not None:
        r = rows[picked]
        with st.container(border=True):
            st.write("**Household Assessment Details**")
            d1, d2, d3, d4, d5 = st.columns(5)
            d1.metric("Token", r.get("token_number") or "-")
            d2.metric("Name", r.get("name") or "-")
            d3.metric("Contact", r.get("contact_number") or "-")
            d4.metric("Family members", r.get("family_members") or 0)
            d5.metric("Collected at", fmt_datetime(r.get("collected_at")))

            st.write("**Priorities**")
            for key in ("priority_1", "priority_2", "priority_3"):
                st.write(f"- {fmt_text(r.get(key))}")

            if r.get("notes"):
                st.write("**Notes**")
                st.write(r["notes"])

            st.write("**Key Indicators**")
            k1, k2 = st.columns(2)
            k1.write(f"Structural damage: {fmt_yes_no(r.get('house_structurally_damaged'))}")
            k1.write(f"Furniture lost: {fmt_yes_no(r.get('furniture_lost'))}")
            k1.write(f"Enough daily food: {fmt_text(r.get('enough_daily_food'))}")
            k2.write(f"Clean drinking water: {fmt_yes_no(r.get('clean_drinking_water_available'))}")
            k2.write(f"No support yet: {fmt_yes_no(r.get('support_none'))}")
            k2.write(f"Unable to work: {fmt_yes_no(r.get('unable_to_work_currently'))}")

st.divider()

# Export
st.subheader("Download Collected Information")
st.write(f"Download all household assessments for **{event['date']}** as an Excel file.")

export_file = st.session_state.export_file
if export_file is not None and export_file.released:
    st.session_state.export_file = export_file = None

if export_file is None:
    if st.button("Prepare Excel", key="prepare_export"):
        with st.spinner("Preparing..."):
            export_file, err = prepare_export(client, event["date"])
        if err:
            st.error(err)
        else:
            st.session_state.export_file = export_file
            st.rerun()
else:
    st.download_button(
        "Download Excel",
        data=export_file.content,
        file_name=export_file.name,
        mime=XLSX_MIME,
        on_click=export_file.release,
    )
