import html

import streamlit as st
import pandas as pd
import plotly.express as px

from claimboard.config import DASHBOARD_TITLE, DEMO_ROSTER, PODIUM, RECENT_CLAIMS_LIMIT
from claimboard.core.ranking import claims_frame, ranking_frame, split_podium
from claimboard.service import LeaderboardService

# --- Page Configuration ---
st.set_page_config(
    page_title="Claimboard",
    page_icon="🏆",
    layout="centered",
    initial_sidebar_state="collapsed"
)

# --- Design System ---
ACCENT_COLORS = {
    "primary": "#FF6B6B",
    "success": "#10B981",
    "danger": "#EF4444",
    "muted": "rgba(128, 128, 128, 0.4)",
}

# --- Leaderboard Flourishes ---
RANK_ICONS = {
    1: {"icon": "👑", "color": PODIUM[1][1]},
    2: {"icon": "🥈", "color": PODIUM[2][1]},
    3: {"icon": "🥉", "color": PODIUM[3][1]},
}

# Podium columns are laid out 2nd, 1st, 3rd
PODIUM_ORDER = (1, 0, 2)


def get_service() -> LeaderboardService:
    """The session's LeaderboardService, seeded with the demo roster on first load."""
    if "leaderboard" not in st.session_state:
        st.session_state.leaderboard = LeaderboardService.from_roster(DEMO_ROSTER)
    return st.session_state.leaderboard


def get_rank_badge_html(rank):
    """Generate HTML for a rank badge with icon and styling."""
    if rank not in RANK_ICONS:
        return f'<span style="font-weight:600;">#{rank}</span>'

    info = RANK_ICONS[rank]
    badge_style = f'display:inline-flex;align-items:center;gap:0.3rem;font-weight:700;color:{info["color"]};'
    return f'<span style="{badge_style}"><span style="font-size:1.2rem;">{info["icon"]}</span>#{rank}</span>'


def notify(result):
    """Show an ActionResult from the service."""
    if result.ok:
        st.toast(f"**{result.title}** {result.message}", icon="✅")
    else:
        st.error(f"**{result.title}** {result.message}")


def generate_podium_html(entry):
    p = entry.participant
    color = entry.tier.color if entry.tier else ACCENT_COLORS["muted"]
    size = "5rem" if entry.rank == 1 else "4rem"
    avatar_style = (
        f"width:{size};height:{size};margin:0 auto 0.5rem;border-radius:50%;border:4px solid {color};"
        "display:flex;align-items:center;justify-content:center;font-size:2rem;"
    )
    crown = '<div style="font-size:1.5rem;">👑</div>' if entry.rank == 1 else ""
    return (
        f'<div style="text-align:center;">{crown}'
        f'<div style="{avatar_style}">{p.avatar}</div>'
        f'<div>{get_rank_badge_html(entry.rank)}</div>'
        f'<div style="font-weight:600;">{html.escape(p.name)}</div>'
        f'<div style="font-size:1.2rem;font-weight:700;">{p.score:,}</div>'
        '</div>'
    )


def generate_ranking_rows(entries):
    """HTML rows for everyone below the podium."""
    if not entries:
        return ""

    row_style = "display:flex;justify-content:space-between;align-items:center;padding:0.75rem 0;border-bottom:1px solid rgba(128,128,128,0.2);"
    rows = []
    for entry in entries:
        p = entry.participant
        rows.append(
            f'<div style="{row_style}">'
            f'<div style="display:flex;align-items:center;gap:0.75rem;">'
            f'<span style="width:2rem;text-align:center;font-weight:700;">{entry.rank}</span>'
            f'<span style="font-size:1.5rem;">{p.avatar}</span>'
            f'<span><b>{html.escape(p.name)}</b><br><small>Rank #{entry.rank}</small></span>'
            '</div>'
            f'<span style="font-weight:700;">{p.score:,} 🏆</span>'
            '</div>'
        )
    return "".join(rows)


def render_controls(service):
    participants = service.participants()
    labels = {p.participant_id: f"{p.avatar} {p.name}" for p in participants}

    col_select, col_claim = st.columns([3, 1])
    with col_select:
        selected = st.selectbox(
            "Select a user",
            options=list(labels),
            format_func=labels.get,
            index=None,
            placeholder="Select a user",
            label_visibility="collapsed",
            key="selected_participant",
        )
    with col_claim:
        if st.button("⚡ Claim", disabled=selected is None, use_container_width=True):
            notify(service.submit_claim(selected))

    with st.expander("➕ Add New User"):
        with st.form("add_user", clear_on_submit=True):
            name = st.text_input("Enter user name")
            if st.form_submit_button("Add User"):
                result = service.submit_registration(name)
                if result.ok:
                    # Select box above was built before this registration;
                    # show the notice on the rerun instead
                    st.session_state.pending_notice = result
                    st.rerun()
                notify(result)


def render_scores_chart(participants):
    df = ranking_frame(participants)
    if df.empty:
        return
    df['tier'] = df['tier'].fillna("other")
    color_map = {name: color for name, color in PODIUM.values()}
    color_map["other"] = ACCENT_COLORS["primary"]
    fig = px.bar(df, x="name", y="score", color="tier", color_discrete_map=color_map)
    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        xaxis_title="",
        yaxis_title="Points",
        showlegend=False,
        margin=dict(l=0, r=0, t=10, b=0),
    )
    st.plotly_chart(fig, use_container_width=True)


def render_recent_claims(claims):
    if not claims:
        return
    st.subheader("⚡ Recent Claims")
    df = claims_frame(claims)
    df['time'] = pd.to_datetime(df['timestamp']).dt.strftime('%H:%M:%S')
    for _, row in df.iterrows():
        st.markdown(
            f"{html.escape(row['participant_name'])} claimed **{row['amount']} points** · {row['time']}"
        )


def main():
    service = get_service()

    st.title(f"🏆 {DASHBOARD_TITLE}")
    if "pending_notice" in st.session_state:
        notify(st.session_state.pop("pending_notice"))
    render_controls(service)

    # Read after the actions so the view reflects this run's claim/registration
    snapshot = service.snapshot(RECENT_CLAIMS_LIMIT)
    podium, rest = split_podium(snapshot.ranked)

    if podium:
        for col, idx in zip(st.columns(3), PODIUM_ORDER):
            with col:
                st.markdown(generate_podium_html(podium[idx]), unsafe_allow_html=True)

    st.markdown(generate_ranking_rows(rest), unsafe_allow_html=True)

    with st.expander("📊 Score Chart"):
        render_scores_chart([entry.participant for entry in snapshot.ranked])

    render_recent_claims(snapshot.recent_claims)


if __name__ == "__main__":
    main()
