#!/usr/bin/env python3
from dataclasses import asdict

import pandas as pd
import plotly.express as px
import streamlit as st

from election_dashboard.analytics import format_number, format_percentage, summarize
from election_dashboard.config import ConfigError, load_config, query_settings_from_env
from election_dashboard.context import build_context
from election_dashboard.enrichment import DEFAULT_TABLES
from election_dashboard.export import CONSTITUENCY_CSV_COLUMNS, constituency_table_rows
from election_dashboard.loader import DatasetLoadError, load_dataset
from election_dashboard.query import EXAMPLE_QUESTIONS, ElectionQueryClient, QueryError, Turn
from election_dashboard.views import (
    ALL_PARTIES,
    closest_contests,
    compare_candidates,
    compare_constituencies,
    compare_parties,
    compare_states,
    filter_by_party,
    filter_constituencies,
    largest_margins,
    page_count,
    paginate,
    seat_change_summary,
    seat_changes,
    sort_constituencies,
    state_party_breakdown,
    summarize_constituencies,
    with_others,
)

st.set_page_config(page_title="Lok Sabha 2024 Dashboard", layout="wide")

tables = DEFAULT_TABLES
try:
    config = load_config()
except ConfigError as e:
    st.error(f"Invalid dashboard config: {e}")
    st.stop()


@st.cache_data(show_spinner=False)
def load_data():
    return load_dataset(config)


def pick_pair(label: str, options: list[str]) -> tuple[str, str]:
    a, b = st.columns(2)
    first = a.selectbox(f"{label} 1", options, index=0 if options else None)
    second = b.selectbox(f"{label} 2", options, index=1 if len(options) > 1 else 0 if options else None)
    return first or "", second or ""


try:
    with st.spinner("Loading results..."):
        dataset = load_data()
except DatasetLoadError as e:
    st.error(f"Could not load election results: {e}")
    st.stop()

summary = summarize(dataset.constituencies, dataset.detailed, tables, config.none_of_the_above, config.reference_parties)

party_df = pd.DataFrame([asdict(s) for s in summary.party_stats])
if not party_df.empty:
    party_df["shortName"] = party_df["party"].map(tables.short_name)
vote_df = pd.DataFrame([asdict(s) for s in summary.vote_share])
if not vote_df.empty:
    vote_df["shortName"] = vote_df["party"].map(tables.short_name)
    vote_df["share"] = vote_df["percentage"].map(format_percentage)
color_map = {s.party: s.color for s in summary.party_stats + summary.vote_share}

st.title("Lok Sabha 2024 Results Dashboard")
st.caption("Source: Election Commission of India result sheets")

col1, col2, col3, col4 = st.columns(4)
col1.metric("Constituencies", f"{summary.total_constituencies:,}")
col2.metric("Candidates", f"{summary.total_candidates:,}")
col3.metric("Votes counted", format_number(summary.total_votes))
col4.metric("Parties winning seats", f"{len(summary.parties):,}")

tab_overview, tab_party, tab_state, tab_const, tab_compare, tab_ask = st.tabs(
    ["Overview", "Parties", "States", "Constituencies", "Compare", "Ask"]
)

with tab_overview:
    for insight in summary.insights:
        change = f" ({insight.change:+.1f}%)" if insight.change is not None else ""
        st.info(f"**{insight.title}**: {insight.description}{change}")

    top_n = st.slider("Top N parties", 5, 30, config.top_n)
    pie = pd.DataFrame([asdict(s) for s in with_others(summary.party_stats, top_n, tables)])
    if not pie.empty:
        fig_pie = px.pie(pie, names="party", values="seats", color="party", color_discrete_map=color_map, title="Seat share")
        st.plotly_chart(fig_pie, use_container_width=True)

    changes = seat_changes(summary.party_stats, tables)
    totals = seat_change_summary(changes)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Parties gaining seats", totals.gainers)
    c2.metric("Parties losing seats", totals.losers)
    c3.metric("Biggest gainer", totals.biggest_gainer.short_name if totals.biggest_gainer else "N/A")
    c4.metric("Biggest loser", totals.biggest_loser.short_name if totals.biggest_loser else "N/A")
    change_df = pd.DataFrame([asdict(c) for c in changes])
    if not change_df.empty:
        fig_change = px.bar(change_df.head(12), x="short_name", y="change", color="party", color_discrete_map=color_map, title="Seat change vs 2019")
        fig_change.update_layout(showlegend=False, xaxis_title="Party", yaxis_title="Seats")
        st.plotly_chart(fig_change, use_container_width=True)

with tab_party:
    if party_df.empty:
        st.write("No constituency results loaded.")
    else:
        fig_seats = px.bar(
            party_df.head(config.top_n * 2),
            x="shortName",
            y="seats",
            color="party",
            color_discrete_map=color_map,
            text="seats",
            title="Seats won",
        )
        fig_seats.update_layout(showlegend=False, xaxis_title="Party", yaxis_title="Seats")
        st.plotly_chart(fig_seats, use_container_width=True)
        st.dataframe(party_df[["party", "shortName", "seats", "percentage", "aggregate_margin_votes"]], use_container_width=True, hide_index=True)

    if not vote_df.empty:
        fig_votes = px.bar(
            vote_df.head(config.top_n * 2),
            x="shortName",
            y="votes",
            color="party",
            color_discrete_map=color_map,
            title="Votes polled (all candidates, NOTA excluded)",
        )
        fig_votes.update_layout(showlegend=False, xaxis_title="Party", yaxis_title="Votes")
        st.plotly_chart(fig_votes, use_container_width=True)
        st.dataframe(vote_df[["party", "shortName", "votes", "share"]], use_container_width=True, hide_index=True)

with tab_state:
    state_df = pd.DataFrame(
        [{"state": s.state, "totalSeats": s.total_seats, "totalVotes": s.total_votes, "parties": len(s.parties)} for s in summary.state_stats]
    )
    if state_df.empty:
        st.write("No detailed results loaded.")
    else:
        fig_states = px.bar(state_df.head(20), x="state", y="totalSeats", title="Seats by state")
        st.plotly_chart(fig_states, use_container_width=True)

        selected_state = st.selectbox("State", summary.states)
        breakdown = pd.DataFrame(state_party_breakdown(summary.state_stats, selected_state), columns=["party", "seats"])
        fig_breakdown = px.bar(breakdown, x="party", y="seats", color="party", color_discrete_map=color_map, title=f"Seats in {selected_state}")
        fig_breakdown.update_layout(showlegend=False)
        st.plotly_chart(fig_breakdown, use_container_width=True)

        prior = tables.prior_state_result(selected_state)
        if prior is not None:
            st.caption(f"2019: {prior.total_seats} seats, BJP {prior.bjp_seats}, INC {prior.inc_seats}")

with tab_const:
    party = st.selectbox("Party", [ALL_PARTIES] + summary.parties)
    by_party = filter_by_party(dataset.constituencies, party)
    stats = summarize_constituencies(by_party)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Constituencies", f"{stats.total_seats:,}")
    c2.metric("Average margin", format_number(round(stats.avg_margin)))
    c3.metric("Closest contest", format_number(stats.closest_contest.margin) if stats.closest_contest else "N/A")
    c4.metric("Biggest victory", format_number(stats.biggest_victory.margin) if stats.biggest_victory else "N/A")

    query = st.text_input("Search constituency, party or candidate")
    sort_by = st.selectbox("Sort by", ["margin", "constituency", "leading_party"])
    descending = st.checkbox("Descending", value=True)
    rows = sort_constituencies(filter_constituencies(by_party, query), sort_by, descending)
    pages = max(page_count(len(rows), config.page_size), 1)
    page = st.number_input("Page", min_value=1, max_value=pages, value=1)
    st.caption(f"{len(rows):,} constituencies")
    st.dataframe(pd.DataFrame([asdict(r) for r in paginate(rows, int(page), config.page_size)]), use_container_width=True, hide_index=True)
    export_df = pd.DataFrame(constituency_table_rows(rows), columns=CONSTITUENCY_CSV_COLUMNS)
    st.download_button("Export CSV", export_df.to_csv(index=False), file_name="constituency_results.csv", mime="text/csv")

    left, right = st.columns(2)
    with left:
        st.write("Closest contests")
        st.dataframe(pd.DataFrame([asdict(r) for r in closest_contests(by_party, config.top_n)]), use_container_width=True, hide_index=True)
    with right:
        st.write("Largest margins")
        st.dataframe(pd.DataFrame([asdict(r) for r in largest_margins(by_party, config.top_n)]), use_container_width=True, hide_index=True)

with tab_compare:
    kind = st.radio("Compare", ["Parties", "States", "Candidates", "Constituencies"], horizontal=True)
    if kind == "Parties":
        left, right = pick_pair("Party", summary.parties)
        result = compare_parties(summary.party_stats, dataset.constituencies, dataset.detailed, left, right, tables)
    elif kind == "States":
        left, right = pick_pair("State", summary.states)
        result = compare_states(summary.state_stats, dataset.constituencies, dataset.detailed, left, right)
    elif kind == "Candidates":
        left, right = pick_pair("Candidate", sorted({c.leading_candidate for c in dataset.constituencies}))
        result = compare_candidates(dataset.constituencies, dataset.detailed, left, right, tables)
    else:
        left, right = pick_pair("Constituency", sorted({c.constituency for c in dataset.constituencies}))
        result = compare_constituencies(dataset.constituencies, dataset.detailed, left, right)

    if not result:
        st.write("No comparison available.")
    elif kind == "Constituencies":
        profiles = [
            {
                "constituency": p.result.constituency,
                "state": p.state,
                "winner": p.result.leading_candidate,
                "party": p.result.leading_party,
                "margin": p.result.margin,
                "contestants": p.contestants,
                "total_votes": p.total_votes,
            }
            for p in (result.left, result.right)
        ]
        st.dataframe(pd.DataFrame(profiles).set_index("constituency").T, use_container_width=True)
        for p in (result.left, result.right):
            st.write(p.result.constituency)
            st.dataframe(pd.DataFrame([asdict(d) for d in p.candidates]), use_container_width=True, hide_index=True)
    else:
        profiles = [asdict(result.left), asdict(result.right)]
        key = {"Parties": "party", "States": "state", "Candidates": "name"}[kind]
        if kind == "States":
            for p in profiles:
                p.pop("constituencies")
                p.pop("parties")
        st.dataframe(pd.DataFrame(profiles).set_index(key).T, use_container_width=True)

with tab_ask:
    st.caption("Ask a question about the 2024 results")
    if "history" not in st.session_state:
        st.session_state["history"] = []

    example = st.selectbox("Examples", [""] + EXAMPLE_QUESTIONS)
    question = st.text_input("Question", value=example)
    if st.button("Ask") and question.strip():
        client = ElectionQueryClient(query_settings_from_env(), build_context(dataset.detailed))
        try:
            with st.spinner("Thinking..."):
                answer = client.ask(question, st.session_state["history"])
        except QueryError as e:
            st.error(f"Sorry, I encountered an error: {e}. Please try again.")
        else:
            st.session_state["history"] = st.session_state["history"] + [Turn("user", question.strip()), Turn("assistant", answer)]

    for turn in st.session_state["history"]:
        st.markdown(f"**{'You' if turn.role == 'user' else 'Analyst'}:** {turn.content}")

st.markdown("---")
st.caption("Run: streamlit run dashboard_app.py")
