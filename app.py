"""Streamlit front-end for the delivery estimate comparison."""
from __future__ import annotations

from dataclasses import replace
from typing import Mapping

import pandas as pd
import streamlit as st

from estimate_checker import (
    CompareSnapshotsUseCase,
    ComparisonContext,
    EstimateComparator,
    open_snapshot_repository,
)
from estimate_checker.application.dto import ComparisonResponse
from estimate_checker.config import SETTINGS
from estimate_checker.domain.keys import KEY_POLICIES
from estimate_checker.domain.models import CHANGE_TYPES, OrderRecord
from estimate_checker.domain.services import TOTAL_MODES
from estimate_checker.presentation.diff_report import (
    diffs_to_rows,
    render_csv,
    render_html,
    render_xlsx,
)

UPLOAD_TYPES = ["csv", "txt", "xlsx", "xlsm", "xls"]

st.set_page_config(page_title="Delivery Estimate Comparison", layout="wide")
st.title("Delivery Estimate Comparison")


def index_to_dataframe(index: Mapping[str, OrderRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"order_key": key, "line": record.line_number, **record.fields} for key, record in index.items()]
    )


def run_comparison(
    before_name: str,
    before_bytes: bytes,
    after_name: str,
    after_bytes: bytes,
    key_policy: str,
    total_mode: str,
    delimiter: str,
    encoding: str = SETTINGS.encoding,
) -> ComparisonResponse:
    settings = replace(
        SETTINGS, key_policy=key_policy, total_mode=total_mode, delimiter=delimiter, encoding=encoding
    )
    context = ComparisonContext(
        before_repository=open_snapshot_repository(before_bytes, settings=settings, name=before_name),
        after_repository=open_snapshot_repository(after_bytes, settings=settings, name=after_name),
        comparator=EstimateComparator(compared_fields=settings.compared_fields, total_mode=total_mode),
        key_policy=key_policy,
    )
    return CompareSnapshotsUseCase(context).execute()


if "response" not in st.session_state:
    st.session_state["response"] = None

col1, col2 = st.columns(2)
with col1:
    before_file = st.file_uploader("Upload before snapshot", type=UPLOAD_TYPES)
with col2:
    after_file = st.file_uploader("Upload after snapshot", type=UPLOAD_TYPES)

with st.expander("Options"):
    opt1, opt2, opt3, opt4 = st.columns(4)
    with opt1:
        key_policy = st.selectbox("Key policy", sorted(KEY_POLICIES), index=sorted(KEY_POLICIES).index(SETTINGS.key_policy))
    with opt2:
        total_mode = st.selectbox("Total orders", TOTAL_MODES, index=TOTAL_MODES.index(SETTINGS.total_mode))
    with opt3:
        delimiter = st.text_input("Delimiter", value=SETTINGS.delimiter, max_chars=1)
    with opt4:
        encoding = st.text_input("Encoding", value=SETTINGS.encoding)

run_btn = st.button("Compare", disabled=not (before_file and after_file))
if run_btn and before_file and after_file:
    with st.spinner("Comparing..."):
        try:
            st.session_state["response"] = run_comparison(
                before_file.name,
                before_file.getvalue(),
                after_file.name,
                after_file.getvalue(),
                key_policy,
                total_mode,
                delimiter or SETTINGS.delimiter,
                encoding or SETTINGS.encoding,
            )
        except (LookupError, ValueError) as exc:
            st.session_state["response"] = None
            st.error(f"Error: {exc}")

response: ComparisonResponse | None = st.session_state.get("response")
if response is None:
    st.info("Upload both snapshots and run the comparison.")
else:
    report = response.report
    summary = report.summary

    st.subheader("Summary")
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Total orders", summary.total_orders)
    m2.metric("Changed", summary.changed_orders)
    m3.metric("Unchanged", summary.unchanged_orders)
    m4.metric("Differences", len(report.diffs))

    for warning in report.warnings:
        st.warning(warning.message)

    s1, s2 = st.columns(2)
    with s1:
        st.caption("Changes by status")
        st.dataframe(pd.DataFrame(list(summary.changes_by_status.items()), columns=["status", "orders"]))
    with s2:
        st.caption("Changes by field")
        st.dataframe(pd.DataFrame(list(summary.changes_by_field.items()), columns=["field", "changes"]))

    groups = report.group_by_change_type()
    tabs = st.tabs([f"{change_type} ({len(groups.get(change_type, []))})" for change_type in CHANGE_TYPES] + ["Before", "After"])
    for tab, change_type in zip(tabs, CHANGE_TYPES):
        with tab:
            st.dataframe(pd.DataFrame(diffs_to_rows(groups.get(change_type, []))))
    with tabs[-2]:
        st.dataframe(index_to_dataframe(response.before_index))
    with tabs[-1]:
        st.dataframe(index_to_dataframe(response.after_index))

    d1, d2, d3 = st.columns(3)
    d1.download_button("Download diff CSV", data=render_csv(report.diffs), file_name="estimate_diff.csv", mime="text/csv")
    d2.download_button(
        "Download diff HTML",
        data=render_html(report).encode("utf-8"),
        file_name="estimate_diff.html",
        mime="text/html",
    )
    d3.download_button(
        "Download workbook",
        data=render_xlsx(report),
        file_name="estimate_diff.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
