"""Streamlit client for uploading machine price sheets and sharing comparisons."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import httpx
import streamlit as st

REPO_ROOT = Path(__file__).resolve().parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from backend.models.machine import ComparisonGroup
from comparison.table_view import comparison_table

DEFAULT_API_BASE = "http://localhost:8000"
PRODUCT_TABS = {
    "Hydraulic Machines": "hydraulic",
    "Electric Machines": "electric",
}
VIEW_OPTIONS = {
    "Representative (latest per manufacturer)": "representative",
    "Entire (all records)": "entire",
}


def get_api_base() -> str:
    """Prefer Streamlit secrets/env var overrides for API base URL."""
    # Streamlit raises when no secrets file exists, so guard the lookup.
    secret_value: str | None = None
    try:
        secret_value = st.secrets["api_base"]
    except Exception:  # noqa: BLE001 - secrets module raises custom errors
        secret_value = None

    env_value = os.environ.get("API_BASE_URL")
    return secret_value or env_value or DEFAULT_API_BASE


def upload_workbook(name: str, content: bytes) -> dict[str, Any]:
    """Send the workbook to the API and return both comparison views."""
    base_url = get_api_base().rstrip("/")
    files = {"file": (name, content, "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")}
    with httpx.Client(timeout=120, follow_redirects=True) as client:
        response = client.post(f"{base_url}/comparisons", files=files)
        response.raise_for_status()
        return response.json()


def error_detail(exc: httpx.HTTPError) -> str:
    """Pull the API's ``detail`` message out of a failed response when present."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            return exc.response.json().get("detail", str(exc))
        except ValueError:
            return str(exc)
    return str(exc)


def render_groups(groups: list[dict[str, Any]], product_type: str) -> None:
    """Render one product type's groups as a side-by-side manufacturer table."""
    if not groups:
        st.info(f"No {product_type.lower()} machines found in the uploaded data.")
        return

    models = [ComparisonGroup.model_validate(group) for group in groups]
    st.caption(f"{len(models)} comparable groups")
    st.dataframe(comparison_table(models), use_container_width=True, hide_index=True)


def main() -> None:
    st.set_page_config(page_title="Machine Price Comparison", layout="wide")
    st.title("Machine Price Comparison")
    st.caption("Competitor analysis for injection molding machines")

    if "comparison" not in st.session_state:
        st.session_state.comparison = None

    if st.session_state.comparison is None:
        uploaded = st.file_uploader(
            "Upload your Excel file with a 'Data' sheet",
            type=["xlsx", "xls"],
        )
        if uploaded is None:
            return

        with st.spinner(f"Processing {uploaded.name}..."):
            try:
                st.session_state.comparison = upload_workbook(uploaded.name, uploaded.getvalue())
            except httpx.HTTPError as exc:
                st.error(f"Error processing file: {error_detail(exc)}")
                return

        data = st.session_state.comparison
        st.success(f"Analyzed {data['machine_count']} machines and generated comparison tables.")

    data = st.session_state.comparison

    if data.get("share_url"):
        st.subheader("Share this comparison")
        st.code(data["share_url"], language=None)
    elif data.get("share_error"):
        st.warning(data["share_error"])

    header, reset = st.columns([4, 1])
    with header:
        view_label = st.radio("View", list(VIEW_OPTIONS), horizontal=True)
    with reset:
        if st.button("Upload New File", use_container_width=True):
            st.session_state.comparison = None
            st.rerun()

    view = data[VIEW_OPTIONS[view_label]]
    for tab, (label, key) in zip(st.tabs(list(PRODUCT_TABS)), PRODUCT_TABS.items()):
        with tab:
            render_groups(view[key], key.capitalize())


if __name__ == "__main__":
    main()
