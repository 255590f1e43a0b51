"""Read-only view of a shared machine comparison."""

import httpx
import streamlit as st
from typing import Any
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from backend.db.share_store import share_id_from_link
from frontend.streamlit_app import get_api_base, render_groups


def fetch_shared_comparison(share_id: str) -> dict[str, Any]:
    """Fetch a persisted comparison by its share identifier."""
    base_url = get_api_base().rstrip("/")
    url = f"{base_url}/share/{share_id}/data"
    with httpx.Client(timeout=30) as client:
        response = client.get(url)
        response.raise_for_status()
        return response.json()


def main():
    st.set_page_config(page_title="Shared Comparison", layout="wide")
    st.title("Machine Price Comparison Results")
    st.caption("Shared comparison of hydraulic and electric machines")

    link = st.query_params.get("share_id") or st.text_input("Share link or ID")
    share_id = share_id_from_link(link) if link else ""
    if not share_id:
        st.info("Open a share link or paste a share link or ID to view a comparison.")
        return

    with st.spinner("Loading comparison results..."):
        try:
            data = fetch_shared_comparison(share_id)
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                st.error("Could not find the shared comparison results")
            else:
                st.error("An error occurred while loading the comparison results")
            return
        except httpx.HTTPError:
            st.error("An error occurred while loading the comparison results")
            return

    hydraulic = data.get("hydraulic", [])
    electric = data.get("electric", [])
    hydraulic_tab, electric_tab = st.tabs(
        [f"Hydraulic ({len(hydraulic)})", f"Electric ({len(electric)})"]
    )
    with hydraulic_tab:
        render_groups(hydraulic, "Hydraulic")
    with electric_tab:
        render_groups(electric, "Electric")


if __name__ == "__main__":
    main()
