# app.py — Streamlit front end for the splice sheet generator
#   streamlit run app/app.py
import logging

import pandas as pd
import streamlit as st

import splice_settings
from fiber_colors import BUFFER_COLORS, COLOR_NAMES, COLOR_STANDARD, FIBER_COLORS, FIBERS_PER_TUBE
from input_sheet import config_from_payload, config_from_upload
from splice_errors import SpliceSheetError
from splice_export import table_to_frame, table_to_workbook_bytes
from splice_sheet import DEFAULT_CABLES, DEFAULT_MAIN_CABLE, DEFAULT_PORTS, build_splice_table, table_summary

logger = logging.getLogger(__name__)
if not logging.getLogger().handlers:
    splice_settings.setup_logging()

# --------------------------- Streamlit UI ---------------------------
st.set_page_config(page_title="Splice Sheet Generator", layout="wide")
st.title("Splice Sheet Generator")
st.caption("Describe the FDH (ports, cables, addresses) or upload an input sheet, then export the splice sheet as Excel.")

# =======================================================================
# ---------------------------- sidebar inputs -------------------------
with st.sidebar:
    st.header("Hub")
    ports = st.number_input("Ports", min_value=0, max_value=splice_settings.MAX_PORTS, step=1, value=DEFAULT_PORTS)
    main_cable = st.text_input("Main cable", DEFAULT_MAIN_CABLE)
    st.caption("Ignored when an input sheet is uploaded (the sheet sets ports and uses the default main cable)")

    st.header(f"Color code ({COLOR_STANDARD})")
    st.caption(f"{FIBERS_PER_TUBE} fibers per buffer tube")
    st.dataframe(
        pd.DataFrame({"#": range(1, len(COLOR_NAMES) + 1), "Color": COLOR_NAMES,
                      "(B)": BUFFER_COLORS, "(F)": FIBER_COLORS}),
        hide_index=True, use_container_width=True,
    )

# =======================================================================
# ---------------------------- inputs ----------------------------------
st.subheader("1) Input")
col_up, col_cables = st.columns(2, gap="large")

with col_up:
    with st.container(border=True):
        st.caption("Optional: upload an input sheet (cable columns in the header, MST/Address/Sheet/Terminal in columns E-H)")
        up_sheet = st.file_uploader(" ", type=[e.lstrip(".") for e in splice_settings.UPLOAD_EXTENSIONS],
                                    key="input_sheet")

with col_cables:
    with st.container(border=True):
        st.caption("Cables (ignored when an input sheet with cable columns is uploaded)")
        cables_df = st.data_editor(
            pd.DataFrame([{"name": c.name, "fiberCount": c.fiber_count} for c in DEFAULT_CABLES]),
            num_rows="dynamic", use_container_width=True, key="cables_editor",
        )

# =======================================================================
# ------------------------------ Generate ------------------------------
st.subheader("2) Generate")

def _payload_from_form() -> dict:
    cables = [
        {"name": str(r["name"]).strip(), "fiberCount": int(r["fiberCount"])}
        for _, r in cables_df.iterrows()
        if str(r.get("name") or "").strip() and not pd.isna(r.get("fiberCount"))
    ]
    return {"ports": int(ports), "mainCableName": main_cable, "cables": cables, "addresses": []}

with st.container(border=True):
    if st.button("Generate", type="primary", key="btn_generate"):
        try:
            if up_sheet is not None:
                config = config_from_upload(up_sheet.getvalue(), up_sheet.name)
            else:
                config = config_from_payload(_payload_from_form())
            table = build_splice_table(config)
            st.session_state["splice_table"] = table
            st.session_state["splice_summary"] = table_summary(config, table)
        except SpliceSheetError as e:
            st.error(str(e))
        except Exception as e:
            logger.exception("Failed to build splice sheet")
            st.error(f"Failed to build splice sheet: {e}")

table = st.session_state.get("splice_table")
if table:
    summary = st.session_state.get("splice_summary", {})
    c1, c2, c3 = st.columns(3)
    c1.metric("Ports", summary.get("totalPorts", len(table) - 1))
    c2.metric("Cables", summary.get("cables", 0))
    c3.metric("Address records", summary.get("addresses", 0))

    st.dataframe(table_to_frame(table), use_container_width=True, hide_index=True)
    st.download_button(
        "Download Splice_Sheet.xlsx",
        data=table_to_workbook_bytes(table),
        file_name="Splice_Sheet.xlsx",
        mime=splice_settings.XLSX_MIME,
        type="primary",
    )
