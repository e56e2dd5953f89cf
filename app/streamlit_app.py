# app/streamlit_app.py
import io

import pandas as pd
import streamlit as st

from rumetaphone.cli import encode_frame
from rumetaphone.encoder import metaphone

st.set_page_config(page_title="Russian Metaphone", layout="wide")
st.title("Russian Metaphone")
st.caption("Phonetic keys for Cyrillic names: spelling variants that sound alike share one key.")

# --- Sidebar: inputs ---------------------------------------------------------
st.sidebar.header("Inputs")

names_file = st.sidebar.file_uploader(
    "Upload names file (CSV or TSV)",
    type=["csv", "tsv"],
)
column = st.sidebar.text_input("Column with names", value="name")
run_btn = st.sidebar.button("Encode", type="primary")


# --- Helpers -----------------------------------------------------------------
def _read_names(upload) -> pd.DataFrame:
    if upload is None:
        raise ValueError("No file uploaded.")
    sep = "\t" if upload.name.lower().endswith(".tsv") else ","
    try:
        return pd.read_csv(upload, sep=sep, dtype=str, keep_default_na=False)
    except pd.errors.ParserError:
        # Fallback: sniff delimiter
        upload.seek(0)
        txt = upload.read()
        upload.seek(0)
        return pd.read_csv(io.BytesIO(txt), sep=None, engine="python", dtype=str, keep_default_na=False)


# --- UI: single name ---------------------------------------------------------
one = st.text_input("Try a single name", value="Спиридонова Маргарита Афанасьевна")
if one:
    st.code(metaphone(one) or "(no phonetic content)")

st.divider()

# --- Run ----------------------------------------------------------------------
if run_btn:
    if names_file is None:
        st.error("Please upload a names file first.")
        st.stop()

    try:
        df = _read_names(names_file)
    except (ValueError, pd.errors.ParserError) as e:
        st.error(f"Could not read names file: {e}")
        st.stop()

    if column not in df.columns:
        st.error(f"File must contain column: {column}")
        st.stop()
    if column == "phonetic":
        st.error("Column 'phonetic' is where the keys go; pick the column with the names.")
        st.stop()

    df_out = encode_frame(df, column)

    st.subheader("Keys")
    st.dataframe(df_out, width="stretch")

    # Spellings that collapse to the same key
    with st.expander("Show groups of spellings sharing a key"):
        groups = (
            df_out[df_out["phonetic"] != ""]
            .groupby("phonetic")[column]
            .agg(lambda s: sorted(set(s)))
            .reset_index()
        )
        groups = groups[groups[column].map(len) > 1]
        if len(groups):
            st.dataframe(groups, width="stretch")
        else:
            st.info("Every key belongs to a single spelling.")

    csv_bytes = df_out.to_csv(index=False).encode("utf-8")
    st.download_button(
        "Download results CSV",
        data=csv_bytes,
        file_name="rumetaphone_keys.csv",
        mime="text/csv",
    )
