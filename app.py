import json

import streamlit as st

from redaction.log_value import CyclicStructureError
from redaction.mask_config import DEFAULT_MATCH_MODE, MATCH_MODES, MaskPolicy, parse_field_list
from redaction.mask_engine import MaskingEngine
from redaction.sensitivity import SensitivityClassifier
from utils.mask_report import mask_report_frame

# Page config
st.set_page_config(
    page_title="Log Redaction Preview",
    page_icon="🔒",
    layout="wide"
)

st.title("🔒 Log Redaction Preview")
st.markdown("Paste a JSON payload to see exactly what would reach the logs.")

# Sidebar: policy knobs. Nothing here touches the process-wide policy.
with st.sidebar:
    st.subheader("Policy")
    enable_default = st.checkbox("Mask default sensitive fields", value=True)
    custom_raw = st.text_input("Extra fields (comma-separated)", value="")
    match_mode = st.selectbox(
        "Match mode",
        MATCH_MODES,
        index=MATCH_MODES.index(DEFAULT_MATCH_MODE),
    )

payload_text = st.text_area(
    "Payload (JSON)",
    value='{"user": {"name": "John", "email": "john@example.com", "password": "secret123"}}',
    height=200,
)

preview_button = st.button("🔍 Preview")


def build_preview(text: str, policy: MaskPolicy):
    """
    Parse `text` and mask it under `policy`.

    Returns:
        masked: the masked payload
        df: DataFrame with columns [path, kind, masked]
    """
    payload = json.loads(text)
    classifier = SensitivityClassifier(policy)
    masked = MaskingEngine(classifier).mask(payload)
    df = mask_report_frame(payload, classifier=classifier)
    return masked, df


if preview_button:
    policy = MaskPolicy(
        enable_default_mask=enable_default,
        custom_fields=parse_field_list(custom_raw),
        match_mode=match_mode,
    )
    try:
        masked, df = build_preview(payload_text, policy)
    except json.JSONDecodeError as e:
        st.error(f"Invalid JSON: {e}")
    except CyclicStructureError as e:
        st.error(str(e))
    else:
        col1, col2 = st.columns([2, 1])

        with col1:
            st.subheader("📝 Masked payload")
            st.json(masked)

        with col2:
            st.subheader("🛡 Masked fields")
            st.metric(label="Fields masked", value=len(df))
            if df.empty:
                st.info("No sensitive field names found.")
            else:
                st.dataframe(df, use_container_width=True)

        st.caption("Classification is by field name only; values inside free text are not scanned.")
else:
    st.info("Adjust the policy, paste a payload and click 'Preview' to begin.")
