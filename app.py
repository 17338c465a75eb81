import streamlit as st

from artcore.charts import build_chart
from artcore.features import FEATURES, get_feature
from artcore.filters import normalize_filters
from artcore.metrics_debug import compute_debug
from artcore.session import DashboardController
from artcore.settings import get_settings
from artcore.setup_logging import setup_logging


# ---------- Session ----------
def get_controller() -> DashboardController:
    # one controller per browser session; the load runs once, before any control is drawn
    controller = st.session_state.get("controller")
    if controller is None:
        settings = get_settings()
        setup_logging(settings.log_level)
        controller = DashboardController(settings.source)
        with st.spinner("Loading the collection data..."):
            controller.load()
        st.session_state["controller"] = controller
    return controller


# ---------- UI setup ----------
st.set_page_config(page_title="The Wolfsonian Art Collection", layout="wide")
st.title("The Wolfsonian Art Collection")
st.caption("Exploring the persuasive power of art and design")

controller = get_controller()
state = controller.state
if state.error:
    st.error(state.error)
    st.stop()

# ----- Sidebar: feature + chart controls -----
feature_values = list(FEATURES)
with st.sidebar:
    st.markdown("### Select Feature to Visualize")
    feature = st.radio(
        "Feature",
        feature_values,
        index=feature_values.index(state.feature),
        format_func=lambda f: FEATURES[f].label,
    )
    spec = get_feature(feature)
    chart_type = st.radio(
        "Chart",
        ["bar", "pie"],
        index=0 if state.chart_type == "bar" else 1,
        format_func=lambda c: "Bar Chart" if c == "bar" else "Pie Chart",
        horizontal=True,
        disabled=not spec.is_ranked,
        help="Publication years are always shown as an ordered series.",
    )
    st.markdown("---")
    show_debug = st.checkbox("Show data quality", value=False)

controller.apply_filters(normalize_filters({"feature": feature, "chart_type": chart_type}))
payload = controller.payload()

st.subheader(payload["title"])
if not payload["has_data"]:
    st.info(payload["message"])
else:
    chart = build_chart(
        controller.state.entries,
        chart_kind=payload["chart_kind"],
        chart_type=payload["chart_type"],
        label_title=spec.label,
    ).properties(height=500)
    st.altair_chart(chart, use_container_width=True)
    with st.expander("Counts"):
        st.dataframe(payload["entries"], hide_index=True, use_container_width=True)

if show_debug:
    st.markdown("**Data quality**")
    dq = compute_debug(controller.state.records)
    st.write(dq["row_counts"])
    st.dataframe(dq["feature_coverage"], hide_index=True, use_container_width=True)
    if dq["columns_missing"]:
        st.caption("Missing columns: " + ", ".join(dq["columns_missing"]))
