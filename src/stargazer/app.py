"""Stargazer — Streamlit page for the moon, planets, and constellations on a date."""

import datetime
import html
import logging

import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from stargazer.cache import TTLCache  # noqa: E402
from stargazer.compute import QueryError, recolor_moon, run  # noqa: E402
from stargazer.config import load_settings  # noqa: E402
from stargazer.i18n import t  # noqa: E402
from stargazer.moon import moon_phases_for_month, reference_moon_phases  # noqa: E402
from stargazer.renderers.moon_svg import render_moon_phase_svg  # noqa: E402

_settings = load_settings()
logging.basicConfig(
    level=_settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# --- Language detection (browser-first via streamlit-js-eval) ---
# The first run returns None; the rerun triggered by streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="✦",
    layout="wide",
    initial_sidebar_state="collapsed",
)


@st.cache_resource
def _response_cache() -> TTLCache:
    """One response cache per server process, shared across sessions."""
    return TTLCache(maxsize=_settings.cache_maxsize)


# --- Session state initialization ---
if "star_map" not in st.session_state:
    st.session_state.star_map = None
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None

# --- Dark theme CSS ---
st.markdown(
    """
    <style>
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0d1b35 !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    .overlay-box {
        border-top: 1px solid rgba(201,169,110,0.18);
        padding: 1.2rem 1.6rem;
        color: #e8d5a3;
        margin-bottom: 0.5rem;
    }
    .star-map svg { width: 100%; height: auto; border-radius: 8px; }
    label, [data-testid="stWidgetLabel"] p {
        color: #aaaaaa !important;
        font-size: 0.85rem !important;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Input bar ---
col1, col2, col3, col4 = st.columns([3, 2, 1, 1.5])
with col1:
    location = st.text_input(t("label_place", _lang), value="New York")
with col2:
    date_val = st.date_input(
        t("label_date", _lang),
        value=datetime.date.today(),
        min_value=datetime.date(1900, 1, 1),
    )
with col3:
    moon_color = st.color_picker(
        t("label_moon_color", _lang), value=_settings.moon_light_color
    )
with col4:
    st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
    submitted = st.button(t("btn_view_sky", _lang), key="submit_btn")

show_hidden = st.checkbox(t("label_show_hidden", _lang), value=False)

# --- Form submission handler ---
if submitted and location:
    st.session_state.error_msg = None
    with st.spinner(t("loading_compute", _lang)):
        try:
            st.session_state.star_map = run(
                {
                    "date": date_val.strftime("%Y-%m-%d"),
                    "location": location,
                    "moonLightColor": moon_color,
                    "includeHidden": show_hidden,
                },
                cache=_response_cache(),
                settings=_settings,
            )
        except QueryError as e:
            st.session_state.star_map = None
            st.session_state.error_msg = t("error_query", _lang).format(
                error=html.escape(str(e))
            )

# --- Error message ---
if st.session_state.error_msg:
    st.markdown(
        f"<div class='overlay-box' style='border:1px solid #ff6b6b;color:#ff9999;'>"
        f"{st.session_state.error_msg}</div>",
        unsafe_allow_html=True,
    )

star_map = st.session_state.star_map
if star_map is None:
    st.markdown(
        f"<div style='height:50vh; display:flex; align-items:center; justify-content:center;"
        f" color:#334466; font-size:1.2rem;'>{t('placeholder', _lang)}</div>",
        unsafe_allow_html=True,
    )
    st.stop()

# --- Result ---
moon = star_map["moonPhase"]
st.markdown(
    f"<div class='overlay-box'><h3>{html.escape(star_map['formattedDate'])}"
    f"{' · ' + html.escape(star_map['location']) if star_map.get('location') else ''}</h3></div>",
    unsafe_allow_html=True,
)

left, right = st.columns([1, 2])
with left:
    st.subheader(t("heading_moon", _lang))
    st.markdown(moon["svgPath"], unsafe_allow_html=True)
    st.markdown(
        f"{moon['emoji']} **{moon['name']}** · "
        f"{t('illumination', _lang).format(value=moon['illumination'])}  \n"
        f"{t('next_full_moon', _lang).format(date=moon['nextFullMoon'])}"
    )

    st.subheader(t("heading_planets", _lang))
    for planet in star_map["planets"]:
        magnitude = t("magnitude", _lang).format(value=f"{planet['magnitude']:.1f}")
        line = f"**{planet['name']}** · {planet['position']} ({magnitude})"
        st.markdown(line if planet["isVisible"] else f":gray[{line}]")

with right:
    st.subheader(t("heading_constellations", _lang))
    st.markdown(" · ".join(star_map["constellations"]))
    st.markdown(
        f"<div class='star-map'>{star_map['starMapSvg']}</div>",
        unsafe_allow_html=True,
    )

# --- Phase gallery and month view ---
st.subheader(t("heading_phase_gallery", _lang))
for col, phase in zip(st.columns(8), reference_moon_phases()):
    with col:
        st.markdown(
            recolor_moon(render_moon_phase_svg(phase.phase), moon_color),
            unsafe_allow_html=True,
        )
        st.caption(f"{phase.emoji} {phase.name}")

st.subheader(t("heading_month", _lang).format(month=date_val.strftime("%Y-%m")))
month = moon_phases_for_month(date_val.year, date_val.month)
st.markdown(
    " ".join(f"`{day:02d}` {result.emoji}" for day, result in enumerate(month, start=1))
)
