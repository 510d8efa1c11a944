"""Simple two-language (en/ko) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "별자리 지도",
        "en": "Stargazer",
    },
    "label_place": {
        "ko": "장소 (도시 또는 위도, 경도)",
        "en": "Location (city or lat, lng)",
    },
    "label_date": {
        "ko": "날짜",
        "en": "Date",
    },
    "label_moon_color": {
        "ko": "달빛 색",
        "en": "Moonlight color",
    },
    "btn_view_sky": {
        "ko": "✦ 밤하늘보기",
        "en": "✦ View Sky",
    },
    "placeholder": {
        "ko": "장소와 날짜를 입력하고 밤하늘을 불러오세요",
        "en": "Enter a location and date to see the night sky",
    },
    "loading_compute": {
        "ko": "✦ 밤하늘을 계산하는 중",
        "en": "✦ Computing the night sky",
    },
    "heading_moon": {
        "ko": "달의 위상",
        "en": "Moon phase",
    },
    "heading_constellations": {
        "ko": "보이는 별자리",
        "en": "Visible constellations",
    },
    "heading_planets": {
        "ko": "보이는 행성",
        "en": "Visible planets",
    },
    "illumination": {
        "ko": "밝기 {value}%",
        "en": "{value}% illuminated",
    },
    "next_full_moon": {
        "ko": "다음 보름달: {date}",
        "en": "Next full moon: {date}",
    },
    "magnitude": {
        "ko": "등급 {value}",
        "en": "magnitude {value}",
    },
    "error_query": {
        "ko": "입력을 확인해주세요. ({error})",
        "en": "Please check your input. ({error})",
    },
    "label_show_hidden": {
        "ko": "지평선 아래 행성도 보기",
        "en": "Also list planets below the horizon",
    },
    "heading_phase_gallery": {
        "ko": "달의 여덟 위상",
        "en": "The eight phases",
    },
    "heading_month": {
        "ko": "{month} 달력",
        "en": "Moon calendar, {month}",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
