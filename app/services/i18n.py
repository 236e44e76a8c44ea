from app.core.config import settings

TRANSLATIONS = {
    "vi": {
        "title": "Khám Phá Địa Điểm Việt Nam",
        "subtitle": "Khám phá các địa điểm thú vị trên khắp Việt Nam.",
        "input_label": "Tên địa điểm",
        "placeholder": "ví dụ: Hội An, Vịnh Hạ Long...",
        "button_search": "Tìm kiếm",
        "button_searching": "Đang tìm...",
        "loading_title": "Đang tìm kiếm",
        "loading_hint": "Gemini đang tìm tọa độ và các địa điểm thú vị.",
        "results_header": "địa điểm hàng đầu cho",
        "error_prefix": "Lỗi",
        "network_error": "Lỗi mạng. Vui lòng kiểm tra kết nối internet của bạn.",
        "collapse_sidebar": "Thu gọn thanh bên",
        "expand_sidebar": "Mở rộng thanh bên",
        "lang_vi": "Tiếng Việt",
        "lang_en": "English"
    },
    "en": {
        "title": "Explore Places in Vietnam",
        "subtitle": "Discover interesting places all over Vietnam.",
        "input_label": "Place name",
        "placeholder": "e.g., Hoi An, Ha Long Bay...",
        "button_search": "Search",
        "button_searching": "Searching...",
        "loading_title": "Searching for",
        "loading_hint": "Gemini is finding the coordinates and interesting places.",
        "results_header": "top places for",
        "error_prefix": "Error",
        "network_error": "Network error. Please check your internet connection.",
        "collapse_sidebar": "Collapse sidebar",
        "expand_sidebar": "Expand sidebar",
        "lang_vi": "Tiếng Việt",
        "lang_en": "English"
    }
}

def get_translations(lang: str = settings.DEFAULT_LANG) -> dict:
    # Basic fallback
    if lang not in TRANSLATIONS:
        lang = settings.DEFAULT_LANG
    return TRANSLATIONS[lang]
