"""
Профили устройств для визуального регрессионного тестирования
"""

IPHONE_USER_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 15_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/15.0 Mobile/15E148 Safari/604.1"
)
IPAD_USER_AGENT = (
    "Mozilla/5.0 (iPad; CPU OS 15_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/15.0 Mobile/15E148 Safari/604.1"
)

VIEWPORT_PROFILES = {
    # Десктоп: user agent браузера по умолчанию, плюс проверки DOM
    "dashboard": {
        "scenario": "tester-demo-dashboard",
        "width": 1280,
        "height": 720,
        "user_agent": None,
        "assert_widgets": True,
        "viewport_screenshot": "tester-demo-viewport",
        "full_page": True,
        "settle": None,
    },
    "mobile": {
        "scenario": "tester-demo-mobile",
        "width": 375,
        "height": 812,
        "user_agent": IPHONE_USER_AGENT,
        "assert_widgets": False,
        "viewport_screenshot": None,
        "full_page": True,
        "settle": None,
    },
    "tablet": {
        "scenario": "tester-demo-tablet",
        "width": 768,
        "height": 1024,
        "user_agent": IPAD_USER_AGENT,
        "assert_widgets": False,
        "viewport_screenshot": None,
        "full_page": True,
        "settle": None,
    },
    # Быстрый снимок видимой области после фиксированной паузы, вне общего прогона
    "fixed": {
        "scenario": "tester-demo-fixed",
        "width": 1280,
        "height": 720,
        "user_agent": None,
        "assert_widgets": False,
        "viewport_screenshot": None,
        "full_page": False,
        "settle": "fixed",
    },
}

# Порядок запуска сценариев
ALL_PROFILES = ["dashboard", "mobile", "tablet"]


def get_profile(key: str) -> dict:
    """Возвращает копию профиля по ключу"""
    if key not in VIEWPORT_PROFILES:
        available = ", ".join(VIEWPORT_PROFILES)
        raise KeyError(f"Профиль '{key}' не найден. Доступные: {available}")
    return dict(VIEWPORT_PROFILES[key])


def context_options(profile: dict) -> dict:
    """Параметры browser.new_context() для профиля"""
    options = {"viewport": {"width": profile["width"], "height": profile["height"]}}
    if profile.get("user_agent"):
        options["user_agent"] = profile["user_agent"]
    return options
