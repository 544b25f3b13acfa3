import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Базовые пути проекта
PROJECT_ROOT = Path(__file__).parent.parent
SCREENSHOTS_DIR = PROJECT_ROOT / "screenshots"
TEST_RESULTS_DIR = PROJECT_ROOT / "test_results"
LOGS_DIR = TEST_RESULTS_DIR / "logs"
ASSETS_DIR = PROJECT_ROOT / "assets"
TAILWIND_CONFIG_PATH = ASSETS_DIR / "tailwind.config.js"

# Загрузка конфигурации из config.json
CONFIG_PATH = PROJECT_ROOT / "config" / "config.json"
try:
    with open(CONFIG_PATH, "r", encoding="utf-8") as f:
        CONFIG = json.load(f)
except (OSError, ValueError) as e:
    logger.error(f"Ошибка загрузки config.json: {e}")
    CONFIG = {}

# Каталоги для логов создаются при импорте, скриншоты - перед каждой записью
for directory in [TEST_RESULTS_DIR, LOGS_DIR]:
    directory.mkdir(parents=True, exist_ok=True)

# Тестируемая страница
DEFAULT_BASE_URL = "http://localhost:4000"
TESTER_DEMO_ROUTE = "/tester-demo"
BASE_URL_ENV_VAR = "TESTER_DEMO_BASE_URL"

# Временные интервалы (в миллисекундах для Playwright)
DEFAULT_TIMEOUT = CONFIG.get("timeout", 30) * 1000  # 30 секунд по умолчанию
PAGE_LOAD_TIMEOUT = 60000  # 60 секунд
NETWORK_IDLE_TIMEOUT = DEFAULT_TIMEOUT
REACHABILITY_TIMEOUT = 5  # секунды, для requests

# Ожидание стабилизации страницы после networkidle
SETTLE_CONFIG = CONFIG.get("settle", {})
SETTLE_STRATEGIES = ["stable", "fixed"]
SETTLE_STRATEGY = SETTLE_CONFIG.get("strategy", "stable")
SETTLE_DELAY = SETTLE_CONFIG.get("delay", 2000)
LAYOUT_STABLE_WINDOW = SETTLE_CONFIG.get("window", 500)

# Браузеры
SUPPORTED_BROWSERS = ["chromium", "firefox", "webkit"]
DEFAULT_BROWSER = CONFIG.get("browser", "chromium")

# Сообщения об ошибках
ERROR_MESSAGES = {
    "element_not_found": "Элемент не найден на странице",
    "element_not_visible": "Элемент не виден",
    "text_mismatch": "Текст элемента не совпадает",
    "timeout": "Превышено время ожидания",
    "page_not_loaded": "Страница не загрузилась",
    "bad_response": "Сервер вернул ошибку",
    "unreachable": "Страница недоступна",
    "dir_not_created": "Не удалось создать каталог для скриншотов",
    "screenshot_not_written": "Не удалось сохранить скриншот",
    "screenshot_failed": "Браузер не смог снять скриншот",
}

# Порог различий при сравнении с эталоном
VISUAL_TESTING = {
    "threshold": 0.1,  # 10% различий
}

# Настройки окружения
ENVIRONMENTS = CONFIG.get("environments", {})
DEFAULT_ENVIRONMENT = CONFIG.get("defaultEnvironment", "local")
