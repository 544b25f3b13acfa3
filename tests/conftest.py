from dotenv import load_dotenv
load_dotenv()

import io
import os
import logging
from datetime import datetime

import allure
import pytest
import requests
from PIL import Image
from playwright.sync_api import sync_playwright

from config.constants import LOGS_DIR, SCREENSHOTS_DIR, REACHABILITY_TIMEOUT, TESTER_DEMO_ROUTE
from utils.runner import VisualRegressionRunner


# Настройка логирования
def setup_logging():
    """Настройка логирования для тестов"""
    log_file = LOGS_DIR / f"test_run_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.StreamHandler()
        ]
    )

    # Уменьшаем уровень логирования для Playwright
    logging.getLogger("playwright").setLevel(logging.WARNING)

# Настройка логирования при импорте
setup_logging()

def pytest_configure(config):
    """Конфигурация pytest"""
    config.addinivalue_line("markers", "visual: Тесты визуального регрессивного тестирования (нужен сервер)")
    config.addinivalue_line("markers", "style: Проверки конфигурации Tailwind")
    config.addinivalue_line("markers", "unit: Тесты без браузера")

@pytest.fixture(scope="session")
def base_url(request, config_loader):
    """Базовый URL тестируемого сервера"""
    target_url = request.config.getoption("--target-url")
    if target_url:
        return target_url.rstrip("/")
    return config_loader.get_base_url(request.config.getoption("--env"))

@pytest.fixture(scope="session")
def live_server(base_url):
    """Пропускает визуальные тесты, если сервер с tester-demo не запущен"""
    url = f"{base_url}{TESTER_DEMO_ROUTE}"
    try:
        requests.get(url, timeout=REACHABILITY_TIMEOUT)
    except requests.exceptions.RequestException as e:
        pytest.skip(f"Сервер {url} недоступен: {e}")
    allure.dynamic.feature(f"Сервер: {base_url}")
    return base_url

@pytest.fixture(scope="session")
def browser_session(request, live_server):
    """Браузер на всю сессию; контексты создаются на каждый сценарий"""
    browser_type = request.config.getoption("--browser-type")
    headless = request.config.getoption("--headless") or os.environ.get("HEADLESS", "false").lower() == "true"
    slow_mo = request.config.getoption("--slow-mo")

    with sync_playwright() as playwright:
        browser = getattr(playwright, browser_type).launch(headless=headless, slow_mo=slow_mo)

        yield browser

        browser.close()

@pytest.fixture
def runner(request, browser_session, live_server, settle_config):
    """Прогонщик сценариев, пишет скриншоты в screenshots/"""
    return VisualRegressionRunner(
        browser_session,
        base_url=live_server,
        output_dir=SCREENSHOTS_DIR,
        settle_strategy=settle_config["strategy"],
        settle_delay=settle_config["delay"],
        settle_window=settle_config["window"],
        compare_baseline=request.config.getoption("--compare-baseline"),
    )

def make_png_bytes(width: int = 1280, height: int = 720, color=(255, 255, 255)) -> bytes:
    """PNG заданного размера, как его вернул бы page.screenshot()"""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()

@pytest.fixture
def png_bytes():
    return make_png_bytes

@pytest.fixture(autouse=True)
def log_test_start_end(request):
    """Логирование начала и окончания каждого теста"""
    test_name = request.node.name
    logging.info(f"[НАЧАЛО] Тест: {test_name}")

    yield

    logging.info(f"[КОНЕЦ] Тест: {test_name}")

# Хуки pytest
def pytest_runtest_makereport(item, call):
    """Создание отчета о выполнении теста"""
    if call.when == "call":
        if call.excinfo is not None:
            logging.error(f"❌ Тест {item.nodeid} завершился с ошибкой: {call.excinfo.value}")

def pytest_sessionstart(session):
    """Действия в начале сессии тестирования"""
    logging.info("=" * 80)
    logging.info("🧪 НАЧАЛО СЕССИИ ТЕСТИРОВАНИЯ")
    logging.info("=" * 80)

def pytest_sessionfinish(session, exitstatus):
    """Действия после завершения сессии тестирования"""
    logging.info("=" * 80)
    logging.info(f"[ЗАВЕРШЕНИЕ] СЕССИИ ТЕСТИРОВАНИЯ (код выхода: {exitstatus})")
