import pytest
from config.constants import SETTLE_STRATEGIES, SUPPORTED_BROWSERS
from utils.config_loader import ConfigLoader


def pytest_addoption(parser):
    """Добавление параметров командной строки"""
    parser.addoption(
        "--env",
        action="store",
        default=None,
        help="Окружение из config.json (local, ci)"
    )
    parser.addoption(
        "--target-url",
        action="store",
        default=None,
        help="Базовый URL сервера с tester-demo (важнее --env и TESTER_DEMO_BASE_URL)"
    )
    parser.addoption(
        "--headless",
        action="store_true",
        default=False,
        help="Запуск браузера в headless режиме"
    )
    parser.addoption(
        "--browser-type",
        action="store",
        default="chromium",
        choices=SUPPORTED_BROWSERS,
        help="Тип браузера для тестов"
    )
    parser.addoption(
        "--slow-mo",
        action="store",
        type=int,
        default=0,
        help="Задержка между действиями в миллисекундах"
    )
    parser.addoption(
        "--settle",
        action="store",
        default=None,
        choices=SETTLE_STRATEGIES,
        help="Ожидание после networkidle: stable (DOM без мутаций) или fixed (пауза)"
    )
    parser.addoption(
        "--compare-baseline",
        action="store_true",
        default=False,
        help="Сравнивать скриншоты с эталонами в screenshots/baseline"
    )


@pytest.fixture(scope="session")
def config_loader():
    return ConfigLoader()


@pytest.fixture(scope="session")
def settle_config(config_loader, request):
    """Настройки стабилизации из config.json с учетом --settle"""
    settle = config_loader.get_settle_config()
    strategy = request.config.getoption("--settle")
    if strategy:
        settle["strategy"] = strategy
    return settle
