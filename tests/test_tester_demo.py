import shutil

import pytest
import allure

from config.viewport_config import ALL_PROFILES, VIEWPORT_PROFILES
from utils.screenshot_utils import image_size, is_valid_png, same_dimensions


@allure.epic("Визуальная регрессия")
@allure.feature("Tester Demo: SaaS-дашборд")
@pytest.mark.visual
class TestTesterDemoVisual:

    @allure.title("Полный и видимый скриншот дашборда с проверками DOM")
    @allure.severity('CRITICAL')
    @allure.description("""
    Тест открывает /tester-demo в десктопном профиле 1280x720:
    1. Ждет networkidle и стабилизации страницы
    2. Сохраняет полный скриншот tester-demo-dashboard.png
    3. Проверяет заголовок, бренд, карточки span-*, метрики и таблицу активности
    4. Сохраняет скриншот видимой области tester-demo-viewport.png
    """)
    def test_dashboard(self, runner):
        result = runner.run_scenario("dashboard")

        assert result.assertions_passed, "Проверки DOM должны пройти"
        dashboard, viewport = result.screenshots
        assert dashboard.name == "tester-demo-dashboard.png"
        assert viewport.name == "tester-demo-viewport.png"
        assert is_valid_png(dashboard), f"Некорректный PNG: {dashboard}"
        assert is_valid_png(viewport), f"Некорректный PNG: {viewport}"
        assert image_size(viewport) == (1280, 720), "Скриншот видимой области должен совпадать с окном"
        assert image_size(dashboard)[1] >= 720, "Полный скриншот не может быть ниже окна"

    @allure.title("Скриншоты мобильного и планшетного профиля")
    @allure.severity('NORMAL')
    @pytest.mark.parametrize("profile", [key for key in ALL_PROFILES if key != "dashboard"])
    def test_device_profiles(self, runner, profile):
        result = runner.run_scenario(profile)

        [screenshot] = result.screenshots
        assert screenshot.name == f"{VIEWPORT_PROFILES[profile]['scenario']}.png"
        assert is_valid_png(screenshot), f"Некорректный PNG: {screenshot}"
        assert image_size(screenshot)[0] >= VIEWPORT_PROFILES[profile]["width"]

    @allure.title("Повторный прогон дает снимок того же размера")
    @allure.severity('NORMAL')
    def test_rerun_keeps_dimensions(self, runner, tmp_path):
        first = runner.run_scenario("mobile").screenshots[0]
        kept = shutil.copy2(first, tmp_path / first.name)

        second = runner.run_scenario("mobile").screenshots[0]

        assert second == first
        assert same_dimensions(kept, second), "Размер скриншота изменился между прогонами"
