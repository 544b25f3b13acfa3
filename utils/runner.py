"""
Прогон сценариев визуального регрессионного тестирования tester-demo.

Каждый сценарий получает свой контекст браузера с размерами и user agent
профиля, поэтому сценарии независимы и могут идти параллельно. Общий
только каталог скриншотов, а имена файлов в нем уникальны для сценария.
"""

import sys
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import allure
from playwright.sync_api import Browser, sync_playwright

from config.constants import (
    DEFAULT_BASE_URL, SCREENSHOTS_DIR, SETTLE_STRATEGY, SETTLE_DELAY, LAYOUT_STABLE_WINDOW
)
from config.viewport_config import ALL_PROFILES, get_profile, context_options
from pages.tester_demo_page import TesterDemoPage
from utils.config_loader import ConfigLoader
from utils.screenshot_utils import ScreenshotUtils

logger = logging.getLogger(__name__)


@dataclass
class ScenarioResult:
    scenario: str
    profile: str
    screenshots: List[Path] = field(default_factory=list)
    assertions_passed: bool = False
    settled: bool = False
    baseline_matches: Optional[bool] = None


class VisualRegressionRunner:
    """Открывает tester-demo в каждом профиле, снимает скриншоты и проверяет DOM"""

    def __init__(self, browser: Browser, base_url: str = DEFAULT_BASE_URL,
                 output_dir: Path = SCREENSHOTS_DIR, settle_strategy: str = SETTLE_STRATEGY,
                 settle_delay: int = SETTLE_DELAY, settle_window: int = LAYOUT_STABLE_WINDOW,
                 compare_baseline: bool = False):
        self.browser = browser
        self.base_url = base_url.rstrip('/')
        self.output_dir = Path(output_dir)
        self.settle_strategy = settle_strategy
        self.settle_delay = settle_delay
        self.settle_window = settle_window
        self.compare_baseline = compare_baseline
        self.logger = logging.getLogger(self.__class__.__name__)

    def run_scenario(self, profile_key: str) -> ScenarioResult:
        """
        Один сценарий: контекст -> переход -> networkidle -> стабилизация ->
        скриншот -> (проверки DOM) -> закрытие контекста.

        Любая ошибка прерывает сценарий и уходит наверх без повторов,
        контекст закрывается в любом случае.
        """
        profile = get_profile(profile_key)
        scenario = profile["scenario"]
        result = ScenarioResult(scenario=scenario, profile=profile_key)
        self.logger.info(
            f"[НАЧАЛО] Сценарий {scenario}: {profile['width']}x{profile['height']}, "
            f"user agent: {profile['user_agent'] or 'по умолчанию'}"
        )

        context = self.browser.new_context(**context_options(profile))
        try:
            page = context.new_page()
            tester_demo = TesterDemoPage(page, self.base_url, scenario)
            screenshots = ScreenshotUtils(page, self.output_dir, scenario)

            with allure.step(f"Сценарий {scenario}"):
                settle_strategy = profile["settle"] or self.settle_strategy
                result.settled = tester_demo.open(settle_strategy, self.settle_delay, self.settle_window)
                result.screenshots.append(screenshots.capture(scenario, full_page=profile["full_page"]))

                if profile["assert_widgets"]:
                    tester_demo.assert_dashboard_widgets()
                    result.assertions_passed = True
                    if profile["viewport_screenshot"]:
                        result.screenshots.append(
                            screenshots.capture(profile["viewport_screenshot"], full_page=False)
                        )

                if self.compare_baseline:
                    result.baseline_matches = all(
                        screenshots.compare_with_baseline(path.stem) for path in result.screenshots
                    )
        except Exception as e:
            self.logger.error(f"Сценарий {scenario} завершился с ошибкой: {e}")
            raise
        finally:
            context.close()

        self.logger.info(f"[КОНЕЦ] Сценарий {scenario}: {len(result.screenshots)} скриншот(ов)")
        return result

    def run_all(self, profile_keys: Optional[List[str]] = None) -> List[ScenarioResult]:
        """Прогоняет сценарии по очереди; первая ошибка прерывает прогон"""
        return [self.run_scenario(key) for key in (profile_keys or ALL_PROFILES)]


def main(argv: Optional[List[str]] = None, output_dir: Path = SCREENSHOTS_DIR) -> List[ScenarioResult]:
    """
    Запуск без pytest: python -m utils.runner [профиль ...]

    Без аргументов снимает только tester-demo-fixed.png, чтобы быстро
    посмотреть на страницу после правок верстки.
    """
    profile_keys = list(argv if argv is not None else sys.argv[1:]) or ["fixed"]
    base_url = ConfigLoader().get_base_url()

    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(headless=True)
        try:
            results = VisualRegressionRunner(browser, base_url=base_url, output_dir=output_dir).run_all(profile_keys)
        finally:
            browser.close()

    for result in results:
        for path in result.screenshots:
            logger.info(f"Скриншот сохранен в {path}")
    return results


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    main()
