from playwright.sync_api import Page
from pages.base_page import BasePage
from locators.dashboard_locators import DashboardLocators
from config.constants import TESTER_DEMO_ROUTE, SETTLE_STRATEGY, SETTLE_DELAY, LAYOUT_STABLE_WINDOW
import allure
from typing import Optional


class TesterDemoPage(BasePage):
    """Страница tester-demo"""

    # Имя начинается с Test, pytest не должен собирать этот класс
    __test__ = False

    ROUTE = TESTER_DEMO_ROUTE

    def __init__(self, page: Page, base_url: Optional[str] = None, scenario: Optional[str] = None):
        super().__init__(page, base_url, scenario)
        self.locators = DashboardLocators()

    @allure.step("Открытие tester-demo")
    def open(self, settle_strategy: str = SETTLE_STRATEGY, settle_delay: int = SETTLE_DELAY,
             settle_window: int = LAYOUT_STABLE_WINDOW) -> bool:
        """Переход, ожидание networkidle и стабилизации. Возвращает результат settle()"""
        self.navigate(self.ROUTE)
        self.wait_for_network_idle()
        return self.settle(settle_strategy, settle_delay, settle_window)

    def span_cards_count(self) -> int:
        return self.count(self.locators.SPAN_CARDS)

    @allure.step("Проверка виджетов дашборда")
    def assert_dashboard_widgets(self) -> None:
        """Проверки DOM для десктопного сценария"""
        self.assert_element_contains_text(self.locators.HEADING, self.locators.HEADING_TEXT)
        self.assert_element_visible(self.locators.BRAND_LABEL)

        cards = self.span_cards_count()
        self.logger.info(f"Найдено карточек span-*: {cards}")
        if cards < self.locators.MIN_SPAN_CARDS:
            self._attach_failure_screenshot(f"span_cards {cards}")
            raise AssertionError(
                f"[{self.scenario}] Ожидалось не меньше {self.locators.MIN_SPAN_CARDS} карточек span-*, найдено {cards}"
            )

        for label in self.locators.METRIC_LABELS:
            self.assert_element_visible(label)

        self.assert_element_visible(self.locators.ACTIVITY_TABLE)
        self.logger.info("Все виджеты дашборда на месте")
