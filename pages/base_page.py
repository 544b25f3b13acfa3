from playwright.sync_api import Page, Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError, expect
import logging
import allure
from typing import Optional
from config.constants import (
    DEFAULT_BASE_URL, DEFAULT_TIMEOUT, PAGE_LOAD_TIMEOUT, NETWORK_IDLE_TIMEOUT,
    SETTLE_STRATEGY, SETTLE_DELAY, LAYOUT_STABLE_WINDOW, ERROR_MESSAGES
)
from utils.errors import NavigationError, ScenarioTimeoutError

# Ждет, пока в DOM не будет мутаций quietMs миллисекунд, но не дольше timeoutMs.
# Возвращает true, если страница успокоилась, false - если вышло время.
WAIT_FOR_STABLE_LAYOUT_JS = """
({ quietMs, timeoutMs }) => new Promise((resolve) => {
    let quietTimer = null;
    let limitTimer = null;
    const observer = new MutationObserver(() => {
        clearTimeout(quietTimer);
        quietTimer = setTimeout(() => finish(true), quietMs);
    });
    function finish(stable) {
        observer.disconnect();
        clearTimeout(quietTimer);
        clearTimeout(limitTimer);
        resolve(stable);
    }
    observer.observe(document, { subtree: true, childList: true, attributes: true, characterData: true });
    quietTimer = setTimeout(() => finish(true), quietMs);
    limitTimer = setTimeout(() => finish(false), timeoutMs);
})
"""


class BasePage:
    """Базовый класс для всех страниц приложения"""

    def __init__(self, page: Page, base_url: Optional[str] = None, scenario: Optional[str] = None):
        self.page = page
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip('/')
        self.scenario = scenario
        self.logger = logging.getLogger(self.__class__.__name__)

    @allure.step("Переход на страницу: {path}")
    def navigate(self, path: str = "") -> "BasePage":
        """Переход на страницу; недоступный адрес или ответ с ошибкой - NavigationError"""
        url = f"{self.base_url}/{path.lstrip('/')}"

        try:
            response = self.page.goto(url, timeout=PAGE_LOAD_TIMEOUT)
        except PlaywrightTimeoutError as e:
            self.logger.error(f"Таймаут при переходе на {url}: {str(e)}")
            raise ScenarioTimeoutError(
                f"{ERROR_MESSAGES['page_not_loaded']}: {url}", self.scenario, "navigate"
            ) from e
        except PlaywrightError as e:
            self.logger.error(f"Ошибка при переходе на {url}: {str(e)}")
            raise NavigationError(
                f"{ERROR_MESSAGES['unreachable']}: {url} ({e.message})", self.scenario, "navigate"
            ) from e

        if response is not None and not response.ok:
            self.logger.error(f"{url} ответил статусом {response.status}")
            raise NavigationError(
                f"{ERROR_MESSAGES['bad_response']}: {url} -> {response.status}", self.scenario, "navigate"
            )

        self.logger.info(f"Успешный переход на {url}")
        return self

    @allure.step("Ожидание networkidle")
    def wait_for_network_idle(self, timeout: int = NETWORK_IDLE_TIMEOUT) -> None:
        """Ожидание, пока на странице не останется активных запросов"""
        try:
            self.page.wait_for_load_state("networkidle", timeout=timeout)
            self.logger.info("Сеть простаивает, страница загружена")
        except PlaywrightTimeoutError as e:
            self.logger.error(f"networkidle не наступил за {timeout}мс")
            raise ScenarioTimeoutError(
                f"{ERROR_MESSAGES['timeout']}: networkidle ({timeout}мс)", self.scenario, "network-idle"
            ) from e

    @allure.step("Ожидание стабилизации страницы ({strategy})")
    def settle(self, strategy: str = SETTLE_STRATEGY, delay: int = SETTLE_DELAY,
               window: int = LAYOUT_STABLE_WINDOW) -> bool:
        """
        Дает странице дорисоваться после networkidle.

        fixed - просто пауза delay мс.
        stable - ждет window мс без мутаций DOM, но не дольше delay мс.
        Возвращает False, если за delay мс страница так и не успокоилась.
        """
        if strategy == "fixed":
            self.page.wait_for_timeout(delay)
            return True
        if strategy != "stable":
            raise ValueError(f"Неизвестная стратегия ожидания: {strategy}")

        stable = self.page.evaluate(WAIT_FOR_STABLE_LAYOUT_JS, {"quietMs": window, "timeoutMs": delay})
        if stable:
            self.logger.info(f"DOM не менялся {window}мс, страница стабильна")
        else:
            self.logger.warning(f"DOM продолжал меняться {delay}мс, снимаем как есть")
        return bool(stable)

    def count(self, selector: str) -> int:
        """Количество элементов по селектору"""
        return self.page.locator(selector).count()

    def _attach_failure_screenshot(self, name: str) -> None:
        """Прикладывает снимок страницы к отчету Allure при падении проверки"""
        try:
            allure.attach(
                self.page.screenshot(),
                name=f"Ошибка: {name}",
                attachment_type=allure.attachment_type.PNG
            )
        except PlaywrightError as e:
            self.logger.warning(f"Не удалось приложить скриншот ошибки: {e}")

    def assert_element_visible(self, selector: str, timeout: int = DEFAULT_TIMEOUT) -> None:
        """Проверка видимости элемента"""
        try:
            expect(self.page.locator(selector)).to_be_visible(timeout=timeout)
        except AssertionError:
            self._attach_failure_screenshot(f"assert_visible {selector}")
            raise AssertionError(f"[{self.scenario}] {ERROR_MESSAGES['element_not_visible']}: {selector}")

    def assert_element_contains_text(self, selector: str, expected_text: str, timeout: int = DEFAULT_TIMEOUT) -> None:
        """Проверка, что текст элемента содержит ожидаемую строку"""
        try:
            expect(self.page.locator(selector)).to_contain_text(expected_text, timeout=timeout)
        except AssertionError:
            self._attach_failure_screenshot(f"assert_text {selector}")
            raise AssertionError(
                f"[{self.scenario}] {ERROR_MESSAGES['text_mismatch']}: {selector} должен содержать '{expected_text}'"
            )
