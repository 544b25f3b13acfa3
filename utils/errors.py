"""
Ошибки сценариев визуального тестирования.

Каждая ошибка знает сценарий и шаг, на котором он упал, чтобы pytest
показал понятную причину. Несовпадение DOM - обычный AssertionError.
"""

from typing import Optional


class VisualRegressionError(Exception):
    """Базовая ошибка сценария"""

    def __init__(self, message: str, scenario: Optional[str] = None, step: Optional[str] = None):
        self.message = message
        self.scenario = scenario
        self.step = step
        super().__init__(self.__str__())

    def __str__(self) -> str:
        prefix = f"[{self.scenario}] " if self.scenario else ""
        step = f"{self.step}: " if self.step else ""
        return f"{prefix}{step}{self.message}"


class NavigationError(VisualRegressionError):
    """Маршрут недоступен или ответ не успешный"""


class ScenarioTimeoutError(VisualRegressionError, TimeoutError):
    """Превышено время ожидания networkidle, стабилизации или элемента"""


class FilesystemError(VisualRegressionError, OSError):
    """Каталог для скриншотов не создан или файл не записан"""
