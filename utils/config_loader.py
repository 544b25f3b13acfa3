import os
import json
from dotenv import load_dotenv
from typing import Dict, Any, Optional

from config.constants import (
    CONFIG_PATH, DEFAULT_BASE_URL, BASE_URL_ENV_VAR,
    SETTLE_STRATEGY, SETTLE_DELAY, LAYOUT_STABLE_WINDOW
)


class ConfigLoader:
    def __init__(self, config_path: str = str(CONFIG_PATH)):
        load_dotenv()  # Загружаем переменные окружения из .env файла
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Загружает конфигурацию из JSON файла и подставляет переменные окружения"""
        with open(self.config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)

        # Рекурсивно обрабатываем все значения в конфигурации
        self._process_env_variables(config)
        return config

    def _process_env_variables(self, config: Dict[str, Any]) -> None:
        """Рекурсивно обрабатывает словарь и подставляет переменные окружения"""
        for key, value in config.items():
            if isinstance(value, dict):
                self._process_env_variables(value)
            elif isinstance(value, str) and value.startswith("${") and value.endswith("}"):
                env_var = value[2:-1]  # Убираем ${ и }
                config[key] = os.getenv(env_var, "")

    def get_environment_config(self, env_name: Optional[str] = None) -> Dict[str, Any]:
        """Получает конфигурацию для указанного окружения"""
        env_name = env_name or self.config.get("defaultEnvironment", "local")
        environments = self.config.get("environments", {})
        if env_name not in environments:
            available = ", ".join(environments.keys())
            raise KeyError(f"Окружение '{env_name}' не найдено. Доступные: {available}")
        return environments[env_name]

    def get_base_url(self, env_name: Optional[str] = None) -> str:
        """
        Базовый URL тестируемого сервера.

        Переменная TESTER_DEMO_BASE_URL важнее config.json; пустое значение
        в окружении означает адрес по умолчанию.
        """
        override = os.getenv(BASE_URL_ENV_VAR)
        if override:
            return override.rstrip('/')
        base_url = self.get_environment_config(env_name).get("baseUrl") or DEFAULT_BASE_URL
        return base_url.rstrip('/')

    def get_settle_config(self) -> Dict[str, Any]:
        """Настройки ожидания стабилизации страницы"""
        settle = self.config.get("settle", {})
        return {
            "strategy": settle.get("strategy", SETTLE_STRATEGY),
            "delay": settle.get("delay", SETTLE_DELAY),
            "window": settle.get("window", LAYOUT_STABLE_WINDOW),
        }
