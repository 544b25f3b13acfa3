"""
Конфигурация Tailwind для страницы tester-demo.

Значения читает внешний сборщик CSS через assets/tailwind.config.js,
файл генерируется из этого модуля (см. utils/style_config_writer.py).
"""

MAX_SPAN = 12


def safelist_span_classes(max_span: int = MAX_SPAN) -> list:
    """Классы span-1..span-N, которые страница собирает динамически"""
    return [f"span-{n}" for n in range(1, max_span + 1)]


# Файлы, в которых сборщик ищет используемые классы
CONTENT = [
    "./js/**/*.js",
    "../lib/foundation_web/**/*.*ex",
]

# span-N не находятся статическим поиском, поэтому не должны вычищаться
SAFELIST = safelist_span_classes()

SPACING = {
    "1": "4px",
    "2": "8px",
    "3": "12px",
    "4": "16px",
    "5": "20px",
    "6": "24px",
    "8": "32px",
    "10": "40px",
    "12": "48px",
    "16": "64px",
    "20": "80px",
    "24": "96px",
}

GRID_TEMPLATE_COLUMNS = {
    "12": f"repeat({MAX_SPAN}, minmax(0, 1fr))",
}

# extend дополняет базовую шкалу Tailwind, а не заменяет её
THEME = {
    "extend": {
        "spacing": SPACING,
        "gridTemplateColumns": GRID_TEMPLATE_COLUMNS,
    }
}

PLUGINS = [
    "@tailwindcss/container-queries",
]

STYLE_CONFIG = {
    "content": CONTENT,
    "safelist": SAFELIST,
    "theme": THEME,
    "plugins": PLUGINS,
}
