import glob
import json
import logging
from pathlib import Path
from typing import Optional

from config.constants import ASSETS_DIR, TAILWIND_CONFIG_PATH
from config.style_config import STYLE_CONFIG

logger = logging.getLogger(__name__)

HEADER = "// Сгенерировано utils/style_config_writer.py, не редактировать вручную\n"


def render_tailwind_config(style_config: Optional[dict] = None) -> str:
    """Формирует текст tailwind.config.js (CommonJS) из словаря конфигурации"""
    style_config = STYLE_CONFIG if style_config is None else style_config
    data = {key: value for key, value in style_config.items() if key != "plugins"}
    body = json.dumps(data, indent=2, ensure_ascii=False)

    # Плагины подключаются через require(), это не JSON
    plugins = style_config.get("plugins", [])
    if plugins:
        requires = ",\n".join(f'    require("{name}")' for name in plugins)
        plugins_block = f'"plugins": [\n{requires}\n  ]'
    else:
        plugins_block = '"plugins": []'

    # json.dumps всегда заканчивается на "\n}"
    body = f"{body[:-2]},\n  {plugins_block}\n}}"
    return f"{HEADER}module.exports = {body};\n"


def write_tailwind_config(path: Path = TAILWIND_CONFIG_PATH, style_config: Optional[dict] = None) -> Path:
    """Записывает tailwind.config.js для внешнего сборщика CSS"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_tailwind_config(style_config), encoding="utf-8")
    logger.info(f"Конфигурация Tailwind записана: {path}")
    return path


def is_tailwind_config_current(path: Path = TAILWIND_CONFIG_PATH, style_config: Optional[dict] = None) -> bool:
    """Проверяет, что файл на диске совпадает с тем, что сгенерировал бы модуль"""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Файл конфигурации Tailwind не найден: {path}")
        return False
    return path.read_text(encoding="utf-8") == render_tailwind_config(style_config)


def find_unmatched_content_globs(root: Path = ASSETS_DIR, style_config: Optional[dict] = None) -> list:
    """
    Возвращает шаблоны content, под которые не попал ни один файл.

    Такие шаблоны не ошибка, но из-за них сборщик может вычистить нужные
    классы, поэтому о них пишется предупреждение.
    """
    style_config = STYLE_CONFIG if style_config is None else style_config
    unmatched = []
    for pattern in style_config.get("content", []):
        matches = glob.glob(pattern, root_dir=str(root), recursive=True)
        if not matches:
            unmatched.append(pattern)
            logger.warning(f"Шаблон content не нашел ни одного файла: {pattern} (от {root})")
    return unmatched


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    write_tailwind_config()
    find_unmatched_content_globs()
