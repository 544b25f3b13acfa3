import os
import shutil
import logging
from pathlib import Path
from typing import Optional, Tuple
from playwright.sync_api import Page, Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError
import allure
from PIL import Image, ImageChops, UnidentifiedImageError
import numpy as np
from config.constants import SCREENSHOTS_DIR, VISUAL_TESTING, ERROR_MESSAGES
from utils.errors import FilesystemError, ScenarioTimeoutError, VisualRegressionError

logger = logging.getLogger(__name__)


def is_valid_png(path) -> bool:
    """Файл существует, не пустой и читается как PNG"""
    path = Path(path)
    if not path.is_file() or path.stat().st_size == 0:
        return False
    try:
        with Image.open(path) as image:
            image.verify()
            return image.format == "PNG"
    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"Файл {path} не является корректным PNG: {e}")
        return False


def image_size(path) -> Tuple[int, int]:
    """Размер изображения (ширина, высота)"""
    with Image.open(path) as image:
        return image.size


def same_dimensions(path_a, path_b) -> bool:
    """Два снимка одного сценария должны совпадать по размеру, не по байтам"""
    return image_size(path_a) == image_size(path_b)


class ScreenshotUtils:
    """Утилиты для создания и сравнения скриншотов"""

    def __init__(self, page: Page, output_dir: Path = SCREENSHOTS_DIR, scenario: Optional[str] = None):
        self.page = page
        self.output_dir = Path(output_dir)
        self.scenario = scenario
        self.baseline_dir = self.output_dir / "baseline"
        self.diff_dir = self.output_dir / "diff"
        self.logger = logging.getLogger(self.__class__.__name__)

    def ensure_output_dir(self) -> Path:
        """Создает каталог для скриншотов, если его нет (повторный вызов безопасен)"""
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.logger.error(f"{ERROR_MESSAGES['dir_not_created']}: {self.output_dir}: {e}")
            raise FilesystemError(
                f"{ERROR_MESSAGES['dir_not_created']}: {self.output_dir} ({e})", self.scenario, "prepare-output"
            ) from e
        return self.output_dir

    def screenshot_path(self, name: str) -> Path:
        return self.output_dir / f"{name}.png"

    @allure.step("Скриншот: {name}")
    def capture(self, name: str, full_page: bool = True) -> Path:
        """
        Делает скриншот и сохраняет его в <output_dir>/<name>.png.

        Файл пишется через временный и переименовывается, так что на диске
        не остается недописанных PNG. Повторный запуск перезаписывает снимок.
        """
        self.ensure_output_dir()
        path = self.screenshot_path(name)
        tmp_path = path.with_name(f"{path.name}.tmp")

        try:
            image = self.page.screenshot(full_page=full_page, type="png")
        except PlaywrightTimeoutError as e:
            self.logger.error(f"Таймаут при снятии скриншота {name}: {str(e)}")
            raise ScenarioTimeoutError(
                f"{ERROR_MESSAGES['timeout']}: скриншот {name}", self.scenario, "capture"
            ) from e
        except PlaywrightError as e:
            self.logger.error(f"Ошибка при снятии скриншота {name}: {str(e)}")
            raise VisualRegressionError(
                f"{ERROR_MESSAGES['screenshot_failed']}: {name} ({e.message})", self.scenario, "capture"
            ) from e

        try:
            tmp_path.write_bytes(image)
            os.replace(tmp_path, path)
        except OSError as e:
            self.logger.error(f"{ERROR_MESSAGES['screenshot_not_written']}: {path}: {e}")
            tmp_path.unlink(missing_ok=True)
            raise FilesystemError(
                f"{ERROR_MESSAGES['screenshot_not_written']}: {path} ({e})", self.scenario, "capture"
            ) from e

        allure.attach.file(
            str(path),
            name=f"📸 {name}",
            attachment_type=allure.attachment_type.PNG
        )
        self.logger.info(f"Скриншот сохранен: {path}")
        return path

    def compare_with_baseline(self, name: str, threshold: float = VISUAL_TESTING["threshold"]) -> bool:
        """
        Сравнивает сохраненный <name>.png с эталоном.

        Если эталона нет, текущий снимок становится эталоном. При превышении
        порога различий рядом сохраняется diff-изображение.
        """
        actual_path = self.screenshot_path(name)
        baseline_path = self.baseline_dir / f"{name}.png"

        if not baseline_path.exists():
            baseline_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(actual_path, baseline_path)
            allure.attach.file(
                str(baseline_path),
                name="📋 Создан базовый скриншот",
                attachment_type=allure.attachment_type.PNG
            )
            self.logger.info(f"Создан базовый скриншот: {baseline_path}")
            return True

        diff_percentage, diff = self.diff_ratio(baseline_path, actual_path)
        self.logger.info(f"Различий в скриншоте {name}: {diff_percentage:.2%}")

        if diff_percentage <= threshold:
            return True

        diff_path = self.diff_dir / f"{name}_diff.png"
        diff_path.parent.mkdir(parents=True, exist_ok=True)
        diff.save(diff_path)

        allure.attach.file(str(baseline_path), name="📋 Базовый скриншот", attachment_type=allure.attachment_type.PNG)
        allure.attach.file(str(actual_path), name="📸 Текущий скриншот", attachment_type=allure.attachment_type.PNG)
        allure.attach.file(str(diff_path), name="🔍 Различия", attachment_type=allure.attachment_type.PNG)
        allure.attach(
            f"Процент различий: {diff_percentage:.2%}\nПорог: {threshold:.2%}",
            name="📊 Статистика сравнения",
            attachment_type=allure.attachment_type.TEXT
        )

        self.logger.warning(f"Превышен порог различий для {name}: {diff_percentage:.2%} > {threshold:.2%}")
        return False

    def diff_ratio(self, baseline_path, actual_path) -> Tuple[float, Image.Image]:
        """Доля отличающихся пикселей и diff-изображение"""
        with Image.open(baseline_path) as img:
            baseline = img.convert('RGB')
        with Image.open(actual_path) as img:
            actual = img.convert('RGB')

        # Приводим к одинаковому размеру если нужно
        if baseline.size != actual.size:
            self.logger.warning(f"Размеры скриншотов различаются: {baseline.size} vs {actual.size}")
            actual = actual.resize(baseline.size, Image.Resampling.LANCZOS)

        diff = ImageChops.difference(baseline, actual)
        diff_array = np.array(diff)
        return np.count_nonzero(diff_array) / diff_array.size, diff
