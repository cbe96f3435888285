"""
Visual hierarchy assertions over computed CSS.

Pure helpers parse computed style values; ``VisualHierarchyInspector``
compares elements of a live page (e.g. location cards versus action
buttons) and raises ``AssertionError`` with the measured values.
"""
import re
import time
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from guia_harness.config_manager import BrowserConfig
from guia_harness.utils.logger import get_logger

logger = get_logger("visual")

RGB = Tuple[int, int, int]

_RGB_PATTERN = re.compile(r'rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)')
_LENGTH_PATTERN = re.compile(r'^\s*(-?\d+(?:\.\d+)?)\s*(px)?\s*$')


def parse_rgb(css_color: Optional[str]) -> Optional[RGB]:
    """Extract ``(r, g, b)`` from an ``rgb()``/``rgba()`` value."""
    if not css_color:
        return None
    match = _RGB_PATTERN.search(css_color.lower())
    if not match:
        return None
    return int(match.group(1)), int(match.group(2)), int(match.group(3))


def parse_px(css_length: str) -> float:
    """
    Convert a computed length such as ``"14.4px"`` to a float.

    Raises:
        ValueError: If the value is not a pixel length
    """
    match = _LENGTH_PATTERN.match(css_length or "")
    if not match:
        raise ValueError(f"Not a pixel length: {css_length!r}")
    return float(match.group(1))


def is_bluish(rgb: RGB, margin: int = 50) -> bool:
    r, g, b = rgb
    return b > r + margin and b > g + margin


def is_light(rgb: RGB, threshold: int = 200) -> bool:
    return all(channel > threshold for channel in rgb)


def has_subtle_shadow(box_shadow: str) -> bool:
    return box_shadow == "none" or "0px 0px" in box_shadow


class VisualHierarchyInspector:
    """Assertions comparing the visual weight of page elements."""

    def __init__(self, driver: WebDriver, config: Optional[BrowserConfig] = None):
        self.driver = driver
        self.config = config or BrowserConfig()

    def height_ratio(self, element: WebElement, reference: WebElement) -> float:
        reference_height = reference.size['height']
        if reference_height == 0:
            raise AssertionError("Reference element has zero height")
        return element.size['height'] / reference_height

    def assert_larger(
        self, element: WebElement, reference: WebElement, min_ratio: float = 1.0
    ) -> float:
        """
        Assert ``element`` is taller than ``reference`` by at least ``min_ratio``.

        Returns:
            The measured height ratio
        """
        height = element.size['height']
        reference_height = reference.size['height']
        if height <= reference_height:
            raise AssertionError(
                f"Element height ({height}px) should be greater than "
                f"reference height ({reference_height}px)"
            )
        ratio = self.height_ratio(element, reference)
        if ratio < min_ratio:
            raise AssertionError(
                f"Element should be at least {min_ratio}x taller than reference (ratio: {ratio:.2f})"
            )
        return ratio

    def assert_light_text(self, element: WebElement, threshold: int = 200) -> RGB:
        color = element.value_of_css_property("color")
        rgb = parse_rgb(color)
        if rgb is None or not is_light(rgb, threshold):
            raise AssertionError(f"Text should be white or very light: {color}")
        return rgb

    def assert_prominent(self, element: WebElement) -> None:
        """Prominent cards: colored background, light text, elevation, rounded corners."""
        bg_color = element.value_of_css_property("background-color")
        if "rgb" not in bg_color.lower():
            raise AssertionError(f"Background should be a color: {bg_color}")

        self.assert_light_text(element)

        box_shadow = element.value_of_css_property("box-shadow")
        if box_shadow == "none":
            raise AssertionError("Prominent element should have a box-shadow")

        border_radius = element.value_of_css_property("border-radius")
        if border_radius == "0px":
            raise AssertionError("Prominent element should have rounded corners")

    def assert_de_emphasized(self, element: WebElement) -> None:
        """De-emphasized controls: not primary blue, at most a subtle shadow."""
        bg_color = element.value_of_css_property("background-color")
        rgb = parse_rgb(bg_color)
        if rgb is not None and is_bluish(rgb):
            raise AssertionError(f"Element should not be blue (RGB: {rgb[0]}, {rgb[1]}, {rgb[2]})")

        box_shadow = element.value_of_css_property("box-shadow")
        if not has_subtle_shadow(box_shadow):
            raise AssertionError(f"Element shadow should be subtle: {box_shadow}")

    def assert_label_smaller(self, label: WebElement, value: WebElement) -> Tuple[float, float]:
        """
        Assert an uppercase label renders in a smaller font than its value.

        Returns:
            ``(label_size, value_size)`` in pixels
        """
        text_transform = label.value_of_css_property("text-transform")
        if "uppercase" not in text_transform.lower():
            raise AssertionError(f"Label should be uppercase, got text-transform: {text_transform}")

        label_size = parse_px(label.value_of_css_property("font-size"))
        value_size = parse_px(value.value_of_css_property("font-size"))
        if label_size >= value_size:
            raise AssertionError(
                f"Label ({label_size}px) should be smaller than value ({value_size}px)"
            )
        return label_size, value_size

    def assert_stacked(self, upper: WebElement, lower: WebElement) -> None:
        """Assert ``lower`` renders below ``upper`` (single-column layout)."""
        upper_y = upper.location['y']
        lower_y = lower.location['y']
        if lower_y <= upper_y:
            raise AssertionError(
                f"Elements should stack vertically (upper y={upper_y}, lower y={lower_y})"
            )

    def stylesheet_loaded(self, name: str) -> bool:
        for stylesheet in self.driver.find_elements(By.TAG_NAME, "link"):
            href = stylesheet.get_attribute("href")
            if href and name in href:
                return True
        return False

    @contextmanager
    def with_viewport(self, width: int, height: int, settle: float = 0.5) -> Iterator[None]:
        """Temporarily resize the window, restoring the configured size."""
        self.driver.set_window_size(width, height)
        if settle:
            time.sleep(settle)
        try:
            yield
        finally:
            self.driver.set_window_size(self.config.window_width, self.config.window_height)
