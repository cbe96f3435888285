"""Tests for visual hierarchy assertions."""

from typing import Dict
from unittest.mock import Mock

import pytest
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from guia_harness.browser.visual import (
    VisualHierarchyInspector,
    has_subtle_shadow,
    is_bluish,
    is_light,
    parse_px,
    parse_rgb,
)
from guia_harness.config_manager import BrowserConfig


def element(css: Dict[str, str] = None, height: int = 50, y: int = 0, href: str = None) -> Mock:
    el = Mock(spec=WebElement)
    el.size = {"height": height, "width": 300}
    el.location = {"x": 0, "y": y}
    el.value_of_css_property.side_effect = lambda name: (css or {}).get(name, "")
    el.get_attribute.return_value = href
    return el


@pytest.fixture
def inspector() -> VisualHierarchyInspector:
    return VisualHierarchyInspector(Mock(spec=WebDriver))


PROMINENT_CARD = {
    "background-color": "rgb(30, 136, 229)",
    "color": "rgb(255, 255, 255)",
    "box-shadow": "rgba(0, 0, 0, 0.2) 0px 4px 8px 0px",
    "border-radius": "12px",
}


class TestParsing:
    @pytest.mark.parametrize("value,expected", [
        ("rgb(255, 255, 255)", (255, 255, 255)),
        ("rgba(0, 0, 0, 0.5)", (0, 0, 0)),
        ("RGB(10,20,30)", (10, 20, 30)),
        ("transparent", None),
        ("", None),
        (None, None),
    ])
    def test_parse_rgb(self, value, expected):
        assert parse_rgb(value) == expected

    @pytest.mark.parametrize("value,expected", [("14.4px", 14.4), ("16px", 16.0), ("12", 12.0)])
    def test_parse_px(self, value, expected):
        assert parse_px(value) == expected

    @pytest.mark.parametrize("value", ["1.2em", "auto", ""])
    def test_parse_px_rejects_other_units(self, value):
        with pytest.raises(ValueError):
            parse_px(value)

    def test_color_predicates(self):
        assert is_bluish((30, 100, 229))
        assert not is_bluish((200, 200, 220))
        assert is_light((255, 250, 240))
        assert not is_light((255, 255, 100))

    @pytest.mark.parametrize("shadow,subtle", [
        ("none", True),
        ("rgba(0, 0, 0, 0.1) 0px 0px 2px 0px", True),
        ("rgba(0, 0, 0, 0.3) 0px 6px 12px 0px", False),
    ])
    def test_has_subtle_shadow(self, shadow, subtle):
        assert has_subtle_shadow(shadow) is subtle


class TestInspector:
    def test_assert_larger_returns_ratio(self, inspector):
        assert inspector.assert_larger(element(height=150), element(height=50), min_ratio=2.0) == 3.0

    def test_assert_larger_fails_when_not_taller(self, inspector):
        with pytest.raises(AssertionError, match=r"Element height \(40px\)"):
            inspector.assert_larger(element(height=40), element(height=50))

    def test_assert_larger_fails_below_ratio(self, inspector):
        with pytest.raises(AssertionError, match="ratio: 1.20"):
            inspector.assert_larger(element(height=60), element(height=50), min_ratio=1.5)

    def test_height_ratio_zero_reference(self, inspector):
        with pytest.raises(AssertionError):
            inspector.height_ratio(element(height=10), element(height=0))

    def test_assert_prominent(self, inspector):
        inspector.assert_prominent(element(PROMINENT_CARD))

    @pytest.mark.parametrize("override,message", [
        ({"color": "rgb(20, 20, 20)"}, "white or very light"),
        ({"box-shadow": "none"}, "box-shadow"),
        ({"border-radius": "0px"}, "rounded corners"),
        ({"background-color": "transparent"}, "Background should be a color"),
    ])
    def test_assert_prominent_failures(self, inspector, override, message):
        with pytest.raises(AssertionError, match=message):
            inspector.assert_prominent(element({**PROMINENT_CARD, **override}))

    def test_assert_de_emphasized(self, inspector):
        inspector.assert_de_emphasized(element({
            "background-color": "rgb(240, 240, 240)",
            "box-shadow": "none",
        }))

    def test_assert_de_emphasized_rejects_primary_blue(self, inspector):
        with pytest.raises(AssertionError, match=r"RGB: 30, 100, 229"):
            inspector.assert_de_emphasized(element({
                "background-color": "rgb(30, 100, 229)",
                "box-shadow": "none",
            }))

    def test_assert_label_smaller(self, inspector):
        label = element({"text-transform": "uppercase", "font-size": "12px"})
        value = element({"font-size": "18px"})

        assert inspector.assert_label_smaller(label, value) == (12.0, 18.0)

    def test_assert_label_smaller_requires_uppercase(self, inspector):
        label = element({"text-transform": "none", "font-size": "12px"})
        with pytest.raises(AssertionError, match="uppercase"):
            inspector.assert_label_smaller(label, element({"font-size": "18px"}))

    def test_assert_stacked(self, inspector):
        inspector.assert_stacked(element(y=100), element(y=300))
        with pytest.raises(AssertionError, match="stack vertically"):
            inspector.assert_stacked(element(y=300), element(y=300))

    def test_stylesheet_loaded(self, inspector):
        inspector.driver.find_elements.return_value = [
            element(href=None),
            element(href="http://localhost:8080/src/location-highlights.css"),
        ]

        assert inspector.stylesheet_loaded("location-highlights.css")
        assert not inspector.stylesheet_loaded("missing.css")

    def test_with_viewport_restores_configured_size(self):
        driver = Mock(spec=WebDriver)
        inspector = VisualHierarchyInspector(driver, BrowserConfig(window_width=1024, window_height=700))

        with pytest.raises(RuntimeError):
            with inspector.with_viewport(375, 667, settle=0):
                driver.set_window_size.assert_called_with(375, 667)
                raise RuntimeError("assertion inside viewport")

        driver.set_window_size.assert_called_with(1024, 700)
