"""Locator strategies for finding elements."""

from __future__ import annotations

from dataclasses import dataclass

from selenium.webdriver.common.by import By as SeleniumBy

# Map short strategy names to the wire protocol strategy strings
STRATEGY_MAP = {
    "css": SeleniumBy.CSS_SELECTOR,
    "xpath": SeleniumBy.XPATH,
    "id": SeleniumBy.ID,
    "name": SeleniumBy.NAME,
    "class": SeleniumBy.CLASS_NAME,
    "tag": SeleniumBy.TAG_NAME,
    "link_text": SeleniumBy.LINK_TEXT,
    "partial_link_text": SeleniumBy.PARTIAL_LINK_TEXT,
}


@dataclass(frozen=True)
class By:
    """A ``(strategy, value)`` pair sent as ``{"using", "value"}``."""

    strategy: str
    value: str

    @classmethod
    def from_strategy(cls, strategy: str, value: str) -> By:
        """
        Build a locator from a short strategy name.

        Args:
            strategy: Locator strategy name (css, xpath, id, name, class, tag, link_text)
            value: Selector string

        Raises:
            ValueError: If strategy is not supported
        """
        key = strategy.lower()
        if key not in STRATEGY_MAP:
            raise ValueError(
                f"Unsupported locator strategy: {strategy}. "
                f"Supported: {list(STRATEGY_MAP.keys())}"
            )
        return cls(STRATEGY_MAP[key], value)

    @classmethod
    def css(cls, value: str) -> By:
        return cls(SeleniumBy.CSS_SELECTOR, value)

    @classmethod
    def xpath(cls, value: str) -> By:
        return cls(SeleniumBy.XPATH, value)

    @classmethod
    def id(cls, value: str) -> By:
        return cls(SeleniumBy.ID, value)

    @classmethod
    def name(cls, value: str) -> By:
        return cls(SeleniumBy.NAME, value)

    @classmethod
    def class_name(cls, value: str) -> By:
        return cls(SeleniumBy.CLASS_NAME, value)

    @classmethod
    def tag_name(cls, value: str) -> By:
        return cls(SeleniumBy.TAG_NAME, value)

    @classmethod
    def link_text(cls, value: str) -> By:
        return cls(SeleniumBy.LINK_TEXT, value)

    @classmethod
    def partial_link_text(cls, value: str) -> By:
        return cls(SeleniumBy.PARTIAL_LINK_TEXT, value)

    def to_json(self) -> dict:
        return {"using": self.strategy, "value": self.value}
