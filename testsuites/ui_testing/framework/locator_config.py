"""
================================================================================
Selectors and Locator Configuration
================================================================================

Immutable value objects describing *what* to locate and *how* to wait for it.

    - Selector: a CSS or XPath expression tagged with its strategy
    - LocatorConfig: retry counts, timeout, description and injection options
    - merge_config: the single place where defaults and overrides meet

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from uitest_tools.common import get_config


DEFAULT_MAX_ATTEMPTS = 1
DEFAULT_TIMEOUT_MS = 5000
DEFAULT_DESCRIPTION = "element not found"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class SelectorStrategy(str, Enum):
    """How a selector value is interpreted by the browser engine."""
    CSS = "css"
    XPATH = "xpath"


@dataclass(frozen=True)
class Selector:
    """
    Descriptor identifying zero, one or many elements in a document.

    Usage:
        >>> form = Selector.css("form.login")
        >>> form.child_id("username")
        Selector(strategy=<SelectorStrategy.CSS: 'css'>, value='form.login #username')
        >>> Selector.xpath("//table").child_xpath("//tr[2]").value
        '//table//tr[2]'
    """
    strategy: SelectorStrategy
    value: str

    @classmethod
    def css(cls, value: str) -> "Selector":
        return cls(SelectorStrategy.CSS, value)

    @classmethod
    def xpath(cls, value: str) -> "Selector":
        return cls(SelectorStrategy.XPATH, value)

    def __str__(self) -> str:
        return f"By.{self.strategy.value}({self.value!r})"

    def engine_query(self) -> str:
        """Selector string understood by the Playwright selector engine."""
        return f"{self.strategy.value}={self.value}"

    # =========================================================================
    # Scoping
    # =========================================================================

    def _require(self, strategy: SelectorStrategy, method: str) -> None:
        if self.strategy is not strategy:
            raise ValueError(
                f"{method}() requires a {strategy.value} selector, got {self}"
            )

    def _scoped_css(self, child: str) -> "Selector":
        self._require(SelectorStrategy.CSS, "css scoping")
        value = f"{self.value} {child}" if self.value else child
        return Selector.css(value)

    def child_id(self, element_id: str) -> "Selector":
        return self._scoped_css(f"#{element_id}")

    def child_class(self, class_name: str) -> "Selector":
        return self._scoped_css(f".{class_name}")

    def child_tag(self, tag: str) -> "Selector":
        return self._scoped_css(tag)

    def child_attribute(self, key: str, value: str) -> "Selector":
        return self._scoped_css(f"[{key}='{value}']")

    def child_css(self, css: str) -> "Selector":
        return self._scoped_css(css)

    def child_xpath(self, expression: str) -> "Selector":
        self._require(SelectorStrategy.XPATH, "child_xpath")
        return Selector.xpath(f"{self.value}{expression}")


@dataclass(frozen=True)
class LocatorConfig:
    """
    Retry and wait settings for a single page element.

    Attributes:
        max_attempts: Locate-phase attempts (each waits up to timeout_ms)
        visibility_attempts: Visibility-phase attempts. None keeps the
            historical default of ``max_attempts + 1``.
        timeout_ms: Per-attempt wait in milliseconds
        description: Human description embedded in every error
        element_index: Which match to use when the selector matches several
        preresolved_element: Element handle (or awaitable resolving to one)
            used as-is, skipping both wait phases
    """
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    visibility_attempts: Optional[int] = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    description: str = DEFAULT_DESCRIPTION
    element_index: int = 0
    preresolved_element: Any = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not _is_int(self.max_attempts) or self.max_attempts < 1:
            raise ValueError(f"max_attempts must be a positive integer, got {self.max_attempts!r}")
        if self.visibility_attempts is not None and (
            not _is_int(self.visibility_attempts) or self.visibility_attempts < 1
        ):
            raise ValueError(
                f"visibility_attempts must be a positive integer or None, "
                f"got {self.visibility_attempts!r}"
            )
        if not _is_int(self.timeout_ms) or self.timeout_ms < 1:
            raise ValueError(f"timeout_ms must be a positive integer, got {self.timeout_ms!r}")
        if not _is_int(self.element_index) or self.element_index < 0:
            raise ValueError(
                f"element_index must be a non-negative integer, got {self.element_index!r}"
            )

    @property
    def effective_visibility_attempts(self) -> int:
        if self.visibility_attempts is not None:
            return self.visibility_attempts
        return self.max_attempts + 1

    @property
    def has_preresolved_element(self) -> bool:
        return self.preresolved_element is not None


ConfigOverrides = Union[LocatorConfig, Mapping[str, Any], None]

_FIELD_NAMES = {f.name for f in fields(LocatorConfig)}


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def default_locator_config() -> LocatorConfig:
    """
    Build the base configuration from the ``locator.*`` configuration keys.

    Values coming from environment variables are strings, hence the casts.
    """
    return LocatorConfig(
        max_attempts=int(get_config("locator.max_attempts", DEFAULT_MAX_ATTEMPTS)),
        visibility_attempts=_optional_int(get_config("locator.visibility_attempts")),
        timeout_ms=int(get_config("locator.timeout_ms", DEFAULT_TIMEOUT_MS)),
        description=str(get_config("locator.description", DEFAULT_DESCRIPTION)),
    )


def merge_config(overrides: ConfigOverrides = None, **kwargs: Any) -> LocatorConfig:
    """
    Merge configuration defaults with explicit overrides.

    Precedence (lowest to highest): configured defaults, ``overrides``
    (a LocatorConfig or a mapping of field names), keyword arguments.
    A LocatorConfig passed as ``overrides`` is taken as complete.

    Raises:
        ValueError: On unknown field names or invalid values
    """
    if isinstance(overrides, LocatorConfig):
        base = overrides
        values: Dict[str, Any] = {}
    else:
        base = default_locator_config()
        values = dict(overrides or {})
    values.update(kwargs)

    unknown = set(values) - _FIELD_NAMES
    if unknown:
        raise ValueError(f"Unknown locator config option(s): {', '.join(sorted(unknown))}")

    return replace(base, **values) if values else base


def config_as_dict(config: LocatorConfig) -> Dict[str, Any]:
    """Plain dict of the config without the injected element, for logging."""
    data = asdict(replace(config, preresolved_element=None))
    data["preresolved_element"] = config.has_preresolved_element
    return data


__all__ = [
    "SelectorStrategy",
    "Selector",
    "LocatorConfig",
    "default_locator_config",
    "merge_config",
    "config_as_dict",
]
