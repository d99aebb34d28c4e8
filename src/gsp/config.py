"""ContextVar-based render configuration for GSP.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The configuration decides how a document is turned into text: output mode,
whether the ``<!DOCTYPE html>`` convenience line is prepended, and whether
newline hints are honored.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from gsp.config import RenderConfig, OutputMode, render_config_context

    with render_config_context(RenderConfig(mode=OutputMode.XML, doctype=False)):
        xml = compile_markup(source)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from enum import Enum
from typing import Any


class OutputMode(Enum):
    """Markup dialect the renderer starts in."""

    HTML = "html"
    XML = "xml"


# Convenience line prepended to HTML output by compile_markup() and the CLI
HTML_DOCTYPE = "<!DOCTYPE html>"


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Attributes:
        mode: Start rendering in HTML or XML mode
        doctype: Prepend ``<!DOCTYPE html>`` (never in XML mode)
        newlines: Emit a line feed after elements marked with ``>``

    """

    mode: OutputMode = OutputMode.HTML
    doctype: bool = True
    newlines: bool = False

    @property
    def emits_doctype(self) -> bool:
        return self.doctype and self.mode is OutputMode.HTML

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "RenderConfig":
        """Create RenderConfig from dictionary.

        Unknown keys are silently ignored. ``mode`` may be given as an
        OutputMode or as its string value.

        Example:
            >>> RenderConfig.from_dict({"mode": "xml", "unknown_key": 1}).mode
            <OutputMode.XML: 'xml'>

        Raises:
            ValueError: If ``mode`` is not a known output mode.

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "mode" in filtered and not isinstance(filtered["mode"], OutputMode):
            filtered["mode"] = OutputMode(str(filtered["mode"]).lower())
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get current render configuration (thread-local)."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for current context."""
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to default configuration."""
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with render_config_context(RenderConfig(doctype=False)):
        ...     get_render_config().doctype
        False

    """
    token = _render_config.set(config)
    try:
        yield
    finally:
        _render_config.reset(token)


__all__ = [
    "HTML_DOCTYPE",
    "OutputMode",
    "RenderConfig",
    "get_render_config",
    "render_config_context",
    "reset_render_config",
    "set_render_config",
]
