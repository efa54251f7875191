"""
Translator Configuration
========================

Settings that change how the translator reacts to code it cannot handle.
Configuration can come from:
- Default values (defined here)
- Environment variables (TranslatorConfig.from_env)
- Explicit keyword arguments (CLI options, library callers)

Copyright (c) 2025-2026 AVM1 SDK Contributors
"""

from dataclasses import dataclass
import os


_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable, keeping the default for junk."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return default


@dataclass
class TranslatorConfig:
    """
    Configuration for block translation.

    Attributes:
        strict: Raise TooDynamicError when an operand cannot be resolved
            statically, instead of stopping quietly with a partial result
            (default: False)
        warn_extra_blocks: Log a warning when a graph has blocks beyond
            the head block, which are not translated (default: True)
    """
    strict: bool = False
    warn_extra_blocks: bool = True

    @classmethod
    def from_env(cls) -> "TranslatorConfig":
        """
        Create TranslatorConfig from environment variables.

        Environment variables (all optional):
            AVM1_STRICT: "1"/"true" to enable strict mode
            AVM1_WARN_EXTRA_BLOCKS: "0"/"false" to silence the extra block warning

        Returns:
            TranslatorConfig with values from environment variables
        """
        config = cls()
        config.strict = _env_flag("AVM1_STRICT", config.strict)
        config.warn_extra_blocks = _env_flag("AVM1_WARN_EXTRA_BLOCKS", config.warn_extra_blocks)
        return config
