"""
Caesar Toolkit Configuration Management
========================================

Centralized configuration for the Caesar toolkit using Python dataclasses
and TOML-based persistence.

Architecture follows the Twelve-Factor App methodology for configuration
management (Wiggins, 2011), separating config from code.

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[no-redef]


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "caesar.toml"


# ========================== Tool-Specific Config ===========================


@dataclass(frozen=False, slots=True)
class CaesarConfig:
    """Configuration for the Caesar cipher tool.

    Parameters governing how cryptanalysis results are judged and shown.
    None of them influence the cipher arithmetic itself.

    Reference:
        Sinkov, A. (1966). Elementary Cryptanalysis: A Mathematical
        Approach. Mathematical Association of America.
    """

    # Below this many letters a cracked key is flagged as unreliable
    min_crack_letters: int = 20
    # Print all 26 chi-squared totals after a crack
    show_scores: bool = False
    # Best-scoring brute-force rows to highlight
    highlight_candidates: int = 3


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings shared by every command.

    Controls logging verbosity, output format, and file encoding.
    """

    log_level: str = "WARNING"
    log_file: str = ""
    log_json: bool = False
    output_format: str = "console"
    encoding: str = "utf-8"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class ToolkitConfig:
    """Master configuration aggregating tool-specific and global settings.

    Usage:
        >>> config = ToolkitConfig.load()                  # from default path
        >>> config = ToolkitConfig.load("custom.toml")     # from custom path
        >>> print(config.caesar.min_crack_letters)
        20
        >>> print(config.global_settings.log_level)
        'WARNING'
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    caesar: CaesarConfig = field(default_factory=CaesarConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> ToolkitConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``caesar.toml`` in the
        project root.  Missing keys gracefully fall back to dataclass
        defaults -- no ``KeyError`` is raised.

        Args:
            path: Filesystem path to a TOML configuration file.
                  Defaults to ``<project_root>/caesar.toml``.

        Returns:
            A fully-populated :class:`ToolkitConfig` instance.

        Raises:
            FileNotFoundError: If the specified path does not exist
                *and* was explicitly provided by the caller.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            caesar=cls._build_section(CaesarConfig, raw.get("caesar", {})),
        )

    # ------------------------------------------------------------------ #
    #  Serialisation helpers
    # ------------------------------------------------------------------ #

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are ignored.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


# ========================= Module-level convenience ========================

def get_config(path: str | Path | None = None) -> ToolkitConfig:
    """Module-level convenience wrapper around :meth:`ToolkitConfig.load`."""
    return ToolkitConfig.load(path)
