from __future__ import annotations

"""
Toolchain Configuration Domain.

Defines the immutable set of shell commands and flags written into the
shared definitions file, and loads overrides for it from JSON.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Tuple

from treemake.domain import constants as c
from treemake.domain.errors import ConfigError

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration Model
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolchainConfig:
    """
    Shell commands and flags shared by every generated Makefile.

    Attributes:
        cc: C compiler driver.
        cxx: C++ compiler driver.
        ar: Static archive creator.
        rm: File removal command used by the clean rules.
        ar_flags: Flags passed to the archiver before the output name.
        rm_flags: Flags passed to the removal command.
        static_cppflags: Preprocessor flags other than include directories.
        git_cmd: Command used to fetch external repositories.
    """
    cc: str = "gcc"
    cxx: str = "g++"
    ar: str = "ar"
    rm: str = "rm"
    ar_flags: str = "cr -o"
    rm_flags: str = "-f"
    static_cppflags: str = "-g -Wall -Wextra -Werror"
    git_cmd: str = "git clone"

    def common_assignments(self) -> List[Tuple[str, str]]:
        """
        Return the ordered variable assignments of the shared definitions file.
        """
        return [
            (c.CC_VAR, self.cc),
            (c.CXX_VAR, self.cxx),
            (c.AR_VAR, self.ar),
            (c.RM_VAR, self.rm),
            (c.STATIC_CPPFLAGS_VAR, self.static_cppflags),
            (c.AR_FLAGS_VAR, self.ar_flags),
            (c.RM_FLAGS_VAR, self.rm_flags),
        ]


DEFAULT_TOOLCHAIN = ToolchainConfig()


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_toolchain(path: str) -> ToolchainConfig:
    """
    Load toolchain overrides from a JSON object file.

    Known keys replace the defaults; unknown keys are logged and ignored.

    Args:
        path: Path to the JSON configuration file.

    Returns:
        ToolchainConfig: Defaults merged with the file's values.

    Raises:
        ConfigError: If the file is missing, unreadable, not a JSON object,
            or holds a non-string value for a known key.
    """
    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Failed to read config '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config '{path}' must contain a JSON object.")

    return merge_toolchain(DEFAULT_TOOLCHAIN, data)


def merge_toolchain(base: ToolchainConfig, overrides: Dict[str, Any]) -> ToolchainConfig:
    """
    Apply a mapping of overrides to a toolchain configuration.

    Args:
        base: The configuration to start from.
        overrides: Raw key/value pairs, typically parsed from JSON.

    Returns:
        ToolchainConfig: A new configuration instance.
    """
    known = {f.name for f in fields(ToolchainConfig)}
    clean: Dict[str, str] = {}

    for key, value in overrides.items():
        if key not in known:
            logger.warning(f"Ignoring unknown toolchain key: {key}")
            continue
        if not isinstance(value, str):
            raise ConfigError(f"Toolchain key '{key}' must be a string, got {type(value).__name__}.")
        clean[key] = value

    return replace(base, **clean)


def toolchain_to_dict(cfg: ToolchainConfig) -> Dict[str, str]:
    """Serialize a toolchain configuration for display or storage."""
    return asdict(cfg)
