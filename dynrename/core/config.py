#!/usr/bin/env python3
"""
config.py
---------
Rename directive collection from the command line and rules files.

A rules file is YAML holding either a plain list of directives:

    - "status>state"
    - "profile.fullname>profile.name"
    - "*address.zip>*address.postcode"

or a mapping with a `replace` key holding that list.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import List, Optional, Sequence

# --- Third party imports ---
import yaml

# --- Local imports ---
from dynrename.core.exceptions import ConfigError


def load_rules_file(path: Path) -> List[str]:
    """
    Read rename directives from a YAML rules file.

    Args:
        path: Rules file location

    Returns:
        Directives in file order

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or does
            not hold a list of strings
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read rules file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in rules file {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("replace")

    if data is None:
        return []

    if not isinstance(data, list):
        raise ConfigError(f"Rules file {path} must contain a list of directives")

    directives = []
    for item in data:
        if not isinstance(item, str):
            raise ConfigError(
                f"Rules file {path} has a non-string directive: {item!r}"
            )
        directives.append(item)
    return directives


def collect_directives(
    replace: Sequence[str], rules_file: Optional[Path] = None
) -> List[str]:
    """
    Combine directives from a rules file and `--replace` options.

    File directives come first, followed by command-line ones; rule order
    decides which rule fires first at a level.

    Raises:
        ConfigError: If no directive was supplied
    """
    directives: List[str] = []
    if rules_file is not None:
        directives.extend(load_rules_file(rules_file))
    directives.extend(replace)

    if not directives:
        raise ConfigError("No rename directives given (use --replace or --rules-file)")
    return directives
