# Copyright 2026 Cisco Systems, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""
Static diagnostic lookup tables.

The tables describe which diagnostic types are always ignored, which suppress
codes belong exclusively to the standalone checker, which types are known to
misfire in synthetic or legacy code, and which categories the compiler should
never run.  They are loaded once per process and never mutated afterwards.

Usage
-----
    from warnings_guard.core.diagnostics import DiagnosticTables

    tables = DiagnosticTables.default()
    tables = DiagnosticTables.from_yaml("my_tables.yaml")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from ..config.constants import WarningsGuardConstants
from .exceptions import PolicyConfigError
from .models import DiagnosticCategory, DiagnosticType

logger = logging.getLogger(__name__)

_TYPE_SECTIONS = ("always_ignore", "ignore_for_synthetic", "ignore_for_legacy")


@dataclass(frozen=True)
class DiagnosticTables:
    """Process-wide, read-only lookup tables consulted by the resolver."""

    always_ignore: frozenset[DiagnosticType] = field(default_factory=frozenset)
    checker_exclusive_keys: frozenset[str] = field(default_factory=frozenset)
    ignore_for_synthetic: frozenset[DiagnosticType] = field(default_factory=frozenset)
    ignore_for_legacy: frozenset[DiagnosticType] = field(default_factory=frozenset)
    checker_only_categories: frozenset[DiagnosticCategory] = field(default_factory=frozenset)

    # -----------------------------------------------------------------------
    # Construction helpers
    # -----------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        *,
        always_ignore: Iterable[str | DiagnosticType] = (),
        checker_exclusive_keys: Iterable[str] = (),
        ignore_for_synthetic: Iterable[str | DiagnosticType] = (),
        ignore_for_legacy: Iterable[str | DiagnosticType] = (),
        checker_only_categories: Iterable[str | DiagnosticCategory] = (),
    ) -> DiagnosticTables:
        """Build tables from plain keys/names (handy for test fixtures)."""
        return cls(
            always_ignore=frozenset(DiagnosticType.of(t) for t in always_ignore),
            checker_exclusive_keys=frozenset(str(k) for k in checker_exclusive_keys),
            ignore_for_synthetic=frozenset(DiagnosticType.of(t) for t in ignore_for_synthetic),
            ignore_for_legacy=frozenset(DiagnosticType.of(t) for t in ignore_for_legacy),
            checker_only_categories=frozenset(DiagnosticCategory.of(c) for c in checker_only_categories),
        )

    @classmethod
    def default(cls) -> DiagnosticTables:
        """Return the built-in tables that ship with the package (cached)."""
        return _load_default_tables()

    @classmethod
    def from_yaml(cls, path: str | Path) -> DiagnosticTables:
        """Load tables from a YAML file.

        Unlike the policy, tables are not merged on top of the defaults: the
        file is the complete set of tables.
        """
        path = Path(path)
        if not path.exists():
            raise PolicyConfigError(f"Diagnostics file not found: {path}")
        if not path.is_file():
            raise PolicyConfigError(f"Diagnostics path is not a file: {path}")

        try:
            with open(path, encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as e:
            raise PolicyConfigError(f"Invalid YAML in diagnostics file {path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise PolicyConfigError(f"Failed to read diagnostics file {path}: {e}") from e

        if not isinstance(raw, dict):
            raise PolicyConfigError(f"Diagnostics file must be a mapping: {path}")

        logger.debug("Loaded diagnostic tables from %s", path)
        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DiagnosticTables:
        for section in (*_TYPE_SECTIONS, "checker_exclusive_keys", "checker_only_categories"):
            _require_string_list(d, section)

        return cls.create(
            always_ignore=d.get("always_ignore") or [],
            checker_exclusive_keys=d.get("checker_exclusive_keys") or [],
            ignore_for_synthetic=d.get("ignore_for_synthetic") or [],
            ignore_for_legacy=d.get("ignore_for_legacy") or [],
            checker_only_categories=d.get("checker_only_categories") or [],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "always_ignore": sorted(t.key for t in self.always_ignore),
            "checker_exclusive_keys": sorted(self.checker_exclusive_keys),
            "ignore_for_synthetic": sorted(t.key for t in self.ignore_for_synthetic),
            "ignore_for_legacy": sorted(t.key for t in self.ignore_for_legacy),
            "checker_only_categories": sorted(c.name for c in self.checker_only_categories),
        }


def _require_string_list(d: dict[str, Any], section: str) -> None:
    value = d.get(section)
    if value is None:
        return
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise PolicyConfigError(f"'{section}' must be a list of non-empty strings")


@lru_cache(maxsize=1)
def _load_default_tables() -> DiagnosticTables:
    return DiagnosticTables.from_yaml(WarningsGuardConstants.DEFAULT_DIAGNOSTICS_PATH)
