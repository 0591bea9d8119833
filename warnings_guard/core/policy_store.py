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
Policy store: the static, per-session configuration the resolver consults.

A ``PolicyStore`` captures which source roots map paths to module names, which
modules are legacy (held to a relaxed bar), which suppress codes each module
declares, and which diagnostic types are suppressed everywhere.

Usage
-----
    from warnings_guard.core.policy_store import PolicyStore

    # Load built-in defaults
    store = PolicyStore.default()

    # Load a project policy (merges on top of defaults)
    store = PolicyStore.from_yaml("warnings_policy.yaml")

    # Dump the current (including default) policy for editing
    store.to_yaml("generated_policy.yaml")

The store is immutable; build a new one instead of editing it.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from ..config.constants import WarningsGuardConstants
from .exceptions import PolicyConfigError
from .models import DiagnosticType
from .module_paths import ModuleNameResolver, ModulePathResolver

logger = logging.getLogger(__name__)

_DEFAULT_POLICY_PATH = WarningsGuardConstants.DEFAULT_POLICY_PATH


@dataclass(frozen=True)
class PolicyStore:
    """Immutable bundle of roots, legacy modules and suppressions."""

    roots: tuple[str, ...] = ()
    legacy_modules: frozenset[str] = field(default_factory=frozenset)
    suppressions: Mapping[str, frozenset[DiagnosticType]] = field(default_factory=lambda: MappingProxyType({}))
    global_suppressions: frozenset[DiagnosticType] = field(default_factory=frozenset)

    # Metadata
    policy_name: str = "default"
    policy_version: str = "1.0"

    # -----------------------------------------------------------------------
    # Lookups
    # -----------------------------------------------------------------------

    def is_suppressed_in(self, module: str, diagnostic_type: DiagnosticType) -> bool:
        """Return ``True`` if *module* declares a suppress code for *diagnostic_type*."""
        return diagnostic_type in self.suppressions.get(module, frozenset())

    def fingerprint(self) -> str:
        """SHA-256 of the canonical policy, for traceability in reports."""
        canonical = json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()

    # -----------------------------------------------------------------------
    # Construction helpers
    # -----------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        *,
        roots: Iterable[str] = (),
        legacy_modules: Iterable[str] = (),
        suppressions: Mapping[str, Iterable[str | DiagnosticType]] | None = None,
        global_suppressions: Iterable[str | DiagnosticType] = (),
        policy_name: str = "default",
        policy_version: str = "1.0",
        module_resolver: ModuleNameResolver | None = None,
    ) -> PolicyStore:
        """Validate and freeze plain configuration values.

        Raises :class:`PolicyConfigError` on malformed values or on module
        names that *module_resolver* can never produce under *roots*.
        """
        resolver = module_resolver or ModulePathResolver()

        root_list = _as_list(roots, "roots")
        for root in root_list:
            if not isinstance(root, str):
                raise PolicyConfigError(f"Root must be a string, got {root!r}")

        legacy = frozenset(_as_list(legacy_modules, "legacy_modules"))
        for module in legacy:
            _check_module_name(module, "legacy_modules", resolver, root_list)

        if suppressions is None:
            suppressions = {}
        if not isinstance(suppressions, Mapping):
            raise PolicyConfigError("'suppressions' must be a mapping of module name to diagnostic keys")

        frozen_suppressions: dict[str, frozenset[DiagnosticType]] = {}
        for module, types in suppressions.items():
            _check_module_name(module, "suppressions", resolver, root_list)
            frozen_suppressions[module] = frozenset(_as_types(types, f"suppressions['{module}']"))

        shadowed = sorted(legacy & frozen_suppressions.keys())
        if shadowed:
            logger.warning(
                "Suppressions for legacy module(s) %s never apply: legacy handling takes precedence",
                ", ".join(shadowed),
            )

        return cls(
            roots=tuple(root_list),
            legacy_modules=legacy,
            suppressions=MappingProxyType(frozen_suppressions),
            global_suppressions=frozenset(_as_types(global_suppressions, "global_suppressions")),
            policy_name=str(policy_name),
            policy_version=str(policy_version),
        )

    @classmethod
    def default(cls) -> PolicyStore:
        """Load the built-in default policy that ships with the package."""
        return cls.from_yaml(_DEFAULT_POLICY_PATH)

    @classmethod
    def from_yaml(cls, path: str | Path, module_resolver: ModuleNameResolver | None = None) -> PolicyStore:
        """
        Load a policy from a YAML file.

        The YAML is first merged on top of the built-in defaults so that
        users only need to specify the sections they want to override.
        """
        path = Path(path)
        if not path.exists():
            raise PolicyConfigError(f"Policy file not found: {path}")

        raw = _read_yaml(path)

        # If this IS the default file, just parse directly
        if path.resolve() == _DEFAULT_POLICY_PATH.resolve():
            data = raw
        else:
            data = cls._deep_merge(cls._load_default_raw(), raw)

        logger.debug("Loaded policy %s from %s", data.get("policy_name", "default"), path)
        return cls.from_dict(data, module_resolver=module_resolver)

    @classmethod
    def from_dict(cls, d: dict[str, Any], module_resolver: ModuleNameResolver | None = None) -> PolicyStore:
        return cls.create(
            roots=d.get("roots") or [],
            legacy_modules=d.get("legacy_modules") or [],
            suppressions=d.get("suppressions") or {},
            global_suppressions=d.get("global_suppressions") or [],
            policy_name=d.get("policy_name", "default"),
            policy_version=d.get("policy_version", "1.0"),
            module_resolver=module_resolver,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "policy_name": self.policy_name,
            "policy_version": self.policy_version,
            "roots": list(self.roots),
            "legacy_modules": sorted(self.legacy_modules),
            "suppressions": {
                module: sorted(t.key for t in types) for module, types in sorted(self.suppressions.items())
            },
            "global_suppressions": sorted(t.key for t in self.global_suppressions),
        }

    def to_yaml(self, path: str | Path) -> None:
        """Dump the full policy to a YAML file for editing."""
        data = self.to_dict()
        with open(path, "w", encoding="utf-8") as fh:
            fh.write("# Warnings Guard - Policy\n")
            fh.write("# Only include sections you want to override; omitted sections\n")
            fh.write("# will use the built-in defaults.\n\n")
            yaml.dump(data, fh, default_flow_style=False, sort_keys=False, width=120)

    # -----------------------------------------------------------------------
    # Internal parsing
    # -----------------------------------------------------------------------

    @classmethod
    def _load_default_raw(cls) -> dict[str, Any]:
        if _DEFAULT_POLICY_PATH.exists():
            return _read_yaml(_DEFAULT_POLICY_PATH)
        return {}

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Recursively merge *override* into *base*.

        Lists are replaced, not concatenated.  ``suppressions`` is a mapping,
        so an override only touches the modules it names.
        """
        result = dict(base)
        for key, val in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(val, dict):
                result[key] = PolicyStore._deep_merge(result[key], val)
            else:
                result[key] = val
        return result


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise PolicyConfigError(f"Policy path is not a file: {path}")
    try:
        with open(path, encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except yaml.YAMLError as e:
        raise PolicyConfigError(f"Invalid YAML in policy file {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise PolicyConfigError(f"Failed to read policy file {path}: {e}") from e
    if not isinstance(raw, dict):
        raise PolicyConfigError(f"Policy file must be a mapping: {path}")
    return raw


def _as_list(values: Iterable[Any], section: str) -> list[Any]:
    # A bare string is iterable but is never what the caller meant.
    if isinstance(values, (str, bytes)) or isinstance(values, Mapping):
        raise PolicyConfigError(f"'{section}' must be a list, got {type(values).__name__}")
    try:
        return list(values)
    except TypeError as e:
        raise PolicyConfigError(f"'{section}' must be a list, got {type(values).__name__}") from e


def _as_types(values: Iterable[str | DiagnosticType], section: str) -> list[DiagnosticType]:
    types: list[DiagnosticType] = []
    for value in _as_list(values, section):
        if isinstance(value, DiagnosticType):
            types.append(value)
        elif isinstance(value, str) and value.strip():
            types.append(DiagnosticType(value.strip()))
        else:
            raise PolicyConfigError(f"{section}: diagnostic key must be a non-empty string, got {value!r}")
    return types


def _check_module_name(module: Any, section: str, resolver: ModuleNameResolver, roots: list[str]) -> None:
    if not isinstance(module, str) or not module:
        raise PolicyConfigError(f"{section}: module name must be a non-empty string, got {module!r}")
    if not roots:
        raise PolicyConfigError(
            f"{section}: module '{module}' can never be produced because no roots are configured"
        )
    produces = getattr(resolver, "produces", None)
    if produces is not None and not produces(module, roots):
        raise PolicyConfigError(
            f"{section}: module '{module}' can never be produced from a source path "
            "(module names use '/' separators, no leading './' and no source file extension)"
        )
