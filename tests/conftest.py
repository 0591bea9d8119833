# Copyright 2026 Cisco Systems, Inc. and its affiliates
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
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest before running tests.
All fixtures defined here are available to every test module without
explicit imports.
"""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from warnings_guard.core.diagnostics import DiagnosticTables
from warnings_guard.core.models import DiagnosticType, Finding
from warnings_guard.core.policy_store import PolicyStore
from warnings_guard.core.resolver import PolicyResolver

# ---------------------------------------------------------------------------
# Collaborator stubs
# ---------------------------------------------------------------------------


class StubModuleResolver:
    """Returns a fixed, ordered list of owning modules for every path."""

    def __init__(self, modules: Sequence[str] = ()):
        self.modules = list(modules)
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    def resolve(self, source_path: str, roots: Sequence[str]) -> list[str]:
        self.calls.append((source_path, tuple(roots)))
        return list(self.modules)


class StubSyntheticDetector:
    """Treats every finding as synthetic (or none, with ``synthetic=False``)."""

    def __init__(self, synthetic: bool = True):
        self.synthetic = synthetic

    def is_synthetic(self, finding: Finding) -> bool:
        return self.synthetic


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tables() -> DiagnosticTables:
    """Small fixture tables, independent of the packaged defaults."""
    return DiagnosticTables.create(
        always_ignore=["ALWAYS"],
        checker_exclusive_keys=["CHECKER_ONLY"],
        ignore_for_synthetic=["SYNTH_NOISY"],
        ignore_for_legacy=["LEGACY_NOISY"],
        checker_only_categories=["lintChecks"],
    )


@pytest.fixture
def make_finding():
    """Factory for findings: ``make_finding("KEY", "src/a.js")``."""

    def _make(key: str = "JSC_SOMETHING", source_path: str | None = "src/app/main.js", **kwargs) -> Finding:
        return Finding(type=DiagnosticType(key), source_path=source_path, **kwargs)

    return _make


@pytest.fixture
def make_resolver(tables):
    """Factory for resolvers over an explicit store and owning-module list."""

    def _make(
        *,
        modules: Sequence[str] = (),
        legacy_modules: Sequence[str] = (),
        suppressions: dict[str, list[str]] | None = None,
        global_suppressions: Sequence[str] = (),
        synthetic: bool = False,
    ) -> PolicyResolver:
        module_resolver = StubModuleResolver(modules)
        store = PolicyStore.create(
            roots=["src"],
            legacy_modules=legacy_modules,
            suppressions=suppressions or {},
            global_suppressions=global_suppressions,
            module_resolver=module_resolver,
        )
        return PolicyResolver(
            store,
            tables,
            module_resolver=module_resolver,
            synthetic_detector=StubSyntheticDetector(synthetic),
        )

    return _make


@pytest.fixture
def stub_module_resolver():
    """Factory for :class:`StubModuleResolver`."""
    return StubModuleResolver


@pytest.fixture
def stub_synthetic_detector():
    """Factory for :class:`StubSyntheticDetector`."""
    return StubSyntheticDetector
