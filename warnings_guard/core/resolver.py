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
Policy resolver: decides whether a finding is suppressed, a warning or an error.

By default every check is enabled and every finding is an error.  The
exceptions, in precedence order (first match wins):

1. types that are always ignored;
2. suppress codes handled exclusively by the standalone checker;
3. findings in synthetic code: ignored when known-noisy, otherwise warnings;
4. findings with no source file (e.g. flag misuse) are always errors;
5. owning modules, in the order the module resolver returns them: a legacy
   module either ignores the type outright or downgrades it to a warning
   (and scanning continues), an explicit per-module suppress code wins
   immediately;
6. global suppressions;
7. otherwise an error.
"""

from __future__ import annotations

import logging

from .diagnostics import DiagnosticTables
from .exceptions import FindingContractError
from .models import DiagnosticCategory, DiagnosticType, Finding, Outcome, Resolution
from .module_paths import ModuleNameResolver, ModulePathResolver
from .policy_store import PolicyStore
from .synthetic import SourceNameSyntheticDetector, SyntheticCodeDetector

logger = logging.getLogger(__name__)


class PolicyResolver:
    """Maps findings to outcomes for one policy store.

    Holds no mutable state, so one instance can be shared across threads.
    """

    def __init__(
        self,
        store: PolicyStore,
        tables: DiagnosticTables | None = None,
        module_resolver: ModuleNameResolver | None = None,
        synthetic_detector: SyntheticCodeDetector | None = None,
    ):
        self.store = store
        self.tables = tables if tables is not None else DiagnosticTables.default()
        self.module_resolver = module_resolver or ModulePathResolver()
        self.synthetic_detector = synthetic_detector or SourceNameSyntheticDetector()

    def should_enable(self, category: DiagnosticCategory | str) -> bool:
        """Return ``False`` only for categories the standalone checker owns."""
        return DiagnosticCategory.of(category) not in self.tables.checker_only_categories

    def resolve(self, finding: Finding) -> Outcome:
        """Return the outcome for *finding*."""
        return self.explain(finding).outcome

    def explain(self, finding: Finding) -> Resolution:
        """Return the outcome for *finding* together with the rule that decided it."""
        diagnostic_type = self._require_type(finding)
        tables = self.tables

        if diagnostic_type in tables.always_ignore:
            return self._decide(finding, Outcome.SUPPRESSED, "always_ignore")

        if diagnostic_type.key in tables.checker_exclusive_keys:
            return self._decide(finding, Outcome.SUPPRESSED, "checker_exclusive")

        if self.synthetic_detector.is_synthetic(finding):
            if diagnostic_type in tables.ignore_for_synthetic:
                return self._decide(finding, Outcome.SUPPRESSED, "synthetic_ignored")
            # Users cannot fix generated code; surface it so the pass gets fixed.
            return self._decide(finding, Outcome.WARN, "synthetic")

        if finding.source_path is None:
            return self._decide(finding, Outcome.ERROR, "no_source")

        pending: Outcome | None = None
        pending_module: str | None = None
        for module in self.module_resolver.resolve(finding.source_path, self.store.roots):
            if module in self.store.legacy_modules:
                if diagnostic_type in tables.ignore_for_legacy:
                    return self._decide(finding, Outcome.SUPPRESSED, "legacy_ignored", module)
                # Keep scanning: a later module may suppress outright.
                if pending is None:
                    pending, pending_module = Outcome.WARN, module
            elif self.store.is_suppressed_in(module, diagnostic_type):
                return self._decide(finding, Outcome.SUPPRESSED, "module_suppression", module)

        if pending is not None:
            return self._decide(finding, pending, "legacy_downgrade", pending_module)

        if diagnostic_type in self.store.global_suppressions:
            return self._decide(finding, Outcome.SUPPRESSED, "global_suppression")

        return self._decide(finding, Outcome.ERROR, "default")

    @staticmethod
    def _require_type(finding: Finding) -> DiagnosticType:
        diagnostic_type = getattr(finding, "type", None)
        if not isinstance(diagnostic_type, DiagnosticType):
            raise FindingContractError(f"Finding has no diagnostic type: {finding!r}")
        return diagnostic_type

    @staticmethod
    def _decide(finding: Finding, outcome: Outcome, rule: str, module: str | None = None) -> Resolution:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "%s at %s -> %s (%s%s)",
                finding.type,
                finding.source_path or "<no source>",
                outcome.value,
                rule,
                f", module {module}" if module else "",
            )
        return Resolution(finding=finding, outcome=outcome, rule=rule, module=module)
