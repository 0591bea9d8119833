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
Batch driver that runs every finding through the policy resolver.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .models import Finding, Outcome, Resolution
from .resolver import PolicyResolver

logger = logging.getLogger(__name__)


@dataclass
class TriageResult:
    """Outcomes for one batch of findings, in input order."""

    resolutions: list[Resolution] = field(default_factory=list)
    duration_seconds: float = 0.0
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    policy_metadata: dict[str, str] = field(default_factory=dict)

    @property
    def counts(self) -> dict[Outcome, int]:
        counts = {outcome: 0 for outcome in Outcome}
        for resolution in self.resolutions:
            counts[resolution.outcome] += 1
        return counts

    @property
    def has_errors(self) -> bool:
        return any(r.outcome is Outcome.ERROR for r in self.resolutions)

    @property
    def has_warnings(self) -> bool:
        return any(r.outcome is Outcome.WARN for r in self.resolutions)

    @property
    def max_outcome(self) -> Outcome:
        """Highest outcome in the batch; ``SUPPRESSED`` when empty."""
        return max((r.outcome for r in self.resolutions), default=Outcome.SUPPRESSED)

    def by_outcome(self, outcome: Outcome) -> list[Resolution]:
        return [r for r in self.resolutions if r.outcome is outcome]

    def visible(self) -> list[Resolution]:
        """Resolutions the reporting layer should show (errors and warnings)."""
        return [r for r in self.resolutions if r.outcome is not Outcome.SUPPRESSED]

    def to_dict(self, include_suppressed: bool = False) -> dict[str, Any]:
        """Convert triage result to dictionary."""
        shown = self.resolutions if include_suppressed else self.visible()
        counts = self.counts
        return {
            "summary": {
                "total_findings": len(self.resolutions),
                "errors": counts[Outcome.ERROR],
                "warnings": counts[Outcome.WARN],
                "suppressed": counts[Outcome.SUPPRESSED],
                "max_outcome": self.max_outcome.value,
                "duration_ms": int(self.duration_seconds * 1000),
                "timestamp": self.timestamp.isoformat(),
            },
            "policy": dict(self.policy_metadata),
            "findings": [r.to_dict() for r in shown],
        }


class FindingTriage:
    """Resolves a stream of findings one at a time; no cross-finding state."""

    def __init__(self, resolver: PolicyResolver):
        self.resolver = resolver

    def triage(self, findings: Iterable[Finding]) -> TriageResult:
        start = time.time()
        resolutions = [self.resolver.explain(finding) for finding in findings]
        result = TriageResult(
            resolutions=resolutions,
            duration_seconds=time.time() - start,
            policy_metadata=self._policy_metadata(),
        )
        counts = result.counts
        logger.info(
            "Triaged %d findings: %d errors, %d warnings, %d suppressed",
            len(resolutions),
            counts[Outcome.ERROR],
            counts[Outcome.WARN],
            counts[Outcome.SUPPRESSED],
        )
        return result

    def _policy_metadata(self) -> dict[str, str]:
        store = self.resolver.store
        return {
            "policy_name": store.policy_name,
            "policy_version": store.policy_version,
            "policy_fingerprint_sha256": store.fingerprint(),
        }
