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
Markdown format reporter for triage results.
"""

from ..models import Outcome, Resolution
from ..triage import TriageResult


class MarkdownReporter:
    """Generates Markdown format reports."""

    _SECTION_TITLES = {
        Outcome.ERROR: "Errors",
        Outcome.WARN: "Warnings",
        Outcome.SUPPRESSED: "Suppressed",
    }

    def __init__(self, detailed: bool = False, include_suppressed: bool = False):
        """
        Initialize Markdown reporter.

        Args:
            detailed: If True, include the rule and module that decided each outcome
            include_suppressed: If True, list suppressed findings as well
        """
        self.detailed = detailed
        self.include_suppressed = include_suppressed

    def generate_report(self, result: TriageResult) -> str:
        lines = []
        counts = result.counts

        lines.append("# Compiler Warnings Report")
        lines.append("")
        lines.append(f"**Status:** {'[FAIL] ERRORS FOUND' if result.has_errors else '[OK] NO ERRORS'}")
        if result.policy_metadata:
            lines.append(
                f"**Policy:** {result.policy_metadata.get('policy_name')} "
                f"v{result.policy_metadata.get('policy_version')}"
            )
        lines.append(f"**Timestamp:** {result.timestamp.isoformat()}")
        lines.append("")

        lines.append("## Summary")
        lines.append("")
        lines.append(f"- **Total Findings:** {len(result.resolutions)}")
        lines.append(f"- **Errors:** {counts[Outcome.ERROR]}")
        lines.append(f"- **Warnings:** {counts[Outcome.WARN]}")
        lines.append(f"- **Suppressed:** {counts[Outcome.SUPPRESSED]}")
        lines.append("")

        outcomes = [Outcome.ERROR, Outcome.WARN]
        if self.include_suppressed:
            outcomes.append(Outcome.SUPPRESSED)

        for outcome in outcomes:
            resolutions = result.by_outcome(outcome)
            if not resolutions:
                continue
            lines.append(f"## {self._SECTION_TITLES[outcome]}")
            lines.append("")
            for resolution in resolutions:
                lines.extend(self._format_resolution(resolution))
            lines.append("")

        return "\n".join(lines)

    def _format_resolution(self, resolution: Resolution) -> list[str]:
        finding = resolution.finding
        location = finding.source_path or "<no source>"
        if finding.line_number:
            location += f":{finding.line_number}"
            if finding.column is not None:
                location += f":{finding.column}"

        line = f"- `{finding.type.key}` {location}"
        if finding.message:
            line += f" - {finding.message}"
        lines = [line]
        if self.detailed:
            detail = f"  - Rule: `{resolution.rule}`"
            if resolution.module:
                detail += f" (module `{resolution.module}`)"
            lines.append(detail)
        return lines

    def save_report(self, result: TriageResult, output_path: str):
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(self.generate_report(result))
