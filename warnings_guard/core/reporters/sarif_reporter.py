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
SARIF format reporter for code scanning integrations.

Implements SARIF 2.1.0 specification for compiler diagnostics.
https://docs.oasis-open.org/sarif/sarif/v2.1.0/sarif-v2.1.0.html
"""

import json
from datetime import timezone
from typing import Any

from ..models import Outcome, Resolution
from ..triage import TriageResult


class SARIFReporter:
    """Generates SARIF 2.1.0 format reports."""

    SARIF_VERSION = "2.1.0"
    SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"

    OUTCOME_TO_LEVEL = {
        Outcome.ERROR: "error",
        Outcome.WARN: "warning",
        Outcome.SUPPRESSED: "none",
    }

    def __init__(self, tool_name: str = "warnings-guard", tool_version: str = "0.1.0", include_suppressed: bool = False):
        """
        Initialize SARIF reporter.

        Args:
            tool_name: Name of the reporting tool
            tool_version: Version of the reporting tool
            include_suppressed: Emit suppressed findings with a SARIF suppression entry
        """
        self.tool_name = tool_name
        self.tool_version = tool_version
        self.include_suppressed = include_suppressed

    def generate_report(self, result: TriageResult) -> str:
        resolutions = result.resolutions if self.include_suppressed else result.visible()
        sarif = {
            "$schema": self.SARIF_SCHEMA,
            "version": self.SARIF_VERSION,
            "runs": [
                {
                    "tool": self._create_tool_component(self._extract_rules(resolutions)),
                    "results": [self._convert_resolution(r) for r in resolutions],
                    "invocations": [
                        {
                            "executionSuccessful": True,
                            "endTimeUtc": result.timestamp.astimezone(timezone.utc).isoformat().replace("+00:00", "Z"),
                        }
                    ],
                    "properties": dict(result.policy_metadata),
                }
            ],
        }
        return json.dumps(sarif, indent=2, default=str)

    def _create_tool_component(self, rules: list[dict[str, Any]]) -> dict[str, Any]:
        return {
            "driver": {
                "name": self.tool_name,
                "version": self.tool_version,
                "rules": rules,
            }
        }

    def _extract_rules(self, resolutions: list[Resolution]) -> list[dict[str, Any]]:
        """Extract unique diagnostic types as SARIF rules."""
        seen: set[str] = set()
        rules = []
        for resolution in resolutions:
            diagnostic_type = resolution.finding.type
            if diagnostic_type.key in seen:
                continue
            seen.add(diagnostic_type.key)
            rule: dict[str, Any] = {"id": diagnostic_type.key}
            if diagnostic_type.description:
                rule["shortDescription"] = {"text": diagnostic_type.description}
            rules.append(rule)
        return rules

    def _convert_resolution(self, resolution: Resolution) -> dict[str, Any]:
        finding = resolution.finding
        sarif_result: dict[str, Any] = {
            "ruleId": finding.type.key,
            "level": self.OUTCOME_TO_LEVEL[resolution.outcome],
            "message": {"text": finding.message or finding.type.key},
            "properties": {
                "outcome": resolution.outcome.value,
                "decidedBy": resolution.rule,
            },
        }
        if resolution.module:
            sarif_result["properties"]["module"] = resolution.module

        if finding.source_path:
            location: dict[str, Any] = {
                "physicalLocation": {
                    "artifactLocation": {
                        "uri": finding.source_path,
                        "uriBaseId": "%SRCROOT%",
                    },
                }
            }
            if finding.line_number:
                region: dict[str, Any] = {"startLine": finding.line_number}
                if finding.column is not None:
                    # SARIF columns are 1-based; compiler columns are 0-based.
                    region["startColumn"] = finding.column + 1
                location["physicalLocation"]["region"] = region
            sarif_result["locations"] = [location]

        if resolution.outcome is Outcome.SUPPRESSED:
            sarif_result["suppressions"] = [{"kind": "external", "justification": resolution.rule}]

        return sarif_result

    def save_report(self, result: TriageResult, output_path: str):
        """
        Save SARIF report to file.

        Args:
            result: Triage result
            output_path: Path to save file
        """
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(self.generate_report(result))
