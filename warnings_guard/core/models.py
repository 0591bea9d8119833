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
Data models for diagnostics, findings and resolution outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .exceptions import FindingContractError


class Outcome(str, Enum):
    """What the reporting layer should do with a finding.

    Ordered by severity: ``SUPPRESSED < WARN < ERROR``.
    """

    SUPPRESSED = "suppressed"
    WARN = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _OUTCOME_RANK[self]

    @property
    def is_blocking(self) -> bool:
        return self is Outcome.ERROR

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Outcome):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Outcome):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Outcome):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Outcome):
            return NotImplemented
        return self.rank >= other.rank


_OUTCOME_RANK = {
    Outcome.SUPPRESSED: 0,
    Outcome.WARN: 1,
    Outcome.ERROR: 2,
}


@dataclass(frozen=True)
class DiagnosticCategory:
    """A coarse-grained group of checks (e.g. ``lintChecks``)."""

    name: str
    description: str = field(default="", compare=False)

    @classmethod
    def of(cls, value: str | DiagnosticCategory) -> DiagnosticCategory:
        """Coerce a bare name into a category."""
        if isinstance(value, DiagnosticCategory):
            return value
        return cls(name=value)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class DiagnosticType:
    """One specific kind of finding, identified by its suppress-code ``key``."""

    key: str
    description: str = field(default="", compare=False)

    @classmethod
    def of(cls, value: str | DiagnosticType) -> DiagnosticType:
        """Coerce a bare key into a type."""
        if isinstance(value, DiagnosticType):
            return value
        return cls(key=value)

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class Finding:
    """A single issue reported by the upstream analysis engine."""

    type: DiagnosticType
    source_path: str | None = None
    message: str = ""
    line_number: int | None = None
    column: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        """Reject findings without a type; coerce bare keys."""
        if self.type is None or self.type == "":
            raise FindingContractError("Finding is missing its diagnostic type")
        if isinstance(self.type, str):
            object.__setattr__(self, "type", DiagnosticType(self.type))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Finding:
        """Build a finding from a JSON object.

        Accepts ``source_path`` as well as the ``sourceName`` / ``file``
        spellings used by compiler JSON output.
        """
        if not isinstance(data, dict):
            raise FindingContractError(f"Finding must be a JSON object, got {type(data).__name__}")

        type_key = data.get("type") or data.get("key")
        if not isinstance(type_key, str) or not type_key.strip():
            raise FindingContractError(f"Finding is missing its diagnostic type: {data!r}")

        source_path = data.get("source_path", data.get("sourceName", data.get("file")))
        line = data.get("line_number", data.get("line"))

        return cls(
            type=DiagnosticType(type_key.strip(), description=data.get("description", "")),
            source_path=source_path if source_path else None,
            message=data.get("message", ""),
            line_number=_optional_int(line, "line_number"),
            column=_optional_int(data.get("column"), "column"),
            metadata=dict(data.get("metadata") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert finding to dictionary."""
        return {
            "type": self.type.key,
            "source_path": self.source_path,
            "message": self.message,
            "line_number": self.line_number,
            "column": self.column,
            "metadata": dict(self.metadata),
        }


def _optional_int(value: Any, name: str) -> int | None:
    """Accept non-negative ints and integer strings; reject anything else."""
    if value is None or value == "":
        return None
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    raise FindingContractError(f"Finding {name} must be a non-negative integer, got {value!r}")


@dataclass(frozen=True)
class Resolution:
    """The outcome for one finding plus the rule (and module) that decided it."""

    finding: Finding
    outcome: Outcome
    rule: str
    module: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = self.finding.to_dict()
        data["outcome"] = self.outcome.value
        data["rule"] = self.rule
        data["module"] = self.module
        return data
