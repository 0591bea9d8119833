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
Findings loader for JSON and JSON Lines exports of compiler diagnostics.
"""

import json
import logging
from pathlib import Path

from .exceptions import FindingLoadError
from .models import Finding

logger = logging.getLogger(__name__)


class FindingLoader:
    """Loads findings emitted by the upstream compiler.

    Supported layouts:
    - ``.json``: a list of finding objects, or an object with a ``findings`` list
    - ``.jsonl`` / ``.ndjson``: one finding object per line
    """

    JSON_LINES_EXTENSIONS = {".jsonl", ".ndjson"}

    def load(self, path: str | Path) -> list[Finding]:
        """
        Load all findings from *path*, in file order.

        Args:
            path: Findings file

        Returns:
            List of findings

        Raises:
            FindingLoadError: If the file is missing or not valid JSON
            FindingContractError: If a finding has no diagnostic type
        """
        path = Path(path)
        if not path.exists():
            raise FindingLoadError(f"Findings file does not exist: {path}")
        if not path.is_file():
            raise FindingLoadError(f"Path is not a file: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FindingLoadError(f"Failed to read findings file {path}: {e}") from e

        if path.suffix.lower() in self.JSON_LINES_EXTENSIONS:
            records = self._parse_json_lines(content, path)
        else:
            records = self._parse_json(content, path)

        findings = [Finding.from_dict(record) for record in records]
        logger.debug("Loaded %d findings from %s", len(findings), path)
        return findings

    def _parse_json(self, content: str, path: Path) -> list:
        if not content.strip():
            return []
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise FindingLoadError(f"Invalid JSON in findings file {path}: {e.msg}") from e

        if isinstance(data, dict):
            data = data.get("findings", [])
        if not isinstance(data, list):
            raise FindingLoadError(f"Findings file must contain a list of findings: {path}")
        return data

    def _parse_json_lines(self, content: str, path: Path) -> list:
        records = []
        for lineno, line in enumerate(content.splitlines(), start=1):
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise FindingLoadError(f"Invalid JSON on line {lineno} of {path}: {e.msg}") from e
        return records


def load_findings(path: str | Path) -> list[Finding]:
    """Convenience wrapper around :class:`FindingLoader`."""
    return FindingLoader().load(path)
