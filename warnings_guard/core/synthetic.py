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
Detection of findings reported against compiler-generated (synthetic) code.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ..config.constants import WarningsGuardConstants
from .models import Finding


class SyntheticCodeDetector(Protocol):
    """Predicate telling whether a finding originates from generated code."""

    def is_synthetic(self, finding: Finding) -> bool: ...


class SourceNameSyntheticDetector:
    """Flags findings whose source name carries a synthetic-code marker.

    Compiler passes that inject code give it a pseudo source name such as
    ``" [synthetic:1] "`` instead of a real file path.
    """

    def __init__(self, markers: Sequence[str] = WarningsGuardConstants.SYNTHETIC_SOURCE_MARKERS):
        self.markers = tuple(markers)

    def is_synthetic(self, finding: Finding) -> bool:
        source = finding.source_path
        if not source:
            return False
        return source.startswith(self.markers)
