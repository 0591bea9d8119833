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
Warnings Guard - decides whether compiler findings are suppressed, warnings or errors.
"""

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0+unknown"


def __getattr__(name: str):
    """Lazy-load public API symbols on first access.

    Keeps ``python -m warnings_guard.cli.cli`` from importing the whole
    package eagerly.
    """
    _lazy_map = {
        "Config": (".config.config", "Config"),
        "WarningsGuardConstants": (".config.constants", "WarningsGuardConstants"),
        "DiagnosticCategory": (".core.models", "DiagnosticCategory"),
        "DiagnosticType": (".core.models", "DiagnosticType"),
        "Finding": (".core.models", "Finding"),
        "Outcome": (".core.models", "Outcome"),
        "Resolution": (".core.models", "Resolution"),
        "DiagnosticTables": (".core.diagnostics", "DiagnosticTables"),
        "PolicyStore": (".core.policy_store", "PolicyStore"),
        "PolicyResolver": (".core.resolver", "PolicyResolver"),
        "ModulePathResolver": (".core.module_paths", "ModulePathResolver"),
        "SourceNameSyntheticDetector": (".core.synthetic", "SourceNameSyntheticDetector"),
        "FindingLoader": (".core.loader", "FindingLoader"),
        "load_findings": (".core.loader", "load_findings"),
        "FindingTriage": (".core.triage", "FindingTriage"),
        "TriageResult": (".core.triage", "TriageResult"),
    }
    if name in _lazy_map:
        module_path, attr = _lazy_map[name]
        import importlib

        mod = importlib.import_module(module_path, __package__)
        val = getattr(mod, attr)
        # Cache on the module so __getattr__ is only called once per symbol
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "PolicyResolver",
    "PolicyStore",
    "DiagnosticTables",
    "DiagnosticCategory",
    "DiagnosticType",
    "Finding",
    "Outcome",
    "Resolution",
    "ModulePathResolver",
    "SourceNameSyntheticDetector",
    "FindingLoader",
    "load_findings",
    "FindingTriage",
    "TriageResult",
    "Config",
    "WarningsGuardConstants",
]
