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
Constants for Warnings Guard.
"""

from pathlib import Path

from .. import data as _data

try:
    from .._version import __version__ as PACKAGE_VERSION
except Exception:  # pragma: no cover
    PACKAGE_VERSION = "0.0.0-dev"


class WarningsGuardConstants:
    """Constants used throughout the resolver."""

    VERSION = PACKAGE_VERSION

    # Resource paths
    DATA_DIR = _data.DATA_DIR
    DEFAULT_POLICY_PATH = _data.DEFAULT_POLICY_FILE
    DEFAULT_DIAGNOSTICS_PATH = _data.DEFAULT_DIAGNOSTICS_FILE

    # Source files that can belong to a module; the extension is stripped
    # from the module name.
    SOURCE_EXTENSIONS = (".js", ".jsx", ".mjs", ".es6")

    # Source names the compiler gives to code injected by its own passes
    SYNTHETIC_SOURCE_MARKERS = (" [synthetic:",)

    # Output
    DEFAULT_OUTPUT_FORMAT = "summary"
    OUTPUT_FORMATS = ("summary", "json", "markdown", "sarif")
    DEFAULT_LOG_LEVEL = "WARNING"

    @classmethod
    def get_data_path(cls) -> Path:
        """Get path to data directory."""
        return cls.DATA_DIR
