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
Configuration class for Warnings Guard.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .constants import WarningsGuardConstants


@dataclass
class Config:
    """
    Configuration for Warnings Guard.

    Explicit constructor values win; unset values fall back to environment
    variables.
    """

    # Policy sources
    policy_path: str | None = None
    diagnostics_path: str | None = None

    # Output Options
    output_format: str = WarningsGuardConstants.DEFAULT_OUTPUT_FORMAT
    fail_on_warnings: bool = False
    include_suppressed: bool = False

    # Logging
    log_level: str = WarningsGuardConstants.DEFAULT_LOG_LEVEL

    def __post_init__(self):
        """Load configuration from environment variables if not provided."""

        if self.policy_path is None:
            self.policy_path = os.getenv("WARNINGS_GUARD_POLICY")

        if self.diagnostics_path is None:
            self.diagnostics_path = os.getenv("WARNINGS_GUARD_DIAGNOSTICS")

        # Output format from environment (only if still at default)
        if self.output_format == WarningsGuardConstants.DEFAULT_OUTPUT_FORMAT:
            if env_format := os.getenv("WARNINGS_GUARD_FORMAT"):
                self.output_format = env_format.lower()

        if os.getenv("WARNINGS_GUARD_FAIL_ON_WARNINGS", "").lower() in ("true", "1"):
            self.fail_on_warnings = True

        if os.getenv("WARNINGS_GUARD_INCLUDE_SUPPRESSED", "").lower() in ("true", "1"):
            self.include_suppressed = True

        if self.log_level == WarningsGuardConstants.DEFAULT_LOG_LEVEL:
            if env_level := os.getenv("WARNINGS_GUARD_LOG_LEVEL"):
                self.log_level = env_level.upper()

        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level '{self.log_level}'")

        if self.output_format not in WarningsGuardConstants.OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format '{self.output_format}'. "
                f"Available: {', '.join(WarningsGuardConstants.OUTPUT_FORMATS)}"
            )

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create configuration from environment variables.

        Returns:
            Config instance with values from environment
        """
        return cls()

    @classmethod
    def from_file(cls, config_file: Path) -> "Config":
        """
        Load configuration from a .env file.

        Variables already present in the environment are not overridden.

        Args:
            config_file: Path to .env file

        Returns:
            Config instance
        """
        if config_file.exists():
            load_dotenv(config_file, override=False)

        return cls.from_env()
