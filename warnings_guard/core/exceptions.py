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

"""Warnings Guard exceptions.

All exceptions inherit from WarningsGuardError for easy catching.

Example:
    >>> from warnings_guard.core.policy_store import PolicyStore
    >>> from warnings_guard.core.exceptions import PolicyConfigError
    >>>
    >>> try:
    ...     store = PolicyStore.from_yaml("policy.yaml")
    ... except PolicyConfigError as e:
    ...     print(f"Bad policy: {e}")
"""


class WarningsGuardError(Exception):
    """Base exception for all Warnings Guard errors."""

    pass


class PolicyConfigError(WarningsGuardError):
    """Raised when a policy or the diagnostic tables are misconfigured.

    This can indicate:
    - Unreadable or invalid YAML
    - A section with the wrong shape (e.g. a mapping where a list is expected)
    - Empty or non-string root / module names
    - Module names the path resolver can never produce
    """

    pass


class FindingContractError(WarningsGuardError, ValueError):
    """Raised when a finding violates the caller contract (e.g. it has no type)."""

    pass


class FindingLoadError(WarningsGuardError):
    """Raised when a findings file cannot be read or parsed."""

    pass
