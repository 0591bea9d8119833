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
Conversion of source paths into logical module names.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ..config.constants import WarningsGuardConstants


class ModuleNameResolver(Protocol):
    """Anything that maps a source path to the modules that own it."""

    def resolve(self, source_path: str, roots: Sequence[str]) -> list[str]: ...


class ModulePathResolver:
    """Maps a source path to its owning module names, one per matching root.

    ``src/app/main.js`` under roots ``["src", ""]`` is owned by ``app/main``
    (via ``src``) and ``src/app/main`` (via the empty root, which owns every
    path).  The order of *roots* is the order of the result.
    """

    def __init__(self, extensions: Sequence[str] = WarningsGuardConstants.SOURCE_EXTENSIONS):
        self.extensions = tuple(extensions)

    def resolve(self, source_path: str, roots: Sequence[str]) -> list[str]:
        path = self._normalize(source_path)
        extension = self._source_extension(path)
        if extension is None:
            return []

        modules: list[str] = []
        for root in roots:
            remainder = self._strip_root(path, self._normalize(root))
            if not remainder:
                continue
            module = self._normalize(remainder)[: -len(extension)]
            if module and module not in modules:
                modules.append(module)
        return modules

    def produces(self, module: str, roots: Sequence[str]) -> bool:
        """Return ``False`` for names this resolver can never emit under *roots*."""
        if not module or not roots:
            return False
        # Paths are normalised before the root is stripped.
        if "\\" in module or module.startswith("./"):
            return False
        return self._source_extension(module) is None

    @staticmethod
    def _normalize(path: str) -> str:
        path = path.replace("\\", "/")
        while path.startswith("./"):
            path = path[2:]
        return path

    def _source_extension(self, path: str) -> str | None:
        for ext in self.extensions:
            if path.endswith(ext):
                return ext
        return None

    @staticmethod
    def _strip_root(path: str, root: str) -> str | None:
        if not root:
            return path
        # "/" keeps owning absolute paths only.
        prefix = root.rstrip("/") + "/"
        if path.startswith(prefix):
            return path[len(prefix) :]
        return None


def convert_path_to_module_names(source_path: str, roots: Sequence[str]) -> list[str]:
    """Convenience wrapper around :class:`ModulePathResolver` with default extensions."""
    return ModulePathResolver().resolve(source_path, roots)
