# Copyright 2026 Cisco Systems, Inc. and its affiliates
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
Tests for source path to module name conversion and synthetic code detection.
"""

import pytest

from warnings_guard.core.models import Finding
from warnings_guard.core.module_paths import ModulePathResolver, convert_path_to_module_names
from warnings_guard.core.synthetic import SourceNameSyntheticDetector


class TestModulePathResolver:
    """ModulePathResolver.resolve()"""

    @pytest.fixture
    def resolver(self):
        return ModulePathResolver()

    def test_single_root(self, resolver):
        assert resolver.resolve("src/app/main.js", ["src"]) == ["app/main"]

    def test_root_order_is_result_order(self, resolver):
        assert resolver.resolve("src/app/main.js", ["src", ""]) == ["app/main", "src/app/main"]
        assert resolver.resolve("src/app/main.js", ["", "src"]) == ["src/app/main", "app/main"]

    def test_nested_roots(self, resolver):
        assert resolver.resolve("src/app/main.js", ["src/app", "src"]) == ["main", "app/main"]

    def test_root_trailing_slash(self, resolver):
        assert resolver.resolve("src/app/main.js", ["src/"]) == ["app/main"]

    def test_root_must_match_whole_segment(self, resolver):
        assert resolver.resolve("srcx/app/main.js", ["src"]) == []

    def test_path_outside_roots(self, resolver):
        assert resolver.resolve("other/main.js", ["src"]) == []

    def test_non_source_file(self, resolver):
        assert resolver.resolve("src/app/styles.css", ["src", ""]) == []

    def test_windows_separators_and_dot_prefix(self, resolver):
        assert resolver.resolve(".\\src\\app\\main.js", ["src"]) == ["app/main"]

    def test_duplicates_collapse(self, resolver):
        assert resolver.resolve("src/app/main.js", ["src", "src/"]) == ["app/main"]

    def test_other_extensions(self, resolver):
        assert resolver.resolve("src/widget.jsx", ["src"]) == ["widget"]

    def test_custom_extensions(self):
        assert ModulePathResolver(extensions=(".ts",)).resolve("src/a.ts", ["src"]) == ["a"]

    def test_produces(self, resolver):
        assert resolver.produces("app/main", ["src"])
        assert not resolver.produces("app/main.js", ["src"])
        assert not resolver.produces("", ["src"])

    def test_produces_nothing_without_roots(self, resolver):
        assert not resolver.produces("app/main", [])

    def test_produces_only_normalised_names(self, resolver):
        assert not resolver.produces("app\\main", ["src"])
        assert not resolver.produces("./app/main", [""])

    def test_slash_root_owns_only_absolute_paths(self, resolver):
        assert resolver.resolve("/abs/app/main.js", ["/"]) == ["abs/app/main"]
        assert resolver.resolve("src/app/main.js", ["/"]) == []

    def test_dot_segment_after_root_is_dropped(self, resolver):
        assert resolver.resolve("src/./app/main.js", ["src"]) == ["app/main"]

    def test_helper(self):
        assert convert_path_to_module_names("lib/x.js", ["lib"]) == ["x"]


class TestSourceNameSyntheticDetector:
    def test_marker_prefix(self):
        detector = SourceNameSyntheticDetector()
        assert detector.is_synthetic(Finding(type="JSC_X", source_path=" [synthetic:1] "))

    def test_regular_path(self):
        detector = SourceNameSyntheticDetector()
        assert not detector.is_synthetic(Finding(type="JSC_X", source_path="src/synthetic.js"))

    def test_no_source(self):
        detector = SourceNameSyntheticDetector()
        assert not detector.is_synthetic(Finding(type="JSC_X"))

    def test_custom_markers(self):
        detector = SourceNameSyntheticDetector(markers=("<generated>",))
        assert detector.is_synthetic(Finding(type="JSC_X", source_path="<generated>/a.js"))
