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
Tests for the policy store: defaults, YAML loading, merging and validation.
"""

import logging
from types import MappingProxyType

import pytest
import yaml

from warnings_guard.core.exceptions import PolicyConfigError
from warnings_guard.core.models import DiagnosticType
from warnings_guard.core.policy_store import PolicyStore


class TestPolicyStoreDefaults:
    """Test that the default policy loads and contains expected values."""

    def test_default_policy_loads(self):
        store = PolicyStore.default()
        assert store.policy_name == "default"
        assert store.policy_version == "1.0"

    def test_default_root_owns_everything(self):
        assert PolicyStore.default().roots == ("",)

    def test_default_has_no_suppressions(self):
        store = PolicyStore.default()
        assert store.legacy_modules == frozenset()
        assert dict(store.suppressions) == {}
        assert store.global_suppressions == frozenset()


class TestPolicyStoreCreate:
    """PolicyStore.create() validation."""

    def test_values_are_frozen(self):
        store = PolicyStore.create(
            roots=["src"],
            legacy_modules=["old"],
            suppressions={"app/main": ["JSC_X"]},
            global_suppressions=["JSC_Y"],
        )
        assert store.roots == ("src",)
        assert isinstance(store.suppressions, MappingProxyType)
        assert store.suppressions["app/main"] == frozenset({DiagnosticType("JSC_X")})
        with pytest.raises(TypeError):
            store.suppressions["other"] = frozenset()  # type: ignore[index]

    def test_is_suppressed_in(self):
        store = PolicyStore.create(roots=["src"], suppressions={"app/main": ["JSC_X"]})
        assert store.is_suppressed_in("app/main", DiagnosticType("JSC_X"))
        assert not store.is_suppressed_in("app/main", DiagnosticType("JSC_Y"))
        assert not store.is_suppressed_in("app/other", DiagnosticType("JSC_X"))

    def test_roots_must_be_a_list(self):
        with pytest.raises(PolicyConfigError, match="roots"):
            PolicyStore.create(roots="src")

    def test_roots_must_be_strings(self):
        with pytest.raises(PolicyConfigError, match="Root"):
            PolicyStore.create(roots=["src", 3])

    def test_empty_module_name(self):
        with pytest.raises(PolicyConfigError, match="legacy_modules"):
            PolicyStore.create(legacy_modules=[""])

    def test_module_name_with_extension_is_unproducible(self):
        with pytest.raises(PolicyConfigError, match="never be produced"):
            PolicyStore.create(roots=["src"], suppressions={"app/main.js": ["JSC_X"]})

    @pytest.mark.parametrize("module", ["app\\main", "./app/main"])
    def test_module_name_in_unnormalised_form_is_unproducible(self, module):
        with pytest.raises(PolicyConfigError, match="never be produced"):
            PolicyStore.create(roots=["src"], suppressions={module: ["JSC_X"]})

    def test_legacy_module_without_roots(self):
        with pytest.raises(PolicyConfigError, match="no roots are configured"):
            PolicyStore.create(roots=[], legacy_modules=["app/old"])

    def test_suppression_without_roots(self):
        with pytest.raises(PolicyConfigError, match="no roots are configured"):
            PolicyStore.create(suppressions={"app/main": ["JSC_X"]})

    def test_no_roots_without_modules_is_allowed(self):
        store = PolicyStore.create(roots=[], global_suppressions=["JSC_X"])
        assert store.roots == ()

    def test_suppressions_must_be_a_mapping(self):
        with pytest.raises(PolicyConfigError, match="mapping"):
            PolicyStore.create(suppressions=["app/main"])

    def test_suppression_keys_must_be_strings(self):
        with pytest.raises(PolicyConfigError, match="diagnostic key"):
            PolicyStore.create(roots=["src"], suppressions={"app/main": [None]})

    def test_global_suppressions_must_be_a_list(self):
        with pytest.raises(PolicyConfigError, match="global_suppressions"):
            PolicyStore.create(global_suppressions="JSC_X")

    def test_custom_module_resolver_without_produces(self, stub_module_resolver):
        store = PolicyStore.create(roots=["src"], legacy_modules=["anything.js"], module_resolver=stub_module_resolver())
        assert "anything.js" in store.legacy_modules

    def test_shadowed_legacy_suppressions_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="warnings_guard.core.policy_store"):
            PolicyStore.create(roots=["src"], legacy_modules=["old"], suppressions={"old": ["JSC_X"]})
        assert "old" in caplog.text
        assert "never apply" in caplog.text


class TestPolicyStoreYaml:
    """YAML loading merges on top of the defaults."""

    def test_partial_override(self, tmp_path):
        path = tmp_path / "policy.yaml"
        path.write_text("policy_name: project\nlegacy_modules:\n  - app/old\n")
        store = PolicyStore.from_yaml(path)
        assert store.policy_name == "project"
        assert store.legacy_modules == frozenset({"app/old"})
        assert store.roots == ("",)

    def test_lists_are_replaced(self, tmp_path):
        path = tmp_path / "policy.yaml"
        path.write_text("roots:\n  - src\n  - lib\n")
        assert PolicyStore.from_yaml(path).roots == ("src", "lib")

    def test_missing_file(self, tmp_path):
        with pytest.raises(PolicyConfigError, match="not found"):
            PolicyStore.from_yaml(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "policy.yaml"
        path.write_text("roots: [unclosed\n")
        with pytest.raises(PolicyConfigError, match="Invalid YAML"):
            PolicyStore.from_yaml(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "policy.yaml"
        path.write_text("- src\n")
        with pytest.raises(PolicyConfigError, match="mapping"):
            PolicyStore.from_yaml(path)

    def test_directory_instead_of_file(self, tmp_path):
        with pytest.raises(PolicyConfigError, match="not a file"):
            PolicyStore.from_yaml(tmp_path)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "policy.yaml"
        path.write_bytes(b"\xff\xfe roots: [src]\n")
        with pytest.raises(PolicyConfigError, match="Failed to read"):
            PolicyStore.from_yaml(path)

    def test_empty_roots_override_with_legacy_modules(self, tmp_path):
        path = tmp_path / "policy.yaml"
        path.write_text("roots: []\nlegacy_modules:\n  - app/old\n")
        with pytest.raises(PolicyConfigError, match="no roots"):
            PolicyStore.from_yaml(path)

    def test_mapping_where_list_expected(self, tmp_path):
        path = tmp_path / "policy.yaml"
        path.write_text("legacy_modules:\n  app/old: true\n")
        with pytest.raises(PolicyConfigError, match="legacy_modules"):
            PolicyStore.from_yaml(path)

    def test_round_trip(self, tmp_path):
        store = PolicyStore.create(
            roots=["src", ""],
            legacy_modules=["app/old"],
            suppressions={"app/main": ["JSC_B", "JSC_A"]},
            global_suppressions=["JSC_G"],
            policy_name="roundtrip",
            policy_version="2",
        )
        path = tmp_path / "policy.yaml"
        store.to_yaml(path)
        assert PolicyStore.from_yaml(path) == store

    def test_to_yaml_is_sorted(self, tmp_path):
        store = PolicyStore.create(roots=["src"], suppressions={"m": ["JSC_B", "JSC_A"]})
        path = tmp_path / "policy.yaml"
        store.to_yaml(path)
        data = yaml.safe_load(path.read_text())
        assert data["suppressions"] == {"m": ["JSC_A", "JSC_B"]}


class TestPolicyFingerprint:
    def test_stable_across_ordering(self):
        a = PolicyStore.create(global_suppressions=["JSC_A", "JSC_B"])
        b = PolicyStore.create(global_suppressions=["JSC_B", "JSC_A"])
        assert a.fingerprint() == b.fingerprint()
        assert len(a.fingerprint()) == 64

    def test_changes_with_content(self):
        a = PolicyStore.create(global_suppressions=["JSC_A"])
        b = PolicyStore.create(global_suppressions=["JSC_B"])
        assert a.fingerprint() != b.fingerprint()
