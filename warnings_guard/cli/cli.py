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

"""Command-line interface for Warnings Guard."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from ..config.config import Config
from ..config.constants import WarningsGuardConstants
from ..core.diagnostics import DiagnosticTables
from ..core.exceptions import FindingContractError, FindingLoadError, PolicyConfigError
from ..core.loader import FindingLoader
from ..core.models import Finding, Outcome
from ..core.policy_store import PolicyStore
from ..core.reporters.json_reporter import JSONReporter
from ..core.reporters.markdown_reporter import MarkdownReporter
from ..core.reporters.sarif_reporter import SARIFReporter
from ..core.resolver import PolicyResolver
from ..core.triage import FindingTriage, TriageResult

logger = logging.getLogger("warnings_guard.cli")

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_CONFIG_ERROR = 2


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _configure_logging(args: argparse.Namespace, config: Config) -> None:
    if getattr(args, "verbose", False):
        level = logging.DEBUG
    else:
        level = logging.getLevelName(config.log_level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _load_store(args: argparse.Namespace, config: Config) -> PolicyStore:
    """Load the policy from ``--policy``, the config, or the packaged default."""
    policy_path = getattr(args, "policy", None) or config.policy_path
    if policy_path:
        store = PolicyStore.from_yaml(policy_path)
        logger.info("Using policy: %s (%s)", policy_path, store.policy_name)
        return store
    return PolicyStore.default()


def _load_tables(args: argparse.Namespace, config: Config) -> DiagnosticTables:
    tables_path = getattr(args, "diagnostics", None) or config.diagnostics_path
    if tables_path:
        logger.info("Using diagnostic tables: %s", tables_path)
        return DiagnosticTables.from_yaml(tables_path)
    return DiagnosticTables.default()


def _build_resolver(args: argparse.Namespace, config: Config) -> PolicyResolver:
    return PolicyResolver(_load_store(args, config), _load_tables(args, config))


def _format_output(fmt: str, result: TriageResult, include_suppressed: bool, detailed: bool) -> str:
    if fmt == "json":
        return JSONReporter(include_suppressed=include_suppressed).generate_report(result)
    if fmt == "markdown":
        return MarkdownReporter(detailed=detailed, include_suppressed=include_suppressed).generate_report(result)
    if fmt == "sarif":
        return SARIFReporter(
            tool_version=WarningsGuardConstants.VERSION, include_suppressed=include_suppressed
        ).generate_report(result)
    return _generate_summary(result, include_suppressed)


def _generate_summary(result: TriageResult, include_suppressed: bool = False) -> str:
    counts = result.counts
    lines = [
        "=" * 60,
        f"Findings: {len(result.resolutions)}",
        "=" * 60,
        f"Errors: {counts[Outcome.ERROR]}",
        f"Warnings: {counts[Outcome.WARN]}",
        f"Suppressed: {counts[Outcome.SUPPRESSED]}",
        "",
    ]
    shown = result.resolutions if include_suppressed else result.visible()
    for resolution in shown:
        finding = resolution.finding
        location = finding.source_path or "<no source>"
        if finding.line_number:
            location += f":{finding.line_number}"
        lines.append(f"{resolution.outcome.value.upper()}: {location}: {finding.type.key} {finding.message}".rstrip())
    return "\n".join(lines)


def _write_output(output_path: str | None, output: str) -> None:
    if output_path:
        Path(output_path).write_text(output, encoding="utf-8")
        print(f"Report saved to: {output_path}", file=sys.stderr)
    else:
        print(output)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def triage_command(args: argparse.Namespace, config: Config) -> int:
    """Handle the ``triage`` command."""
    try:
        resolver = _build_resolver(args, config)
        findings = FindingLoader().load(args.findings)
        result = FindingTriage(resolver).triage(findings)
    except (PolicyConfigError, FindingLoadError, FindingContractError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    fmt = args.format or config.output_format
    include_suppressed = args.include_suppressed or config.include_suppressed
    _write_output(args.output, _format_output(fmt, result, include_suppressed, args.detailed))

    fail_on_warnings = args.fail_on_warnings or config.fail_on_warnings
    if result.has_errors or (fail_on_warnings and result.has_warnings):
        return EXIT_FINDINGS
    return EXIT_OK


def explain_command(args: argparse.Namespace, config: Config) -> int:
    """Handle the ``explain`` command."""
    try:
        resolver = _build_resolver(args, config)
        finding = Finding(type=args.type, source_path=args.path)
    except (PolicyConfigError, FindingContractError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    resolution = resolver.explain(finding)
    print(f"Outcome: {resolution.outcome.value}")
    print(f"Rule: {resolution.rule}")
    if resolution.module:
        print(f"Module: {resolution.module}")
    if args.path is not None:
        modules = resolver.module_resolver.resolve(args.path, resolver.store.roots)
        print(f"Owning modules: {', '.join(modules) if modules else '(none)'}")
    return EXIT_OK


def generate_policy_command(args: argparse.Namespace, config: Config) -> int:
    """Handle the ``generate-policy`` command."""
    output_path = Path(args.output)
    try:
        PolicyStore.default().to_yaml(output_path)
    except (OSError, PolicyConfigError) as e:
        print(f"Error generating policy: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    print(f"Generated default policy: {output_path}\n")
    print("Edit the file to customise, then use:")
    print(f"  warnings-guard triage --policy {output_path} findings.json")
    return EXIT_OK


def validate_policy_command(args: argparse.Namespace, config: Config) -> int:
    """Handle the ``validate-policy`` command."""
    try:
        store = PolicyStore.from_yaml(args.policy_file)
    except PolicyConfigError as e:
        print(f"Invalid policy: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    print(f"Policy OK: {store.policy_name} v{store.policy_version}")
    print(f"  roots: {len(store.roots)}")
    print(f"  legacy modules: {len(store.legacy_modules)}")
    print(f"  modules with suppressions: {len(store.suppressions)}")
    print(f"  global suppressions: {len(store.global_suppressions)}")
    print(f"  fingerprint: {store.fingerprint()}")
    return EXIT_OK


def list_groups_command(args: argparse.Namespace, config: Config) -> int:
    """Handle the ``list-groups`` command."""
    try:
        tables = _load_tables(args, config)
    except PolicyConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    print("Categories disabled in the compiler (owned by the standalone checker):")
    for category in sorted(tables.checker_only_categories, key=lambda c: c.name):
        print(f"  {category.name}")
    return EXIT_OK


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _add_policy_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--policy", metavar="PATH", help="Policy YAML (or set WARNINGS_GUARD_POLICY)")
    parser.add_argument(
        "--diagnostics", metavar="PATH", help="Diagnostic tables YAML (or set WARNINGS_GUARD_DIAGNOSTICS)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every resolution decision")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="warnings-guard",
        description="Warnings Guard - decide which compiler findings are errors, warnings or suppressed",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  warnings-guard triage findings.json
  warnings-guard triage findings.jsonl --policy policy.yaml --format sarif -o report.sarif
  warnings-guard explain --type JSC_UNKNOWN_EXPR_TYPE --path src/app/main.js
  warnings-guard generate-policy -o policy.yaml
  warnings-guard validate-policy policy.yaml
  warnings-guard list-groups
        """,
    )
    parser.add_argument("--env-file", metavar="PATH", help="Load configuration from a .env file")
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # -- triage ------------------------------------------------------------
    triage_p = subparsers.add_parser("triage", help="Resolve a findings file against a policy")
    triage_p.add_argument("findings", help="Findings file (.json or .jsonl)")
    _add_policy_flags(triage_p)
    triage_p.add_argument(
        "--format",
        choices=list(WarningsGuardConstants.OUTPUT_FORMATS),
        default=None,
        help="Output format (default: summary)",
    )
    triage_p.add_argument("--output", "-o", help="Output file path")
    triage_p.add_argument("--detailed", action="store_true", help="Show the deciding rule (Markdown output only)")
    triage_p.add_argument("--include-suppressed", action="store_true", help="Also list suppressed findings")
    triage_p.add_argument("--fail-on-warnings", action="store_true", help="Exit with error on warnings too")

    # -- explain -----------------------------------------------------------
    explain_p = subparsers.add_parser("explain", help="Explain the outcome for a single finding")
    explain_p.add_argument("--type", required=True, help="Diagnostic type key")
    explain_p.add_argument("--path", default=None, help="Source path (omit for code-independent findings)")
    _add_policy_flags(explain_p)

    # -- generate-policy ---------------------------------------------------
    gp_p = subparsers.add_parser("generate-policy", help="Generate a default policy YAML")
    gp_p.add_argument("--output", "-o", default="warnings_policy.yaml", help="Output file path")

    # -- validate-policy ---------------------------------------------------
    vp_p = subparsers.add_parser("validate-policy", help="Load and validate a policy YAML")
    vp_p.add_argument("policy_file", help="Policy YAML to validate")

    # -- list-groups -------------------------------------------------------
    lg_p = subparsers.add_parser("list-groups", help="List categories disabled in the compiler")
    lg_p.add_argument("--diagnostics", metavar="PATH", help="Diagnostic tables YAML")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FINDINGS

    try:
        config = Config.from_file(Path(args.env_file)) if args.env_file else Config.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    _configure_logging(args, config)

    dispatch = {
        "triage": triage_command,
        "explain": explain_command,
        "generate-policy": generate_policy_command,
        "validate-policy": validate_policy_command,
        "list-groups": list_groups_command,
    }
    handler = dispatch.get(args.command)
    if handler:
        return handler(args, config)

    parser.print_help()
    return EXIT_FINDINGS


if __name__ == "__main__":
    sys.exit(main())
