#!/usr/bin/env python3
"""Replay audit cases through the safety pipeline and lint the rule catalog.

Dev-only harness. Exit status is non-zero when any case fails or, with
``--lint --strict``, when the catalog has lint findings.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from safetriage.content import load_audit_cases
from safetriage.core.aggregator import assess_urgency
from safetriage.core.catalog import CatalogError, RedFlagCatalog, get_catalog, load_catalog
from safetriage.core.crisis import crisis_type_for, format_crisis_response
from safetriage.schemas.safety import HealthContext, SafetyAssessment, UrgencyLevel

logger = logging.getLogger("safetriage.audit")


@dataclass
class CheckResult:
    name: str
    passed: bool
    evidence: Optional[str] = None


@dataclass
class CaseResult:
    case_id: str
    name: str
    checks: List[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)


@dataclass
class AuditReport:
    results: List[CaseResult]

    @property
    def passed_count(self) -> int:
        return sum(1 for result in self.results if result.passed)

    @property
    def failed_count(self) -> int:
        return len(self.results) - self.passed_count


def _check_expectations(
    expect: Dict[str, Any],
    assessment: SafetyAssessment,
    crisis_type: str,
) -> List[CheckResult]:
    checks: List[CheckResult] = []
    urgency = assessment.urgency
    rule_ids = {rule.id for rule in assessment.matched_red_flag_rules}
    resources_text = format_crisis_response(crisis_type)

    if "urgency" in expect:
        wanted = UrgencyLevel(expect["urgency"])
        checks.append(CheckResult(f"urgency == {wanted.value}", urgency == wanted, urgency.value))
    if "min_urgency" in expect:
        floor = UrgencyLevel(expect["min_urgency"])
        checks.append(CheckResult(f"urgency >= {floor.value}", urgency >= floor, urgency.value))
    if "max_urgency" in expect:
        ceiling = UrgencyLevel(expect["max_urgency"])
        checks.append(CheckResult(f"urgency <= {ceiling.value}", urgency <= ceiling, urgency.value))
    if "crisis_type" in expect:
        checks.append(
            CheckResult(f"crisis == {expect['crisis_type']}", crisis_type == expect["crisis_type"], crisis_type)
        )
    for needle in expect.get("resources_contain", []):
        checks.append(CheckResult(f"resources mention {needle}", needle in resources_text))
    for rule_id in expect.get("rules_include", []):
        checks.append(CheckResult(f"rule {rule_id} fired", rule_id in rule_ids, ", ".join(sorted(rule_ids))))
    for rule_id in expect.get("rules_exclude", []):
        checks.append(CheckResult(f"rule {rule_id} silent", rule_id not in rule_ids))
    for factor in expect.get("risk_factors_include", []):
        checks.append(CheckResult(f"risk factor {factor}", factor in assessment.risk_factors))
    return checks


def run_case(case: Dict[str, Any], catalog: RedFlagCatalog) -> CaseResult:
    result = CaseResult(case_id=str(case.get("id", "?")), name=str(case.get("name", "")))
    try:
        context = HealthContext.model_validate(case.get("context", {}))
    except ValidationError as exc:
        result.checks.append(CheckResult("valid context", False, str(exc)))
        return result
    assessment = assess_urgency(context, catalog)
    crisis_type = crisis_type_for(context)
    result.checks.extend(_check_expectations(case.get("expect", {}), assessment, crisis_type))
    return result


def run_audit(
    cases: Optional[Sequence[Dict[str, Any]]] = None,
    catalog: Optional[RedFlagCatalog] = None,
) -> AuditReport:
    catalog = catalog or get_catalog()
    cases = load_audit_cases() if cases is None else cases
    return AuditReport(results=[run_case(case, catalog) for case in cases])


def lint_catalog(catalog: RedFlagCatalog) -> List[str]:
    """Flag rules that are likely to over-trigger or never fire."""

    findings: List[str] = []
    descriptions: Dict[str, str] = {}
    for rule in catalog.rules:
        if rule.pattern.search(""):
            findings.append(f"{rule.id}: pattern matches empty text")
        if rule.age_restriction is not None and not rule.requires_context:
            findings.append(f"{rule.id}: age restriction without a context gate")
        if rule.description in descriptions:
            findings.append(f"{rule.id}: description duplicates {descriptions[rule.description]}")
        descriptions.setdefault(rule.description, rule.id)
    return findings


def format_report(report: AuditReport, verbose: bool = False) -> str:
    lines = ["=" * 72, "SAFETRIAGE AUDIT REPORT", "=" * 72]
    for result in report.results:
        lines.append(f"{result.case_id}: {result.name} -> {'PASS' if result.passed else 'FAIL'}")
        for check in result.checks:
            if verbose or not check.passed:
                suffix = f" ({check.evidence})" if check.evidence and not check.passed else ""
                lines.append(f"  [{'PASS' if check.passed else 'FAIL'}] {check.name}{suffix}")
    lines.append("=" * 72)
    lines.append(f"SUMMARY: {report.passed_count}/{len(report.results)} PASSED, {report.failed_count} FAILED")
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--cases", type=Path, help="YAML file with audit cases (defaults to the packaged set)")
    parser.add_argument("--catalog", type=Path, help="Alternative red-flag catalog YAML")
    parser.add_argument("--lint", action="store_true", help="Also lint the catalog")
    parser.add_argument("--strict", action="store_true", help="Fail on lint findings")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show passing checks too")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    try:
        catalog = load_catalog(args.catalog) if args.catalog else get_catalog()
    except CatalogError as exc:
        logger.error("%s", exc)
        return 2

    cases = load_audit_cases(args.cases) if args.cases else None
    report = run_audit(cases, catalog)
    print(format_report(report, verbose=args.verbose))

    exit_code = 0 if report.failed_count == 0 else 1
    if args.lint:
        findings = lint_catalog(catalog)
        for finding in findings:
            print(f"LINT {finding}")
        if findings and args.strict:
            exit_code = exit_code or 1
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
