"""Core result data structures for the scanner."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from functools import reduce
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .severity import Severity

RULE_ORDER: Sequence[str] = (
    "unused_imports",
    "line_length",
    "newline_at_eof",
    "todo",
    "max_parameters",
)


@dataclass(frozen=True)
class Violation:
    """A single reported instance of a rule being broken."""

    rule: str
    path: str
    message: str
    line: Optional[int] = None
    severity: Severity = Severity.WARNING

    @property
    def location(self) -> str:
        if self.line is None:
            return self.path
        return f"{self.path}:{self.line}"

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data

    def __str__(self) -> str:
        return f"{self.location}: [{self.severity.value}] {self.message}"


@dataclass
class Summary:
    """Aggregate violation counts by rule."""

    unused_imports: int = 0
    line_length: int = 0
    newline_at_eof: int = 0
    todo: int = 0
    max_parameters: int = 0

    def increment(self, rule: str) -> None:
        setattr(self, rule, getattr(self, rule) + 1)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def as_rows(self) -> List[Tuple[str, int]]:
        """Return rule/count pairs ordered for reporting."""

        return [(rule, getattr(self, rule)) for rule in RULE_ORDER]

    @property
    def total(self) -> int:
        return sum(getattr(self, rule) for rule in RULE_ORDER)


@dataclass
class FileResult:
    """Violations and isolated failures for one scanned file."""

    path: Path
    violations: List[Violation] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    violations_found: bool = False


@dataclass
class RunResult:
    """Bundle the per-file results of one run."""

    root: Path
    files: List[FileResult] = field(default_factory=list)

    @property
    def violations_found(self) -> bool:
        return reduce(lambda found, item: found or item.violations_found, self.files, False)

    @property
    def passed(self) -> bool:
        return not self.violations_found

    @property
    def files_scanned(self) -> int:
        return len(self.files)

    @property
    def violations(self) -> List[Violation]:
        return [violation for item in self.files for violation in item.violations]

    @property
    def files_with_violations(self) -> int:
        return sum(1 for item in self.files if item.violations_found)

    @property
    def errors(self) -> List[str]:
        return [error for item in self.files for error in item.errors]

    @property
    def summary(self) -> Summary:
        summary = Summary()
        for violation in self.violations:
            summary.increment(violation.rule)
        return summary

    def to_dict(self) -> Dict[str, object]:
        return {
            "root": str(self.root),
            "files_scanned": self.files_scanned,
            "summary": self.summary.to_dict(),
            "violations": [violation.to_dict() for violation in self.violations],
            "errors": self.errors,
            "passed": self.passed,
        }

    def exit_code(self) -> int:
        return 1 if self.violations_found else 0

    def summary_line(self) -> str:
        if self.passed:
            return "No violations found."
        return (
            f"Code cleanup violations found: {len(self.violations)} violation(s) "
            f"in {self.files_with_violations} file(s)."
        )


def format_summary_table(result: RunResult, max_violations: int = 10) -> str:
    """Create a human-readable summary table for console output."""

    lines: List[str] = []
    lines.append("Scan Summary")
    lines.append("=" * 40)
    header = f"{'Rule':<16} | {'Count':>5}"
    lines.append(header)
    lines.append("-" * len(header))
    for rule, count in result.summary.as_rows():
        lines.append(f"{rule:<16} | {count:>5}")
    lines.append("-" * len(header))
    status = "PASS" if result.passed else "FAIL"
    lines.append(f"Status    : {status}")
    lines.append(f"Files     : {result.files_scanned}")
    lines.append(f"Violations: {result.summary.total}")

    violations = result.violations[:max_violations]
    if violations:
        lines.append("")
        lines.append("Violations")
        lines.append("-" * 40)
        for violation in violations:
            lines.append(f"[{violation.rule}] {violation.location}")
            lines.append(f"  {violation.message}")
        remaining = len(result.violations) - len(violations)
        if remaining > 0:
            lines.append(f"  ... and {remaining} more")
    return "\n".join(lines)
