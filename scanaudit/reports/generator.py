"""
Report generator for audit results.

Generates:
- Markdown reports for human reading
- JSON reports for machine processing
"""

import json
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..core.models import Issue, Severity
from ..manager import RunReport

SEVERITY_ORDER = [Severity.HIGH, Severity.MEDIUM, Severity.LOW, Severity.INFORMATIONAL]


class ReportGenerator:
    """Генератор отчётов аудита."""

    def __init__(self, output_dir: Optional[Path] = None):
        """
        Args:
            output_dir: Директория для сохранения отчётов (по умолчанию audit_reports/)
        """
        self.output_dir = Path(output_dir or "audit_reports")
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def summarize(
        self,
        issues: Sequence[Issue],
        run_reports: Sequence[RunReport],
        duration_seconds: float,
    ) -> Dict[str, Any]:
        """Сводка аудита в виде словаря."""
        by_severity = Counter(issue.severity.value for issue in issues)
        by_check = Counter(issue.check for issue in issues)

        return {
            "timestamp": datetime.now().isoformat(),
            "pages": len(run_reports),
            "total_issues": len(issues),
            "issues_by_severity": {s.value: by_severity.get(s.value, 0) for s in SEVERITY_ORDER},
            "issues_by_check": dict(by_check.most_common()),
            "failures": [
                dict(failure.to_dict(), url=report.url)
                for report in run_reports
                for failure in report.failures
            ],
            "issues": [issue.to_dict() for issue in issues],
            "duration_seconds": duration_seconds,
        }

    def generate_report(
        self,
        issues: Sequence[Issue],
        run_reports: Sequence[RunReport],
        duration_seconds: float,
        format: str = "markdown",
    ) -> str:
        """
        Генерация отчёта.

        Args:
            issues: Сохранённые проблемы
            run_reports: Отчёты по страницам
            duration_seconds: Длительность аудита
            format: Формат отчёта ("markdown" или "json")

        Returns:
            Путь к сгенерированному файлу
        """
        summary = self.summarize(issues, run_reports, duration_seconds)
        timestamp_str = datetime.now().strftime("%Y%m%d_%H%M%S")

        if format == "json":
            filepath = self.output_dir / f"audit_report_{timestamp_str}.json"
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(summary, f, indent=2, ensure_ascii=False)
        else:
            filepath = self.output_dir / f"audit_report_{timestamp_str}.md"
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(self._markdown(summary, issues))

        return str(filepath)

    def _markdown(self, summary: Dict[str, Any], issues: Sequence[Issue]) -> str:
        lines: List[str] = []

        lines.append("# Page Audit Report")
        lines.append("")
        lines.append(f"**Date:** {summary['timestamp']}")
        lines.append(f"**Pages:** {summary['pages']}")
        lines.append("")

        lines.append("## Summary")
        lines.append("")
        lines.append(f"- **Total Issues:** {summary['total_issues']}")
        for severity, count in summary["issues_by_severity"].items():
            lines.append(f"- **{severity.capitalize()}:** {count}")
        lines.append("")

        if summary["issues_by_check"]:
            lines.append("## Issues by Check")
            for check, count in summary["issues_by_check"].items():
                lines.append(f"- **{check}:** {count}")
            lines.append("")

        if summary["failures"]:
            lines.append("## Failed Checks")
            lines.append("")
            for failure in summary["failures"]:
                lines.append(
                    f"- `{failure['check']}` on {failure['url']}: "
                    f"{failure['exception_type']}: {failure['exception_message']}"
                )
            lines.append("")

        for severity in SEVERITY_ORDER:
            selected = [i for i in issues if i.severity == severity]
            if not selected:
                continue
            lines.append(f"## {severity.value.capitalize()} Issues")
            lines.append("")
            for issue in selected:
                lines.append(issue.to_markdown())

        lines.append("---")
        lines.append(f"*Report generated in {summary['duration_seconds']:.2f} seconds*")
        return "\n".join(lines)
