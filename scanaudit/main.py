"""
CLI interface for the check manager.

Usage:
    scanaudit checks                              # Checks in running order
    scanaudit scan page.json other.json           # Audit pages
    scanaudit scan pages.json --format json       # JSON report
    scanaudit scan page.json --sequential -v      # No threads, debug logs
"""

import json
import logging
import time
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from scanaudit.checks import BUILTIN_CHECKS
from scanaudit.config import AuditConfig
from scanaudit.core.errors import CheckManagerError
from scanaudit.core.models import Page
from scanaudit.manager import CheckManager
from scanaudit.reports.generator import ReportGenerator

# Load .env file if it exists
env_path = Path.cwd() / ".env"
if env_path.exists():
    load_dotenv(env_path)

app = typer.Typer(
    name="scanaudit",
    help="Scan Audit: run pluggable checks against scanned pages"
)
console = Console()


def setup_logging(verbose: bool = False):
    """Настроить логирование."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def load_pages(paths: List[Path]) -> List[Page]:
    """
    Загрузить страницы из JSON файлов.

    Файл может содержать одну страницу (объект) или список страниц.

    Raises:
        ValueError: файл не JSON или страница некорректна
    """
    pages = []
    for path in paths:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: invalid JSON: {e}") from e

        items = data if isinstance(data, list) else [data]
        for item in items:
            try:
                pages.append(Page.from_dict(item))
            except ValueError as e:
                raise ValueError(f"{path}: {e}") from e
    return pages


def build_manager(config: AuditConfig) -> CheckManager:
    manager = CheckManager(config)
    manager.load(BUILTIN_CHECKS)
    return manager


@app.command()
def checks():
    """📋 Показать проверки в порядке запуска."""

    manager = build_manager(AuditConfig())

    table = Table(title="Checks")
    table.add_column("#", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Elements", style="green")
    table.add_column("Runs after", style="dim")

    for i, check in enumerate(manager.schedule(), 1):
        table.add_row(
            str(i),
            check.name,
            "active" if check.info.active else "passive",
            ", ".join(sorted(e.value for e in check.elements)) or "any",
            ", ".join(sorted(check.preferred)) or "-",
        )

    console.print(table)


@app.command()
def scan(
    pages: List[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Page JSON files"),
    output_format: str = typer.Option("markdown", "--format", "-f", help="markdown or json"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Report directory"),
    sequential: bool = typer.Option(False, "--sequential", help="Do not use worker threads"),
    no_report: bool = typer.Option(False, "--no-report", help="Only print results"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """🔍 Запустить проверки против страниц."""

    setup_logging(verbose)

    if output_format not in ("markdown", "json"):
        console.print(f"[red]❌ Unknown format: {output_format}[/]")
        raise typer.Exit(2)

    try:
        loaded = load_pages(pages)
    except ValueError as e:
        console.print(f"[red]❌ {e}[/]")
        raise typer.Exit(1)

    config = AuditConfig()
    if output_dir is not None:
        config.report_output_dir = output_dir

    try:
        manager = build_manager(config)
    except CheckManagerError as e:
        console.print(f"[red]❌ {e}[/]")
        raise typer.Exit(1)

    start_time = time.perf_counter()
    with console.status(f"[bold blue]Auditing {len(loaded)} pages...[/]"):
        reports = manager.run_pages(loaded, parallel=False if sequential else None)
    duration = time.perf_counter() - start_time

    issues = manager.results.results

    table = Table(title=f"🔍 Issues ({len(issues)})")
    table.add_column("Severity")
    table.add_column("Check", style="cyan")
    table.add_column("Issue")
    table.add_column("URL", style="dim")
    table.add_column("Vector", style="green")

    for issue in issues:
        table.add_row(
            issue.severity.value,
            issue.check,
            issue.name,
            issue.url,
            issue.vector or "-",
        )
    console.print(table)

    for report in reports:
        for failure in report.failures:
            console.print(
                f"[yellow]⚠️  {failure.check} failed on {report.url}: "
                f"{type(failure.error).__name__}: {failure.error}[/]"
            )

    if not no_report:
        generator = ReportGenerator(config.report_output_dir)
        path = generator.generate_report(issues, reports, duration, format=output_format)
        console.print(f"[green]✅ Report saved to {path}[/]")


if __name__ == "__main__":
    app()
