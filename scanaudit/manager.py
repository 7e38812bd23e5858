"""
Check manager: runs the loaded checks against pages.

Features:
- Ordering of checks by their preferences
- Filtering of checks that do not apply to a page
- Fault isolation: a failing check never stops the others
- Parallel execution over many pages
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Type

from . import metrics
from .config import AuditConfig, get_default_config
from .core import gate, scheduler
from .core.base_check import BaseCheck
from .core.models import Issue, Page
from .core.platforms import PlatformValidator
from .core.registry import CheckDescriptor, CheckRegistry
from .core.results import IssueHook, ResultRegistry

logger = logging.getLogger(__name__)


@dataclass
class CheckFailure:
    """Ошибка одной проверки на одной странице."""

    check: str
    error: BaseException

    def to_dict(self):
        return {
            "check": self.check,
            "exception_type": type(self.error).__name__,
            "exception_message": str(self.error),
        }


@dataclass
class RunReport:
    """Результат прогона всех проверок против одной страницы."""

    url: str
    executed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failures: List[CheckFailure] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def failed(self) -> List[str]:
        return [f.check for f in self.failures]

    @property
    def ok(self) -> bool:
        return not self.failures


class CheckManager:
    """
    Менеджер проверок и их результатов.

    Владеет реестром проверок и реестром результатов одной сессии
    сканирования.

    Использование:
        manager = CheckManager(config)
        manager.load(BUILTIN_CHECKS)
        report = manager.run(page)
        manager.results.results
    """

    def __init__(
        self,
        config: Optional[AuditConfig] = None,
        registry: Optional[CheckRegistry] = None,
        results: Optional[ResultRegistry] = None,
        validator: Optional[PlatformValidator] = None,
    ):
        """
        Args:
            config: Конфигурация аудита
            registry: Реестр проверок (по умолчанию пустой)
            results: Реестр результатов (по умолчанию новый)
            validator: Валидатор платформ для нового реестра проверок
        """
        self.config = config or get_default_config()
        self.registry = registry or CheckRegistry(validator)
        self.results = results or ResultRegistry()

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def load(self, check_classes: Iterable[Type[BaseCheck]]) -> List[CheckDescriptor]:
        """
        Зарегистрировать проверки.

        Если в конфигурации задан список checks, загружаются только они.
        """
        selected = set(self.config.checks)
        classes = [
            cls for cls in check_classes
            if not selected or cls.info.name in selected
        ]

        missing = selected - {cls.info.name for cls in classes}
        if missing:
            logger.warning(f"Unknown checks requested: {', '.join(sorted(missing))}")

        return self.registry.register_all(classes)

    def __getitem__(self, name: str) -> CheckDescriptor:
        return self.lookup(name)

    def lookup(self, name: str) -> CheckDescriptor:
        """Получить проверку по имени (с валидацией платформ)."""
        return self.registry.lookup(name)

    def schedule(self) -> List[CheckDescriptor]:
        """Проверки в порядке запуска."""
        return scheduler.schedule(dict(self.registry.items()))

    def applies(self, check: CheckDescriptor, page: Page) -> bool:
        """Запускать ли проверку против страницы."""
        return gate.applies(check, page, self.config)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(self, page: Page) -> RunReport:
        """
        Запустить все проверки против страницы.

        Ошибка проверки логируется и записывается в отчёт, остальные
        проверки продолжают выполняться.

        Returns:
            RunReport с выполненными, пропущенными и упавшими проверками
        """
        report = RunReport(url=page.url)
        start_time = time.perf_counter()

        for check in self.schedule():
            try:
                ran = self.run_one(check, page)
            except Exception as e:
                logger.error(f"Check {check.name} failed on {page.url}: {e}", exc_info=True)
                metrics.checks_failed.labels(check=check.name).inc()
                report.failures.append(CheckFailure(check=check.name, error=e))
                continue

            if ran:
                report.executed.append(check.name)
            else:
                report.skipped.append(check.name)

        report.duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"Audited {page.url}: "
            f"executed={len(report.executed)}, "
            f"skipped={len(report.skipped)}, "
            f"failed={len(report.failures)}, "
            f"duration={report.duration_ms:.2f}ms"
        )
        return report

    def run_one(self, check: CheckDescriptor, page: Page) -> bool:
        """
        Запустить одну проверку против страницы.

        Returns:
            False если проверка не применима, True если жизненный цикл выполнен
        """
        if not self.applies(check, page):
            logger.debug(f"Skipping {check.name} for {page.url}")
            metrics.checks_skipped.labels(check=check.name).inc()
            return False

        with metrics.check_duration.labels(check=check.name).time():
            instance = check.check_cls(page, self, check)
            instance.prepare()
            instance.run()
            instance.clean_up()

        metrics.checks_run.labels(check=check.name).inc()
        return True

    def run_pages(
        self,
        pages: Sequence[Page],
        parallel: Optional[bool] = None,
    ) -> List[RunReport]:
        """
        Запустить проверки против нескольких страниц.

        Args:
            pages: Страницы
            parallel: Параллельно в потоках (None = из конфига)

        Returns:
            Отчёты в порядке страниц
        """
        if not pages:
            return []

        if parallel is None:
            parallel = self.config.parallel_execution

        if not parallel or len(pages) == 1:
            logger.info(f"Auditing {len(pages)} pages sequentially...")
            return [self.run(page) for page in pages]

        workers = min(self.config.max_parallel_workers, len(pages))
        logger.info(f"Auditing {len(pages)} pages with {workers} workers...")

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="scanaudit") as pool:
            return list(pool.map(self.run, pages))

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def register_results(self, issues: Sequence[Issue]) -> Sequence[Issue]:
        return self.results.register_results(issues)

    def on_register_results(self, hook: IssueHook) -> IssueHook:
        return self.results.on_register_results(hook)

    def on_register_results_raw(self, hook: IssueHook) -> IssueHook:
        return self.results.on_register_results_raw(hook)

    def reset(self) -> None:
        """
        Начать новую сессию: очистить результаты, hooks и выгрузить проверки.

        Не вызывать параллельно со сканированием.
        """
        self.results.reset()
        self.registry.clear()
