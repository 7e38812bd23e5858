"""
Base class for checks.
"""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Sequence

from .models import CheckInfo, Element, Issue, Page, Severity

if TYPE_CHECKING:
    from ..manager import CheckManager
    from .registry import CheckDescriptor


class BaseCheck(ABC):
    """
    Базовый класс для всех проверок.

    Подкласс объявляет `info` и реализует run(). Жизненный цикл для одной
    страницы: prepare() -> run() -> clean_up(), каждый шаг ровно один раз.

    Предоставляет:
    - Создание и регистрацию Issue
    - Учёт лимита проблем
    - Логирование
    """

    info: CheckInfo = CheckInfo(name="base")

    def __init__(
        self,
        page: Page,
        manager: "CheckManager",
        descriptor: Optional["CheckDescriptor"] = None,
    ):
        """
        Args:
            page: Страница для аудита
            manager: Менеджер (доступ к конфигурации и реестру результатов)
            descriptor: Загруженная запись проверки (для лимита проблем)
        """
        self.page = page
        self.manager = manager
        self.descriptor = descriptor
        self.logger = logging.getLogger(f"scanaudit.checks.{self.info.name}")

    def prepare(self) -> None:
        """Подготовка перед run() (по умолчанию ничего)."""
        pass

    @abstractmethod
    def run(self) -> None:
        """Проверить страницу и зарегистрировать найденные проблемы."""
        pass

    def clean_up(self) -> None:
        """Освобождение ресурсов после run() (по умолчанию ничего)."""
        pass

    def create_issue(
        self,
        name: str,
        element: Optional[Element] = None,
        vector: str = "",
        method: str = "GET",
        severity: Optional[Severity] = None,
        description: str = "",
        proof: str = "",
        url: Optional[str] = None,
        **remarks
    ) -> Issue:
        """
        Удобный метод для создания Issue от имени этой проверки.

        Активность и серьёзность по умолчанию берутся из info.
        """
        return Issue(
            name=name,
            check=self.info.name,
            url=url or self.page.url,
            active=self.info.active,
            element=element,
            vector=vector,
            method=method,
            severity=severity or self.info.severity,
            description=description,
            proof=proof,
            remarks=remarks,
        )

    def log_issue(self, **kwargs) -> Issue:
        """Создать и зарегистрировать одну проблему."""
        issue = self.create_issue(**kwargs)
        self.register_results([issue])
        return issue

    def register_results(self, issues: Sequence[Issue]) -> Sequence[Issue]:
        """Передать проблемы в реестр результатов."""
        if issues and self.descriptor is not None:
            self.descriptor.record_issues(len(issues))

        self.logger.debug(f"Logging {len(issues)} issues for {self.page.url}")
        return self.manager.results.register_results(issues)

    def audited(self, key: str) -> bool:
        """
        Отметить ключ (хост, URL, ...) как проверенный.

        Returns:
            True если ключ уже был проверен этой проверкой ранее
        """
        if self.descriptor is None:
            return False
        return not self.descriptor.mark_audited(key)

    @property
    def config(self):
        return self.manager.config

