"""
Scan Audit - check manager for page audits.

Оркестрирует набор подключаемых проверок (checks) для страницы:
- Планирование порядка запуска по preferred-зависимостям
- Фильтрация неприменимых проверок
- Изолированный запуск каждой проверки
- Дедупликация и хранение найденных проблем (issues)

Usage:
    scanaudit scan page.json
"""

from scanaudit.config import AuditConfig, get_default_config
from scanaudit.core.models import Element, Issue, Page, Severity, CheckInfo
from scanaudit.core.base_check import BaseCheck
from scanaudit.core.errors import CheckManagerError, InvalidPlatforms, CheckNotFound
from scanaudit.core.registry import CheckDescriptor, CheckRegistry
from scanaudit.core.results import ResultRegistry
from scanaudit.manager import CheckManager, RunReport, CheckFailure

__version__ = "1.0.0"

__all__ = [
    # Основные классы
    "CheckManager",
    "CheckRegistry",
    "ResultRegistry",
    "BaseCheck",

    # Модели данных
    "CheckDescriptor",
    "CheckInfo",
    "Element",
    "Issue",
    "Page",
    "Severity",
    "RunReport",
    "CheckFailure",

    # Ошибки
    "CheckManagerError",
    "InvalidPlatforms",
    "CheckNotFound",

    # Конфигурация
    "AuditConfig",
    "get_default_config",

    "__version__",
]
