"""
Configuration for the check manager.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str) -> List[str]:
    value = os.getenv(name, "")
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class AuditConfig:
    """Конфигурация аудита."""

    # === Elements to audit ===
    audit_links: bool = field(default_factory=lambda: _env_bool("SCANAUDIT_AUDIT_LINKS", True))
    audit_forms: bool = field(default_factory=lambda: _env_bool("SCANAUDIT_AUDIT_FORMS", True))
    audit_cookies: bool = field(default_factory=lambda: _env_bool("SCANAUDIT_AUDIT_COOKIES", True))
    audit_headers: bool = field(default_factory=lambda: _env_bool("SCANAUDIT_AUDIT_HEADERS", False))

    # === Checks ===
    # Пустой список = все встроенные проверки
    checks: List[str] = field(default_factory=lambda: _env_list("SCANAUDIT_CHECKS"))

    # === Execution Settings ===
    parallel_execution: bool = field(default_factory=lambda: _env_bool("SCANAUDIT_PARALLEL", True))
    max_parallel_workers: int = field(
        default_factory=lambda: int(os.getenv("SCANAUDIT_MAX_WORKERS", "4"))
    )

    # === Report Settings ===
    report_output_dir: Path = field(default_factory=lambda: Path.cwd() / "audit_reports")

    def __post_init__(self):
        """Validate configuration."""
        self.report_output_dir = Path(self.report_output_dir)

        if self.max_parallel_workers < 1:
            raise ValueError(
                f"max_parallel_workers must be >= 1, got {self.max_parallel_workers}"
            )


def get_default_config() -> AuditConfig:
    """Получить конфигурацию по умолчанию."""
    return AuditConfig()
