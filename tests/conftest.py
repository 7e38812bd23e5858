"""
Pytest configuration and fixtures.

Использование:
    pytest tests/ -v
"""

import os
import sys
from typing import Callable, Iterable, Optional

import pytest

# Корень проекта (там, где находится пакет scanaudit)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from scanaudit.config import AuditConfig
from scanaudit.core.base_check import BaseCheck
from scanaudit.core.models import CheckInfo, Element, Issue, Page
from scanaudit.core.registry import CheckDescriptor
from scanaudit.manager import CheckManager


def make_check(
    name: str,
    preferred: Iterable[str] = (),
    elements: Iterable[Element] = (),
    platforms: Iterable[str] = (),
    max_issues: Optional[int] = None,
    active: bool = False,
    run: Optional[Callable[[BaseCheck], None]] = None,
):
    """Создать класс проверки с заданными метаданными."""
    info = CheckInfo(
        name=name,
        elements=frozenset(elements),
        platforms=frozenset(platforms),
        preferred=frozenset(preferred),
        max_issues=max_issues,
        active=active,
    )

    def _run(self):
        if run is not None:
            run(self)

    return type(f"Check_{name}", (BaseCheck,), {"info": info, "run": _run})


def make_descriptor(name: str, **kwargs) -> CheckDescriptor:
    return CheckDescriptor(make_check(name, **kwargs))


def make_issue(check: str = "xss", active: bool = True, vector: str = "q", **kwargs) -> Issue:
    kwargs.setdefault("url", "http://test.com/search?q=1")
    return Issue(name=f"{check} issue", check=check, active=active, vector=vector, **kwargs)


# ═══════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════

@pytest.fixture
def config(tmp_path):
    """Конфигурация без чтения переменных окружения."""
    return AuditConfig(
        audit_links=True,
        audit_forms=True,
        audit_cookies=True,
        audit_headers=True,
        checks=[],
        parallel_execution=False,
        max_parallel_workers=2,
        report_output_dir=tmp_path / "reports",
    )


@pytest.fixture
def manager(config):
    return CheckManager(config)


@pytest.fixture
def empty_page():
    return Page(url="http://test.com/")


@pytest.fixture
def full_page():
    return Page(
        url="http://test.com/search?q=hello",
        links=["http://test.com/search?q=hello"],
        forms=[{"action": "http://test.com/login", "method": "post", "inputs": {"user": "admin"}}],
        cookies={"session": {"secure": False, "httponly": False}},
        headers={"Content-Type": "text/html"},
        body="<p>Results for hello</p>",
    )
