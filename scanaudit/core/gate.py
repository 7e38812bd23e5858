"""
Решение, запускать ли проверку для конкретной страницы.
"""

from typing import Dict

from ..config import AuditConfig
from .models import Element, Page
from .registry import CheckDescriptor


def active_elements(page: Page, config: AuditConfig) -> Dict[Element, bool]:
    """Какие типы элементов страницы доступны для аудита."""
    links = page.has_links() and config.audit_links
    forms = page.has_forms() and config.audit_forms

    return {
        Element.LINK: links,
        Element.LINK_DOM: links,
        Element.FORM: forms,
        Element.FORM_DOM: forms,
        Element.COOKIE: page.has_cookies() and config.audit_cookies,
        Element.HEADER: page.has_headers() and config.audit_headers,
        Element.BODY: page.has_body(),
        Element.PATH: True,
        Element.SERVER: True,
    }


def applies(check: CheckDescriptor, page: Page, config: AuditConfig) -> bool:
    """
    Нужно ли запускать проверку против страницы.

    Args:
        check: Проверка
        page: Страница
        config: Настройки аудита (какие элементы аудировать)

    Returns:
        False если достигнут лимит проблем или ни один целевой элемент
        не доступен; True если у проверки нет целевых элементов
    """
    if check.issue_limit_reached:
        return False

    elements = check.elements
    if not elements:
        return True

    return any(
        available and element in elements
        for element, available in active_elements(page, config).items()
    )
