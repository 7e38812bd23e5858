"""
Active check: input values echoed back in the page body.

Значение каждого параметра ссылки или поля формы ищется в теле страницы.
Отражённый ввод - кандидат для XSS.
"""

from urllib.parse import parse_qsl, urlsplit

from ..core.base_check import BaseCheck
from ..core.models import CheckInfo, Element, Severity

# Короткие значения совпадают случайно
MIN_VALUE_LENGTH = 4


class ReflectedParams(BaseCheck):
    """Ищет параметры, значения которых отражаются в теле страницы."""

    info = CheckInfo(
        name="reflected_params",
        description="Logs link and form inputs whose values are reflected in the body.",
        elements=frozenset({Element.LINK, Element.FORM}),
        preferred=frozenset({"x_frame_options"}),
        max_issues=10,
        active=True,
        severity=Severity.MEDIUM,
    )

    def prepare(self) -> None:
        self.candidates = []

        if self.config.audit_links:
            for link in self.page.links:
                for name, value in parse_qsl(urlsplit(link).query):
                    self.candidates.append((Element.LINK, link, "GET", name, value))

        if self.config.audit_forms:
            for form in self.page.forms:
                if not isinstance(form, dict):
                    continue
                action = form.get("action") or self.page.url
                method = str(form.get("method", "GET")).upper()
                inputs = form.get("inputs")
                if not isinstance(inputs, dict):
                    continue
                for name, value in inputs.items():
                    self.candidates.append((Element.FORM, action, method, name, str(value)))

    def run(self) -> None:
        body = self.page.body
        issues = []

        for element, url, method, name, value in self.candidates:
            if len(value) < MIN_VALUE_LENGTH or value not in body:
                continue
            issues.append(self.create_issue(
                name="Reflected input",
                element=element,
                url=url,
                vector=name,
                method=method,
                proof=value,
                description=f"The value of '{name}' is reflected in the response body.",
            ))

        self.register_results(issues)

    def clean_up(self) -> None:
        self.candidates = []
