"""Passive check: cookies set without the Secure or HttpOnly flags."""

from ..core.base_check import BaseCheck
from ..core.models import CheckInfo, Element, Severity


class InsecureCookies(BaseCheck):
    """Проверяет флаги cookies."""

    info = CheckInfo(
        name="insecure_cookies",
        description="Logs cookies missing the Secure or HttpOnly flags.",
        elements=frozenset({Element.COOKIE}),
        severity=Severity.LOW,
    )

    def run(self) -> None:
        https = self.page.url.lower().startswith("https://")
        issues = []

        for name, attributes in sorted(self.page.cookies.items()):
            # Значение без атрибутов (например, строка) = флаги не заданы
            if not isinstance(attributes, dict):
                attributes = {}

            if https and not attributes.get("secure"):
                issues.append(self.create_issue(
                    name="Insecure cookie",
                    element=Element.COOKIE,
                    vector=name,
                    description=f"Cookie '{name}' is served over HTTPS without the Secure flag.",
                    flag="secure",
                ))

            if not attributes.get("httponly"):
                issues.append(self.create_issue(
                    name="HttpOnly cookie",
                    element=Element.COOKIE,
                    vector=name,
                    description=f"Cookie '{name}' is accessible to scripts (no HttpOnly flag).",
                    flag="httponly",
                ))

        self.register_results(issues)
