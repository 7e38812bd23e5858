"""Passive check: email addresses disclosed in the page body."""

import re

from ..core.base_check import BaseCheck
from ..core.models import CheckInfo, Element, Severity

EMAIL_PATTERN = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)


class EmailDisclosure(BaseCheck):
    """Ищет email адреса в теле страницы."""

    info = CheckInfo(
        name="email_disclosure",
        description="Logs email addresses found in the page body.",
        elements=frozenset({Element.BODY}),
        severity=Severity.INFORMATIONAL,
    )

    def run(self) -> None:
        issues = [
            self.create_issue(
                name="E-mail address disclosure",
                element=Element.BODY,
                proof=email,
                description=f"Email address {email} appears in the response body.",
            )
            for email in sorted(set(EMAIL_PATTERN.findall(self.page.body)))
        ]
        self.register_results(issues)
