"""Passive check: missing X-Frame-Options header."""

from urllib.parse import urlsplit

from ..core.base_check import BaseCheck
from ..core.models import CheckInfo, Element, Severity


class XFrameOptions(BaseCheck):
    """Сервер не защищает страницу от clickjacking."""

    info = CheckInfo(
        name="x_frame_options",
        description="Logs pages served without an X-Frame-Options header.",
        elements=frozenset({Element.SERVER}),
        severity=Severity.LOW,
    )

    def run(self) -> None:
        if self.page.header("X-Frame-Options"):
            return

        # Одна проблема на хост
        parts = urlsplit(self.page.url)
        host_url = f"{parts.scheme}://{parts.netloc}/"
        if self.audited(host_url):
            return

        self.log_issue(
            name="Missing 'X-Frame-Options' header",
            element=Element.SERVER,
            url=host_url,
            description="Responses can be framed by other origins (clickjacking).",
        )
