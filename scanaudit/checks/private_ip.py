"""Passive check: RFC 1918 addresses disclosed in the page body."""

import ipaddress
import re

from ..core.base_check import BaseCheck
from ..core.models import CheckInfo, Element, Severity

IPV4_PATTERN = re.compile(r"(?<![\d.])(?:\d{1,3}\.){3}\d{1,3}(?![\d.])")


class PrivateIP(BaseCheck):
    """Ищет внутренние IP адреса в теле страницы."""

    info = CheckInfo(
        name="private_ip",
        description="Logs private IP addresses found in the page body.",
        elements=frozenset({Element.BODY}),
        preferred=frozenset({"email_disclosure"}),
        severity=Severity.LOW,
    )

    def run(self) -> None:
        found = []
        for candidate in IPV4_PATTERN.findall(self.page.body):
            try:
                address = ipaddress.IPv4Address(candidate)
            except ipaddress.AddressValueError:
                continue
            if address.is_private and not address.is_loopback and candidate not in found:
                found.append(candidate)

        self.register_results([
            self.create_issue(
                name="Private IP address disclosure",
                element=Element.BODY,
                proof=ip,
                description=f"Private address {ip} appears in the response body.",
            )
            for ip in found
        ])
