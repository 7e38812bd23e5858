"""
Core data models for the check manager.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional


class Element(Enum):
    """Тип элемента страницы, на который нацелена проверка."""
    LINK = "link"
    LINK_DOM = "link_dom"
    FORM = "form"
    FORM_DOM = "form_dom"
    COOKIE = "cookie"
    HEADER = "header"
    BODY = "body"
    PATH = "path"      # Структурный элемент, всегда доступен
    SERVER = "server"  # Структурный элемент, всегда доступен


class Severity(Enum):
    """Уровень серьёзности проблемы."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFORMATIONAL = "informational"


@dataclass(frozen=True)
class CheckInfo:
    """Описание проверки (метаданные класса check)."""

    name: str
    description: str = ""
    elements: FrozenSet[Element] = frozenset()
    platforms: FrozenSet[str] = frozenset()
    preferred: FrozenSet[str] = frozenset()
    max_issues: Optional[int] = None
    active: bool = False  # True = attack-type проверка
    severity: Severity = Severity.INFORMATIONAL


@dataclass
class Issue:
    """Проблема, найденная проверкой."""

    name: str
    check: str
    url: str
    active: bool = False
    element: Optional[Element] = None
    vector: str = ""  # Имя атакуемого input'а (если есть)
    method: str = "GET"
    severity: Severity = Severity.INFORMATIONAL
    description: str = ""
    proof: str = ""
    remarks: Dict[str, Any] = field(default_factory=dict)

    @property
    def unique_id(self) -> str:
        """
        Отпечаток проблемы для дедупликации между запусками.

        Query string не учитывается: одна и та же уязвимость на одном
        input'е считается одной проблемой.
        """
        return f"{self.check}:{self.method.upper()}:{self.vector}:{self.url.split('?', 1)[0]}"

    def to_dict(self) -> Dict[str, Any]:
        """Преобразовать в словарь для JSON."""
        return {
            "unique_id": self.unique_id,
            "name": self.name,
            "check": self.check,
            "url": self.url,
            "active": self.active,
            "element": self.element.value if self.element else None,
            "vector": self.vector,
            "method": self.method,
            "severity": self.severity.value,
            "description": self.description,
            "proof": self.proof,
            "remarks": self.remarks,
        }

    def to_markdown(self) -> str:
        """Преобразовать в markdown для отчёта."""
        kind = "active" if self.active else "passive"
        md = f"### [{self.severity.value.upper()}] {self.name}\n\n"
        md += f"**Check:** `{self.check}` ({kind})\n\n"
        md += f"**URL:** `{self.url}`\n\n"
        if self.vector:
            md += f"**Vector:** `{self.method.upper()} {self.vector}`\n\n"
        if self.description:
            md += f"**Description:** {self.description}\n\n"
        if self.proof:
            md += f"**Proof:**\n```\n{self.proof}\n```\n\n"
        return md


@dataclass
class Page:
    """Просканированная страница (то, что проверяют checks)."""

    url: str
    links: List[str] = field(default_factory=list)
    forms: List[Dict[str, Any]] = field(default_factory=list)
    cookies: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""

    def has_links(self) -> bool:
        return bool(self.links)

    def has_forms(self) -> bool:
        return bool(self.forms)

    def has_cookies(self) -> bool:
        return bool(self.cookies)

    def has_headers(self) -> bool:
        return bool(self.headers)

    def has_body(self) -> bool:
        return bool(self.body)

    def header(self, name: str) -> Optional[str]:
        """Получить заголовок без учёта регистра."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Page":
        """
        Создать страницу из словаря (например, из JSON файла).

        Raises:
            ValueError: если нет url или поля имеют неверный тип
        """
        if not isinstance(data, dict):
            raise ValueError(f"Page must be an object, got {type(data).__name__}")

        url = data.get("url")
        if not url or not isinstance(url, str):
            raise ValueError("Page is missing a 'url' string")

        expected = {
            "links": list,
            "forms": list,
            "cookies": dict,
            "headers": dict,
            "body": str,
        }
        for key, expected_type in expected.items():
            if key in data and not isinstance(data[key], expected_type):
                raise ValueError(
                    f"Page field '{key}' must be {expected_type.__name__}, "
                    f"got {type(data[key]).__name__}"
                )

        return cls(
            url=url,
            links=list(data.get("links", [])),
            forms=list(data.get("forms", [])),
            cookies=dict(data.get("cookies", {})),
            headers=dict(data.get("headers", {})),
            body=data.get("body", ""),
        )
