"""
Каталог известных платформ и их валидация.

Платформы объявляются проверками (CheckInfo.platforms) и страницами.
Проверка, объявившая неизвестную платформу, считается повреждённой.
"""

import logging
from typing import Dict, FrozenSet, Iterable, Optional

logger = logging.getLogger(__name__)


# Типы платформ и их идентификаторы
PLATFORM_TYPES: Dict[str, FrozenSet[str]] = {
    "os": frozenset({
        "unix", "linux", "bsd", "aix", "solaris", "windows",
    }),
    "db": frozenset({
        "access", "db2", "emc", "firebird", "frontbase", "hsqldb",
        "informix", "ingres", "interbase", "maxdb", "mssql", "mysql",
        "oracle", "pgsql", "sqlite", "sybase", "mongodb",
    }),
    "servers": frozenset({
        "apache", "iis", "jetty", "nginx", "tomcat", "gunicorn",
    }),
    "languages": frozenset({
        "asp", "aspx", "java", "jsp", "perl", "php", "python", "ruby",
        "nodejs",
    }),
    "frameworks": frozenset({
        "rack", "rails", "django", "flask", "cakephp", "cherrypy",
        "jsf", "nette", "symfony", "express",
    }),
}


class PlatformValidator:
    """
    Валидатор идентификаторов платформ.

    Использование:
        validator = PlatformValidator()
        validator.valid({"php", "mysql"})  # True
        validator.valid({"cobol"})         # False
    """

    def __init__(self, catalogue: Optional[Dict[str, Iterable[str]]] = None):
        catalogue = PLATFORM_TYPES if catalogue is None else catalogue
        self.catalogue = {kind: frozenset(ids) for kind, ids in catalogue.items()}
        self.known = frozenset().union(*self.catalogue.values()) if self.catalogue else frozenset()

    def valid(self, platforms: Iterable[str]) -> bool:
        """Все ли платформы известны (пустой набор всегда валиден)."""
        unknown = self.invalid(platforms)
        if unknown:
            logger.debug(f"Unknown platforms: {', '.join(sorted(unknown))}")
        return not unknown

    def invalid(self, platforms: Iterable[str]) -> FrozenSet[str]:
        """Вернуть неизвестные платформы."""
        return frozenset(p for p in platforms if p not in self.known)

    def type_of(self, platform: str) -> Optional[str]:
        """Тип платформы ("os", "db", ...) или None."""
        for kind, ids in self.catalogue.items():
            if platform in ids:
                return kind
        return None
