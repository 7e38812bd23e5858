"""
Registry of loaded checks.

Проверки регистрируются явно при старте (имя -> класс), платформы
валидируются при регистрации и повторно при каждом lookup: повреждённая
запись удаляется при первом обращении.
"""

import logging
import threading
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Type

from .errors import CheckNotFound, InvalidPlatforms
from .models import CheckInfo, Element
from .platforms import PlatformValidator

if TYPE_CHECKING:
    from .base_check import BaseCheck

logger = logging.getLogger(__name__)


class CheckDescriptor:
    """
    Загруженная проверка: класс check'а плюс изменяемое состояние
    (счётчик проблем и флаг достижения лимита).
    """

    def __init__(self, check_cls: Type["BaseCheck"]):
        self.check_cls = check_cls
        self.info: CheckInfo = check_cls.info
        self.issue_count = 0
        self.issue_limit_reached = False
        self.audited_keys: Set[str] = set()
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def platforms(self) -> FrozenSet[str]:
        return self.info.platforms

    @property
    def preferred(self) -> FrozenSet[str]:
        return self.info.preferred

    @property
    def elements(self) -> FrozenSet[Element]:
        return self.info.elements

    @property
    def max_issues(self) -> Optional[int]:
        return self.info.max_issues

    def has_platforms(self) -> bool:
        return bool(self.info.platforms)

    def record_issues(self, count: int = 1) -> None:
        """Увеличить счётчик проблем и проверить лимит."""
        with self._lock:
            self.issue_count += count
            if self.max_issues is not None and self.issue_count >= self.max_issues:
                if not self.issue_limit_reached:
                    logger.info(f"{self.name}: issue limit of {self.max_issues} reached")
                self.issue_limit_reached = True

    def mark_audited(self, key: str) -> bool:
        """Запомнить ключ; False если он уже был отмечен."""
        with self._lock:
            if key in self.audited_keys:
                return False
            self.audited_keys.add(key)
            return True

    def __repr__(self) -> str:
        return f"<CheckDescriptor {self.name}>"


class CheckRegistry:
    """
    Коллекция загруженных проверок, ключ - имя.

    Порядок перечисления совпадает с порядком регистрации.

    Использование:
        registry = CheckRegistry()
        registry.register(EmailDisclosure)
        descriptor = registry.lookup("email_disclosure")
    """

    def __init__(self, validator: Optional[PlatformValidator] = None):
        self.validator = validator or PlatformValidator()
        self._checks: Dict[str, CheckDescriptor] = {}

    def register(self, check_cls: Type["BaseCheck"]) -> CheckDescriptor:
        """
        Зарегистрировать класс проверки.

        Raises:
            InvalidPlatforms: если проверка объявляет неизвестные платформы
        """
        descriptor = CheckDescriptor(check_cls)
        self._validate(descriptor)
        return self._insert(descriptor)

    def register_all(self, check_classes: Iterable[Type["BaseCheck"]]) -> List[CheckDescriptor]:
        """
        Зарегистрировать несколько проверок.

        Все проверки валидируются до регистрации: при InvalidPlatforms
        реестр не меняется.
        """
        descriptors = [CheckDescriptor(check_cls) for check_cls in check_classes]
        for descriptor in descriptors:
            self._validate(descriptor)
        return [self._insert(descriptor) for descriptor in descriptors]

    def lookup(self, name: str) -> CheckDescriptor:
        """
        Получить проверку по имени с валидацией платформ.

        Если платформы не проходят валидацию, проверка удаляется
        из реестра и выбрасывается InvalidPlatforms.

        Raises:
            CheckNotFound: проверка не загружена
            InvalidPlatforms: проверка объявляет неизвестные платформы
        """
        try:
            descriptor = self._checks[name]
        except KeyError:
            raise CheckNotFound(f"Check {name} is not loaded") from None

        try:
            self._validate(descriptor)
        except InvalidPlatforms:
            self.evict(name)
            raise

        return descriptor

    def evict(self, name: str) -> Optional[CheckDescriptor]:
        """Удалить проверку из реестра (если есть)."""
        descriptor = self._checks.pop(name, None)
        if descriptor is not None:
            logger.warning(f"Evicted check {name}")
        return descriptor

    def clear(self) -> None:
        """Выгрузить все проверки."""
        self._checks.clear()

    def with_platforms(self) -> Dict[str, CheckDescriptor]:
        """Проверки, нацеленные на конкретные платформы."""
        return {name: d for name, d in self._checks.items() if d.has_platforms()}

    def without_platforms(self) -> Dict[str, CheckDescriptor]:
        """Проверки без ограничений по платформам."""
        return {name: d for name, d in self._checks.items() if not d.has_platforms()}

    def items(self):
        return self._checks.items()

    def names(self) -> List[str]:
        return list(self._checks)

    def values(self) -> List[CheckDescriptor]:
        return list(self._checks.values())

    def _insert(self, descriptor: CheckDescriptor) -> CheckDescriptor:
        if descriptor.name in self._checks:
            logger.warning(f"Check {descriptor.name} is already registered, replacing")

        self._checks[descriptor.name] = descriptor
        logger.debug(f"Registered check {descriptor.name}")
        return descriptor

    def _validate(self, descriptor: CheckDescriptor) -> None:
        if not self.validator.valid(descriptor.platforms):
            raise InvalidPlatforms(
                f"Check {descriptor.name} contains invalid platforms: "
                f"{', '.join(sorted(descriptor.platforms))}"
            )

    def __contains__(self, name: object) -> bool:
        return name in self._checks

    def __iter__(self) -> Iterator[str]:
        return iter(self._checks)

    def __len__(self) -> int:
        return len(self._checks)
