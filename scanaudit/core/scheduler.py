"""
Планирование порядка запуска проверок.

Порядок строится по preferred-наборам: проверка предпочитает запускаться
после любой из перечисленных проверок. Это рекомендация, а не строгая
зависимость: проверка становится доступной, как только запланирована
хотя бы одна из её preferred-проверок. Число проходов ограничено числом
проверок с предпочтениями, недостижимые проверки добавляются в конец.
"""

import logging
from typing import Dict, FrozenSet, List, Mapping

from .registry import CheckDescriptor

logger = logging.getLogger(__name__)


def schedule(checks: Mapping[str, CheckDescriptor]) -> List[CheckDescriptor]:
    """
    Вернуть проверки в порядке запуска.

    Args:
        checks: Загруженные проверки (имя -> descriptor) в порядке регистрации

    Returns:
        Список descriptor'ов, каждая проверка ровно один раз
    """
    preferred_over: Dict[str, FrozenSet[str]] = {}
    unconstrained: Dict[str, CheckDescriptor] = {}

    for name, check in checks.items():
        if check.preferred:
            preferred_over[name] = check.preferred
        else:
            unconstrained[name] = check

    if not preferred_over or not unconstrained:
        return list(checks.values())

    # dict как упорядоченное множество: первая позиция побеждает
    ordered: Dict[str, CheckDescriptor] = {}

    for _ in range(len(preferred_over)):
        update: Dict[str, CheckDescriptor] = {}

        for name, check in unconstrained.items():
            ordered.setdefault(name, check)

            for other, preferred in preferred_over.items():
                if name in preferred:
                    update[other] = checks[other]
                    ordered.setdefault(other, checks[other])

        unconstrained.update(update)

    unresolved = [name for name in preferred_over if name not in ordered]
    if unresolved:
        logger.debug(f"Unresolved preferences, appending: {', '.join(unresolved)}")

    for name in unresolved:
        ordered[name] = checks[name]

    return list(ordered.values())
