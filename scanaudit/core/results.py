"""
Result registry: deduplicated, thread-safe storage of issues.

Состояние:
- results: сохранённые проблемы (только пока включено хранение)
- issue_set: unique_id активных проблем (только растёт до reset)
- raw hooks: вызываются с исходным списком
- dedup hooks: вызываются с уникальными проблемами

Все изменения и вызовы hooks выполняются под одним lock. Hooks не должны
обращаться к реестру повторно (deadlock) и должны быть быстрыми: пока
hook работает, остальные потоки ждут.
"""

import logging
import threading
from typing import Callable, List, Sequence, Set

from .. import metrics
from .models import Issue

logger = logging.getLogger(__name__)

IssueHook = Callable[[Sequence[Issue]], None]


class ResultRegistry:
    """
    Реестр результатов проверок.

    Использование:
        results = ResultRegistry()
        results.on_register_results(lambda issues: print(len(issues)))
        results.register_results([issue])
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.reset()

    def reset(self) -> None:
        """
        Очистить проблемы, issue_set, hooks и включить хранение.

        Не берёт lock: вызывать только когда нет активных сканирований.
        """
        self._results: List[Issue] = []
        self._issue_set: Set[str] = set()
        self._store = True
        self._hooks: List[IssueHook] = []
        self._raw_hooks: List[IssueHook] = []

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def on_register_results(self, hook: IssueHook) -> IssueHook:
        """Hook для уникальных проблем (после дедупликации)."""
        with self._lock:
            self._hooks.append(hook)
        return hook

    def on_register_results_raw(self, hook: IssueHook) -> IssueHook:
        """Hook для всех проблем (без дедупликации)."""
        with self._lock:
            self._raw_hooks.append(hook)
        return hook

    # ------------------------------------------------------------------
    # Store mode
    # ------------------------------------------------------------------

    def enable_store(self) -> None:
        with self._lock:
            self._store = True

    def disable_store(self) -> None:
        with self._lock:
            self._store = False

    def is_storing(self) -> bool:
        return self._store

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_results(self, results: Sequence[Issue]) -> Sequence[Issue]:
        """
        Дедуплицировать и зарегистрировать проблемы.

        Args:
            results: Проблемы от проверки

        Returns:
            Исходный список (не уникальное подмножество)
        """
        with self._lock:
            metrics.issues_registered.labels(kind="raw").inc(len(results))

            for hook in self._raw_hooks:
                hook(results)

            unique = self._dedup(results)
            if not unique:
                return results

            # Для attack-type проверок запоминаем только один вариант,
            # вариации разрешены только для passive проверок
            for issue in unique:
                if issue.active:
                    self._issue_set.add(issue.unique_id)

            metrics.issues_registered.labels(kind="unique").inc(len(unique))

            for hook in self._hooks:
                hook(unique)

            if not self._store:
                return results

            self._results.extend(unique)
            logger.debug(f"Stored {len(unique)} issues ({len(self._results)} total)")
            return results

    def _dedup(self, issues: Sequence[Issue]) -> List[Issue]:
        unique: List[Issue] = []
        for issue in issues:
            if issue in unique:
                continue
            if issue.active and issue.unique_id in self._issue_set:
                continue
            unique.append(issue)
        return unique

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def results(self) -> List[Issue]:
        """Копия сохранённых проблем."""
        with self._lock:
            return list(self._results)

    issues = results

    @property
    def issue_set(self) -> Set[str]:
        """Копия unique_id уже зарегистрированных активных проблем."""
        with self._lock:
            return set(self._issue_set)

    def __len__(self) -> int:
        return len(self._results)
