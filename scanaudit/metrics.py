"""
Prometheus метрики для мониторинга.
"""

from prometheus_client import Counter, Histogram

# Проверки
checks_run = Counter(
    "scanaudit_checks_run_total",
    "Checks executed against a page",
    ["check"]
)

checks_skipped = Counter(
    "scanaudit_checks_skipped_total",
    "Checks skipped because they did not apply to a page",
    ["check"]
)

checks_failed = Counter(
    "scanaudit_checks_failed_total",
    "Checks that raised during prepare/run/clean_up",
    ["check"]
)

check_duration = Histogram(
    "scanaudit_check_duration_seconds",
    "Check lifecycle duration",
    ["check"],
    buckets=[0.001, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0]
)

# Проблемы
issues_registered = Counter(
    "scanaudit_issues_registered_total",
    "Issues submitted to the result registry",
    ["kind"]  # raw | unique
)
