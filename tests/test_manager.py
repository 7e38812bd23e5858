"""
Тесты CheckManager: запуск, изоляция ошибок, сессия.
"""

import pytest

from scanaudit.core.errors import InvalidPlatforms
from scanaudit.core.models import Element, Page
from scanaudit.core.platforms import PlatformValidator
from scanaudit.manager import CheckManager

from .conftest import make_check


def recording_check(name, log, **kwargs):
    """Проверка, записывающая шаги жизненного цикла."""
    cls = make_check(name, run=lambda self: log.append(f"{name}.run"), **kwargs)
    cls.prepare = lambda self: log.append(f"{name}.prepare")
    cls.clean_up = lambda self: log.append(f"{name}.clean_up")
    return cls


class TestRunOne:

    def test_lifecycle_order(self, manager, empty_page):
        log = []
        manager.load([recording_check("a", log)])

        assert manager.run_one(manager["a"], empty_page) is True
        assert log == ["a.prepare", "a.run", "a.clean_up"]

    def test_skipped_when_not_applicable(self, manager, empty_page):
        log = []
        manager.load([recording_check("links", log, elements={Element.LINK})])

        assert manager.run_one(manager["links"], empty_page) is False
        assert log == []

    def test_check_receives_page_and_manager(self, manager, empty_page):
        seen = {}

        def run(check):
            seen["page"] = check.page
            seen["manager"] = check.manager
            seen["config"] = check.config

        manager.load([make_check("a", run=run)])
        manager.run_one(manager["a"], empty_page)

        assert seen == {"page": empty_page, "manager": manager, "config": manager.config}


class TestRun:

    def test_empty_submission_reaches_raw_hooks(self, manager, empty_page):
        """Пустой список от проверки всё равно передаётся raw hooks"""
        raw, dedup = [], []
        manager.on_register_results_raw(lambda issues: raw.append(list(issues)))
        manager.on_register_results(lambda issues: dedup.append(list(issues)))
        manager.load([make_check("quiet", max_issues=1, run=lambda self: self.register_results([]))])

        manager.run(empty_page)

        assert raw == [[]]
        assert dedup == []
        assert manager["quiet"].issue_count == 0
        assert manager["quiet"].issue_limit_reached is False

    def test_runs_in_schedule_order(self, manager, empty_page):
        log = []
        manager.load([
            make_check("second", preferred={"first"}, run=lambda self: log.append("second")),
            make_check("first", run=lambda self: log.append("first")),
        ])

        report = manager.run(empty_page)

        assert log == ["first", "second"]
        assert report.executed == ["first", "second"]
        assert report.ok

    def test_failing_check_does_not_stop_others(self, manager, empty_page):
        log = []

        def boom(self):
            raise RuntimeError("boom")

        manager.load([
            make_check("before", run=lambda self: log.append("before")),
            make_check("broken", run=boom),
            make_check("after", run=lambda self: log.append("after")),
        ])

        report = manager.run(empty_page)

        assert log == ["before", "after"]
        assert report.failed == ["broken"]
        assert isinstance(report.failures[0].error, RuntimeError)
        assert report.failures[0].to_dict()["exception_message"] == "boom"
        assert report.ok is False

    def test_failure_in_prepare_is_isolated(self, manager, empty_page):
        cls = make_check("bad_prepare")

        def prepare(self):
            raise ValueError("no")

        cls.prepare = prepare
        manager.load([cls, make_check("good")])

        report = manager.run(empty_page)

        assert report.failed == ["bad_prepare"]
        assert report.executed == ["good"]

    def test_skipped_reported(self, manager, empty_page):
        manager.load([make_check("cookies", elements={Element.COOKIE}), make_check("any")])

        report = manager.run(empty_page)

        assert report.skipped == ["cookies"]
        assert report.executed == ["any"]

    def test_issue_limit_stops_check(self, manager):
        def run(check):
            check.log_issue(name="Found", vector=check.page.url)

        manager.load([make_check("limited", max_issues=2, active=True, run=run)])

        reports = [manager.run(Page(url=f"http://test.com/{i}")) for i in range(4)]

        assert [r.executed for r in reports] == [["limited"], ["limited"], [], []]
        assert [r.skipped for r in reports][2:] == [["limited"], ["limited"]]
        assert len(manager.results.results) == 2


class TestRunPages:

    def test_parallel_and_sequential_agree(self, config):
        def run(check):
            check.log_issue(name="Seen", proof=check.page.url)

        pages = [Page(url=f"http://test.com/{i}") for i in range(10)]

        sequential = CheckManager(config)
        sequential.load([make_check("passive", run=run)])
        seq_reports = sequential.run_pages(pages, parallel=False)

        parallel = CheckManager(config)
        parallel.load([make_check("passive", run=run)])
        par_reports = parallel.run_pages(pages, parallel=True)

        assert [r.url for r in par_reports] == [p.url for p in pages]
        assert [r.url for r in seq_reports] == [p.url for p in pages]
        assert len(parallel.results.results) == len(sequential.results.results) == 10

    def test_no_pages(self, manager):
        assert manager.run_pages([]) == []


class TestSession:

    def test_load_filters_by_config(self, config):
        config.checks = ["b"]
        manager = CheckManager(config)
        manager.load([make_check("a"), make_check("b")])

        assert manager.registry.names() == ["b"]

    def test_load_rejects_invalid_platforms(self, manager):
        with pytest.raises(InvalidPlatforms):
            manager.load([make_check("ok"), make_check("bad", platforms={"cobol"})])

        assert manager.schedule() == []

    def test_lookup_evicts(self, config):
        manager = CheckManager(config)
        manager.load([make_check("php", platforms={"php"})])
        manager.registry.validator = PlatformValidator({"os": ["linux"]})

        with pytest.raises(InvalidPlatforms):
            manager["php"]

        assert manager.schedule() == []

    def test_reset(self, manager, empty_page):
        hook_calls = []
        manager.on_register_results_raw(hook_calls.append)
        manager.load([make_check("a", run=lambda self: self.log_issue(name="x"))])
        manager.run(empty_page)

        manager.reset()

        assert manager.results.results == []
        assert len(manager.registry) == 0
        assert manager.results.is_storing() is True

        manager.register_results([])
        assert len(hook_calls) == 1
