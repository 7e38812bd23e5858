"""
Тесты реестра результатов (дедупликация, hooks, хранение).
"""

import threading

import pytest

from scanaudit.core.results import ResultRegistry

from .conftest import make_issue


@pytest.fixture
def results():
    return ResultRegistry()


@pytest.fixture
def calls(results):
    """Записывать вызовы raw и dedup hooks."""
    recorded = {"raw": [], "dedup": []}
    results.on_register_results_raw(lambda issues: recorded["raw"].append(list(issues)))
    results.on_register_results(lambda issues: recorded["dedup"].append(list(issues)))
    return recorded


class TestRegisterResults:
    """Тесты ResultRegistry.register_results"""

    def test_returns_original_input(self, results):
        issue = make_issue()
        batch = [issue, issue]

        assert results.register_results(batch) is batch
        assert results.results == [issue]

    def test_active_duplicate_across_calls(self, results, calls):
        """Второй идентичный активный issue отбрасывается"""
        results.register_results([make_issue(active=True)])
        results.register_results([make_issue(active=True)])

        assert len(results.results) == 1
        assert len(results.issue_set) == 1
        assert calls["dedup"] == [[make_issue(active=True)]]
        assert len(calls["raw"]) == 2

    def test_active_variations_share_unique_id(self, results):
        """Вариации одного и того же активного issue (другой proof) отбрасываются"""
        results.register_results([make_issue(proof="<script>1</script>")])
        results.register_results([make_issue(proof="<script>2</script>", url="http://test.com/search?q=2")])

        assert len(results.results) == 1

    def test_passive_not_deduplicated_across_calls(self, results, calls):
        issue = make_issue(check="email", active=False, vector="")
        results.register_results([issue])
        results.register_results([make_issue(check="email", active=False, vector="")])

        assert len(calls["dedup"]) == 2
        assert len(results.results) == 2
        assert results.issue_set == set()

    def test_passive_structural_duplicates_collapse_within_batch(self, results, calls):
        issue = make_issue(check="email", active=False, proof="a@b.com")
        other = make_issue(check="email", active=False, proof="c@d.com")

        results.register_results([issue, issue, other])

        assert calls["dedup"] == [[issue, other]]
        assert calls["raw"] == [[issue, issue, other]]

    def test_store_disabled(self, results, calls):
        results.disable_store()
        assert results.is_storing() is False

        results.register_results([make_issue(check="sqli")])

        assert results.results == []
        assert len(calls["raw"]) == 1
        assert len(calls["dedup"]) == 1
        assert results.issue_set == {make_issue(check="sqli").unique_id}

    def test_enable_store_is_not_retroactive(self, results):
        results.disable_store()
        results.register_results([make_issue(check="a")])
        results.enable_store()
        results.register_results([make_issue(check="b")])

        assert [i.check for i in results.results] == ["b"]

    def test_empty_batch_only_raw_hooks(self, results, calls):
        batch = []
        assert results.register_results(batch) is batch

        assert calls["raw"] == [[]]
        assert calls["dedup"] == []

    def test_fully_collapsed_batch_only_raw_hooks(self, results, calls):
        results.register_results([make_issue()])
        batch = [make_issue(), make_issue()]

        assert results.register_results(batch) is batch
        assert len(calls["raw"]) == 2
        assert len(calls["dedup"]) == 1

    def test_ids_recorded_before_dedup_hooks(self, results):
        seen = []
        results.on_register_results(lambda issues: seen.append(set(results._issue_set)))

        issue = make_issue()
        results.register_results([issue])

        assert seen == [{issue.unique_id}]

    def test_hooks_called_in_registration_order(self, results):
        order = []
        results.on_register_results(lambda issues: order.append("first"))
        results.on_register_results(lambda issues: order.append("second"))

        results.register_results([make_issue()])

        assert order == ["first", "second"]

    def test_hook_failure_propagates_to_caller(self, results):
        def broken(issues):
            raise RuntimeError("hook failed")

        results.on_register_results(broken)

        with pytest.raises(RuntimeError):
            results.register_results([make_issue()])

        assert results._lock.locked() is False
        assert results.issue_set == {make_issue().unique_id}


class TestReset:

    def test_reset_clears_state(self, results, calls):
        results.disable_store()
        results.register_results([make_issue()])
        results.enable_store()
        results.register_results([make_issue(check="b")])

        results.reset()

        assert results.results == []
        assert results.issue_set == set()
        assert results.is_storing() is True

        results.register_results([make_issue()])
        assert len(results.results) == 1
        # Hooks удалены
        assert len(calls["raw"]) == 2

    def test_issues_alias(self, results):
        results.register_results([make_issue()])
        assert results.issues == results.results
        assert len(results) == 1


class TestConcurrency:

    def test_concurrent_active_submissions_store_once(self, results):
        """Много потоков с одним и тем же активным issue: сохраняется один"""
        dedup_calls = []
        results.on_register_results(lambda issues: dedup_calls.append(len(issues)))

        barrier = threading.Barrier(8)

        def submit():
            barrier.wait()
            for _ in range(50):
                results.register_results([make_issue()])

        threads = [threading.Thread(target=submit) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results.results) == 1
        assert dedup_calls == [1]

    def test_concurrent_passive_submissions_all_stored(self, results):
        def submit(i):
            for j in range(25):
                results.register_results([make_issue(check="email", active=False, proof=f"{i}-{j}")])

        threads = [threading.Thread(target=submit, args=(i,)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results.results) == 100
