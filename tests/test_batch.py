"""Tests for BatchConvertUseCase."""

from __future__ import annotations

from docconvert.application.use_cases.batch_convert import BatchItem, BatchStatus
from docconvert.domain.errors import ErrorKind


def _items():
    return [
        BatchItem(name="ok.json", content='[{"a": 1}]', source_format="json"),
        BatchItem(name="broken.json", content="{oops", source_format="json"),
        BatchItem(name="people.csv", content="name\nAda\n", source_format="csv"),
    ]


class TestBatchConvert:
    def test_failures_do_not_abort(self, container):
        report = container.batch_convert().execute(_items(), "json")

        assert len(report) == 3
        assert [outcome.status for outcome in report] == [
            BatchStatus.COMPLETED,
            BatchStatus.FAILED,
            BatchStatus.COMPLETED,
        ]
        assert report.success_count == 2
        assert report.failure_count == 1

    def test_outcomes_carry_results_and_errors(self, container):
        ok, broken, people = container.batch_convert().execute(_items(), "json").outcomes

        assert ok.ok and ok.error is None
        assert ok.result.text() == '[\n  {\n    "a": 1\n  }\n]'
        assert not broken.ok and broken.result is None
        assert broken.error.kind is ErrorKind.PARSE
        assert people.item.name == "people.csv"

    def test_progress_callback(self, container):
        calls = []
        container.batch_convert().execute(
            _items(), "json", on_progress=lambda done, total, outcome: calls.append((done, total, outcome.item.name))
        )
        assert calls == [(1, 3, "ok.json"), (2, 3, "broken.json"), (3, 3, "people.csv")]

    def test_options_apply_to_every_item(self, container):
        report = container.batch_convert().execute(_items(), "json", {"preserveFormatting": False})
        assert report.outcomes[0].result.text() == '[{"a":1}]'
        assert report.outcomes[2].result.text() == '[{"name":"Ada"}]'

    def test_unsupported_target_fails_each_item(self, container):
        report = container.batch_convert().execute(_items()[:1], "docx")
        assert report.failure_count == 1
        assert report.outcomes[0].error.kind is ErrorKind.UNSUPPORTED

    def test_empty_batch(self, container):
        report = container.batch_convert().execute([], "json")
        assert len(report) == 0
        assert report.success_count == 0
