from unittest.mock import MagicMock

from label_translator.models.enums import LogType
from label_translator.services.import_service import TranslationImportService


def test_import_sheet_uses_own_snapshot(fake_service, operations_factory):
    service = TranslationImportService(fake_service, batch_size=5)

    progress = service.import_sheet("Attributes", operations_factory(6))

    assert progress.sheet_name == "Attributes"
    assert progress.total_items == 6
    assert progress.success_count == 6
    assert [len(batch) for batch in fake_service.submissions] == [5, 1]


def test_import_sheets_reports_result_per_sheet(fake_service_factory, operations_factory):
    # Submission 1 is the first and only batch of the second sheet
    metadata = fake_service_factory(faults={1: {0: "Invalid label"}})
    service = TranslationImportService(metadata, batch_size=5)
    results = []
    logs = []

    summary = service.import_sheets(
        {"Entities": operations_factory(3), "Attributes": operations_factory(2)},
        on_log=logs.append,
        on_result=results.append,
    )

    assert [result.sheet_name for result in results] == ["Entities", "Attributes"]
    assert results[0].success is True
    assert results[1].success is False
    assert results[1].message == "1 of 2 labels updated, 1 failed"
    assert summary.results == results
    assert summary.total_items == 5
    assert summary.success_count == 4
    assert summary.failure_count == 1
    assert summary.has_failures
    assert [entry.level for entry in logs] == [LogType.ERROR]


def test_empty_sheet_is_skipped(fake_service):
    service = TranslationImportService(fake_service)
    logs = []

    summary = service.import_sheets({"Charts": []}, on_log=logs.append)

    assert fake_service.submissions == []
    assert summary.sheets["Charts"].total_items == 0
    assert summary.results[0].success is True
    assert logs[0].level == LogType.INFO
    assert logs[0].message == "Sheet Charts: nothing to import"


def test_progress_snapshots_carry_sheet_names(fake_service, operations_factory):
    service = TranslationImportService(fake_service, batch_size=5)
    seen = []

    service.import_sheets(
        {"Views": operations_factory(1), "Forms": operations_factory(1)},
        on_progress=lambda snapshot: seen.append(snapshot.sheet_name),
    )

    assert seen == ["Views", "Views", "Forms", "Forms"]


def test_cancellation_skips_remaining_sheets(fake_service, operations_factory):
    service = TranslationImportService(fake_service, batch_size=5)
    cancel = {"requested": False}

    def on_progress(snapshot):
        # Request cancellation once the first batch completed
        if snapshot.processed_count:
            cancel["requested"] = True

    summary = service.import_sheets(
        {"Entities": operations_factory(10), "Attributes": operations_factory(3)},
        on_progress=on_progress,
        should_cancel=lambda: cancel["requested"],
    )

    assert summary.cancelled is True
    assert list(summary.sheets) == ["Entities"]
    assert summary.sheets["Entities"].total_items == 5
    assert summary.results[0].success is False
    assert summary.results[0].message.startswith("Cancelled: ")
    assert len(fake_service.submissions) == 1


def test_custom_executor_is_used(operations_factory):
    executor = MagicMock()
    service = TranslationImportService(MagicMock(), executor=executor)

    service.import_sheet("Booleans", operations_factory(2))

    executor.run.assert_called_once()
    queue = executor.run.call_args.args[0]
    assert [len(batch) for batch in queue] == [2]
