import threading

from common.exceptions import NetworkError
from conftest import log_record
from driver_logs.models import DailyLog, LogState
from driver_logs.services import DailyLogEditor
from driver_logs.services.log_editor import LOAD_FAILED, SAVE_FAILED


class TestDailyLogEditor:
    def test_create_then_update(self, log_book, gateway, new_log):
        gateway.reply("POST", "/logs/", (201, log_record(11)))
        gateway.reply("PUT", "/logs/11/", (200, log_record(11, remarks="Scale at mile 40")))
        editor = DailyLogEditor(log_book, new_log)

        assert editor.save()
        assert editor.success == "Log created successfully!"
        assert editor.log.state == LogState.DRAFT

        editor.log.update_field("remarks", "Scale at mile 40")
        assert editor.save()
        assert editor.success == "Log updated successfully!"
        assert editor.log.remarks == "Scale at mile 40"

    def test_failed_update_leaves_loaded_state_intact(self, log_book, gateway, draft_log):
        gateway.reply("PUT", "/logs/7/", (400, {"vehicle_id": ["Unknown vehicle."]}))
        editor = DailyLogEditor(log_book, draft_log)

        assert not editor.save()

        assert editor.error == "Unknown vehicle."
        assert editor.success == ""
        assert editor.log is draft_log
        assert draft_log.id == 7

    def test_network_error_message(self, log_book, gateway, draft_log):
        gateway.reply("PUT", "/logs/7/", NetworkError())
        editor = DailyLogEditor(log_book, draft_log)
        assert not editor.save()
        assert editor.error == "Network error. Please try again."

    def test_server_error_uses_generic_message(self, log_book, gateway, draft_log):
        gateway.reply("PUT", "/logs/7/", (500, "Internal Server Error"))
        editor = DailyLogEditor(log_book, draft_log)
        assert not editor.save()
        assert editor.error == SAVE_FAILED

    def test_load(self, log_book, gateway):
        gateway.reply("GET", "/logs/7/", (200, log_record(7)))
        editor = DailyLogEditor(log_book)
        assert editor.load(7)
        assert editor.log.id == 7
        assert editor.can_submit

    def test_load_failure(self, log_book, gateway):
        gateway.reply("GET", "/logs/8/", (404, {"detail": "Not found."}))
        editor = DailyLogEditor(log_book)
        assert not editor.load(8)
        assert editor.error == LOAD_FAILED
        assert editor.log.state == LogState.NEW

    def test_submit(self, log_book, gateway, draft_log):
        gateway.reply("POST", "/logs/7/submit/", (200, log_record(is_submitted=True)))
        editor = DailyLogEditor(log_book, draft_log)

        assert editor.submit(confirm=True)

        assert editor.success == "Log submitted successfully!"
        assert editor.log.state == LogState.SUBMITTED
        assert not editor.can_submit

    def test_declined_submit_is_silent(self, log_book, gateway, draft_log):
        editor = DailyLogEditor(log_book, draft_log)
        assert not editor.submit(confirm=False)
        assert editor.error == ""
        assert editor.log.state == LogState.DRAFT
        assert gateway.sent == []

    def test_incomplete_submit_reports_coverage(self, log_book, gateway):
        editor = DailyLogEditor(log_book, DailyLog.from_api(log_record(duty_status_entries=[])))
        assert not editor.can_submit
        assert not editor.submit(confirm=True)
        assert editor.error.startswith("Duty status entries cover 0.00 of 24.00 hours")

    def test_result_is_dropped_after_abandon(self, log_book, gateway):
        editor = DailyLogEditor(log_book)
        started = threading.Event()
        release = threading.Event()

        def slow_get(request):
            started.set()
            release.wait(timeout=5)
            return (200, log_record(7))

        gateway.reply("GET", "/logs/7/", slow_get)
        results = []
        worker = threading.Thread(target=lambda: results.append(editor.load(7)))
        worker.start()
        started.wait(timeout=5)
        editor.abandon()
        release.set()
        worker.join(timeout=5)

        assert results == [False]
        assert editor.log.state == LogState.NEW
