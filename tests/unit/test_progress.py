# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging

from httpmodule.http.progress import CountingProgress, LoggingProgress, NullProgress


def test_counting_progress_tracks_in_flight_requests():
    progress = CountingProgress()
    progress.start()
    progress.start()
    assert progress.active == 2
    assert progress.busy is True
    progress.stop()
    progress.stop()
    progress.stop()
    assert progress.active == 0
    assert progress.started == 2
    assert progress.stopped == 3


def test_null_progress_is_silent():
    progress = NullProgress()
    assert progress.start() is None
    assert progress.stop() is None


def test_logging_progress_emits_debug_records(caplog):
    caplog.set_level(logging.DEBUG, logger="httpmodule.progress")
    progress = LoggingProgress()
    progress.start()
    progress.stop()
    assert [record.getMessage() for record in caplog.records] == ["request started", "request settled"]
