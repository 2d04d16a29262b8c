import pytest

from exchanges.binance.errors import ServerResponseFormatError, TransportError
from exchanges.binance.time_sync import ServerTimeSynchronizer


def test_offset_starts_unsynchronized(mocker):
    fetch = mocker.Mock(return_value=1000)
    sync = ServerTimeSynchronizer(fetch, clock=lambda: 400.0)
    assert sync.offset == 0
    assert not sync.synchronized
    fetch.assert_not_called()


def test_sync_stores_server_minus_local(mocker):
    sync = ServerTimeSynchronizer(mocker.Mock(return_value=1000), clock=lambda: 400.0)
    assert sync.sync() == 600
    assert sync.offset == 600
    assert sync.synchronized


def test_negative_offset(mocker):
    sync = ServerTimeSynchronizer(mocker.Mock(return_value=1000), clock=lambda: 1500.0)
    assert sync.current_offset() == -500


def test_current_offset_syncs_once(mocker):
    fetch = mocker.Mock(return_value=1000)
    sync = ServerTimeSynchronizer(fetch, clock=lambda: 400.0)
    assert sync.current_offset() == 600
    assert sync.current_offset() == 600
    assert fetch.call_count == 1


def test_zero_skew_is_refetched_every_time(mocker):
    fetch = mocker.Mock(return_value=1000)
    sync = ServerTimeSynchronizer(fetch, clock=lambda: 1000.0)
    sync.current_offset()
    sync.current_offset()
    assert fetch.call_count == 2


def test_reset_forces_next_read_to_sync(mocker):
    fetch = mocker.Mock(return_value=1000)
    sync = ServerTimeSynchronizer(fetch, clock=lambda: 400.0)
    sync.current_offset()
    sync.reset()
    assert sync.offset == 0
    sync.current_offset()
    assert fetch.call_count == 2


@pytest.mark.parametrize("error", [TransportError("connection refused"), ServerResponseFormatError("bad")])
def test_sync_failures_propagate_and_keep_offset(mocker, error):
    sync = ServerTimeSynchronizer(mocker.Mock(side_effect=error), clock=lambda: 400.0)
    with pytest.raises(type(error)):
        sync.current_offset()
    assert sync.offset == 0


def test_sync_logs_offset(mocker, caplog):
    caplog.set_level("INFO", logger="exchanges.binance.time_sync")
    ServerTimeSynchronizer(mocker.Mock(return_value=1000), clock=lambda: 400.0).sync()
    assert "offset set to 600 ms" in caplog.text
