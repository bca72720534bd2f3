# tests/test_metrics.py
import json

from keyword_typeahead.utils.metrics_tracker import Metrics


def test_in_memory_by_default():
    m = Metrics()
    m.record("lookup_latency", 0.2)
    m.record("lookup_latency", 0.4)
    m.incr("lookup_ok")
    assert m.count("lookup_latency") == 2
    assert abs(m.avg("lookup_latency") - 0.3) < 1e-9
    assert m.last("lookup_latency") == 0.4
    assert m.count("lookup_ok") == 1
    assert m.avg("missing") == 0.0


def test_timer_records_even_when_block_raises():
    m = Metrics()
    try:
        with m.timer("lookup_latency"):
            raise ValueError("x")
    except ValueError:
        pass
    assert m.count("lookup_latency") == 1


def test_persisted_sums_are_reloaded(tmp_path):
    path = str(tmp_path / "metrics.json")
    m = Metrics(path)
    m.incr("lookup_ok")
    m.incr("lookup_ok")
    again = Metrics(path)
    assert again.count("lookup_ok") == 2


def test_corrupt_file_starts_empty(tmp_path, caplog):
    path = tmp_path / "metrics.json"
    path.write_text("{not json")
    with caplog.at_level("WARNING", logger="keyword_typeahead.utils.metrics_tracker"):
        m = Metrics(str(path))
    assert m.count("lookup_ok") == 0
    assert "ignoring unreadable metrics" in caplog.text

    # written again on the next record
    m.incr("lookup_ok")
    assert json.loads(path.read_text())["lookup_ok"]["count"] == 1


def test_wrong_shape_file_starts_empty(tmp_path):
    path = tmp_path / "metrics.json"
    path.write_text(json.dumps({"lookup_ok": {"total": 3}, "lookup_failed": {"sum": 1, "count": 1}}))
    m = Metrics(str(path))
    assert m.count("lookup_ok") == 0
    assert m.count("lookup_failed") == 0
