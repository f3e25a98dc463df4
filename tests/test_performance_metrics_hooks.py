def test_metrics_timer_records_elapsed_ms():
    from app.core.metrics import measure_ms

    with measure_ms("unit-test-metric", route="/leaderboard") as snapshot:
        pass

    assert snapshot.elapsed_ms >= 0
    assert snapshot.tags == {"route": "/leaderboard"}


def test_api_metric_logged_per_request(client, monkeypatch):
    calls = []

    def fake_log_api_metric(*, path, method, status_code, snapshot):
        calls.append((path, method, status_code))

    monkeypatch.setattr("app.core.metrics.log_api_metric", fake_log_api_metric)

    client.get("/leaderboard")
    client.post("/leaderboard", json={"name": "", "score": 1})

    assert ("/leaderboard", "GET", 200) in calls
    assert ("/leaderboard", "POST", 400) in calls


def test_api_metric_log_disabled_by_default(monkeypatch):
    from app.core import metrics

    monkeypatch.delenv("ENABLE_API_METRIC_LOG", raising=False)
    lines = []
    monkeypatch.setattr(metrics.logger, "info", lambda *args, **kwargs: lines.append(args))

    with metrics.measure_ms("x") as snapshot:
        pass
    metrics.log_api_metric(path="/", method="GET", status_code=200, snapshot=snapshot)
    assert lines == []

    monkeypatch.setenv("ENABLE_API_METRIC_LOG", "1")
    metrics.log_api_metric(path="/", method="GET", status_code=200, snapshot=snapshot)
    assert len(lines) == 1


def test_logger_writes_rotating_file_in_log_dir():
    import os
    from logging.handlers import TimedRotatingFileHandler

    from app.logger import LOG_DIR, LOG_FILE, logger

    file_handlers = [h for h in logger.handlers if isinstance(h, TimedRotatingFileHandler)]

    assert LOG_FILE.parent == LOG_DIR
    assert len(file_handlers) == 1
    assert file_handlers[0].baseFilename == os.path.abspath(LOG_FILE)
    assert logger.propagate is False
