#!filepath: tests/base_test/test_logger.py
from liftform import init_logging, logs
from liftform.config.log_config import LogConfig


def test_run_sink_mirrors_records(tmp_path):
    run_dir = tmp_path / "runs" / "r1"

    sink_id = logs.run_sink(run_dir)
    logs.info("[Test] inside run")
    logs.close_sink(sink_id)
    logs.info("[Test] after run")

    text = (run_dir / "run.log").read_text(encoding="utf-8")
    assert "[Test] inside run" in text
    assert "[Test] after run" not in text


def test_init_logging_creates_log_dir(tmp_path):
    cfg = LogConfig(dir=str(tmp_path / "logs"), level="DEBUG", console=False)

    returned = init_logging(cfg)

    assert returned is logs
    assert logs.level == "DEBUG"
    assert (tmp_path / "logs").is_dir()
