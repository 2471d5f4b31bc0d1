"""
tests/test_logger.py

Unit test for logger setup.
"""
import logging

from pycapsim.logs.logger import get_logger


def test_logger_creates_log_file(tmp_path):
    logger = get_logger(run_name="testrun", customer="Village", log_dir=str(tmp_path))
    logger.info("Test log entry")
    log_files = list(tmp_path.glob("*.log"))
    assert len(log_files) == 1
    assert log_files[0].name == "testrun_Village.log"
    with open(log_files[0], "r") as f:
        content = f.read()
    assert "Test log entry" in content


def test_engine_records_reach_file(tmp_path):
    get_logger(run_name="engine", customer="Village", log_dir=str(tmp_path), level="debug")
    logging.getLogger("pycapsim.engine.engine").info("adjusted capacity = 1.0")
    content = (tmp_path / "engine_Village.log").read_text()
    assert "pycapsim.engine.engine" in content


def test_no_duplicate_handlers(tmp_path):
    a = get_logger(run_name="dup", customer="Village", log_dir=str(tmp_path))
    count = len(a.handlers)
    b = get_logger(run_name="dup", customer="Village", log_dir=str(tmp_path))
    assert a is b
    assert len(b.handlers) == count
