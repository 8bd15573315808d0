from loguru import logger

from lazycombo.logger import get_logger, setup_logger


def test_setup_logger_writes_to_file(tmp_path):
    log_file = tmp_path / "combo.log"
    setup_logger(log_file=str(log_file), log_level="DEBUG")
    try:
        get_logger("test").debug("lookup issued")
    finally:
        logger.remove()

    assert "lookup issued" in log_file.read_text()


def test_level_filters_records(tmp_path):
    log_file = tmp_path / "combo.log"
    setup_logger(log_file=str(log_file), log_level="WARNING")
    try:
        log = get_logger("test")
        log.info("hidden")
        log.warning("shown")
    finally:
        logger.remove()

    content = log_file.read_text()
    assert "shown" in content
    assert "hidden" not in content


def test_get_logger_binds_name():
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    try:
        get_logger("items_view").debug("moved")
        get_logger().debug("default")
    finally:
        logger.remove(sink_id)

    assert [record["extra"]["name"] for record in records] == ["items_view", "lazycombo"]
