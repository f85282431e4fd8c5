from loguru import logger

from log_config.logger import log_throttled, reset_throttle


def test_throttle_is_per_key() -> None:
    reset_throttle()
    messages = []
    sink_id = logger.add(messages.append, level="INFO", format="{message}")
    try:
        assert log_throttled("a", 60.0, "first a", level="INFO")
        assert not log_throttled("a", 60.0, "second a", level="INFO")
        assert log_throttled("b", 60.0, "first b", level="INFO")
        assert log_throttled("c", 0.0, "c", level="INFO")
        assert log_throttled("c", 0.0, "c", level="INFO")
    finally:
        logger.remove(sink_id)
        reset_throttle()

    assert [m.strip() for m in messages] == ["first a", "first b", "c", "c"]
