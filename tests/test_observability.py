"""Tests for notifycenter.observability -- logger setup and metrics."""

import logging
import threading

from notifycenter import Registry, RegistrySettings
from notifycenter.observability import Metrics, get_logger
from notifycenter.registry import LOGGER_NAME


class TestGetLogger:
    def test_handler_attached_once(self):
        first = get_logger("notifycenter.test.handlers")
        second = get_logger("notifycenter.test.handlers", logging.DEBUG)
        assert first is second
        assert len(second.handlers) == 1
        assert second.level == logging.DEBUG

    def test_level_kept_when_not_given(self):
        logger = get_logger("notifycenter.test.level", logging.ERROR)
        assert get_logger("notifycenter.test.level").level == logging.ERROR
        assert logger.level == logging.ERROR

    def test_registries_do_not_reset_shared_level(self):
        logger = get_logger(LOGGER_NAME)
        previous = logger.level
        logger.setLevel(logging.ERROR)
        try:
            Registry(RegistrySettings(log_level="DEBUG"))
            Registry()
            assert logger.level == logging.ERROR
        finally:
            logger.setLevel(previous)


class TestMetrics:
    def test_counters_and_gauges(self):
        metrics = Metrics()
        metrics.increment("deliveries")
        metrics.increment("deliveries", 2)
        metrics.set_gauge("categories", 4)

        assert metrics.get_counter("deliveries") == 3
        assert metrics.get_counter("missing") == 0
        assert metrics.snapshot() == {
            "counters": {"deliveries": 3},
            "gauges": {"categories": 4},
        }

    def test_concurrent_increments(self):
        metrics = Metrics()

        def work():
            for _ in range(1000):
                metrics.increment("n")

        threads = [threading.Thread(target=work) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert metrics.get_counter("n") == 4000
