import json
import logging

import pytest

from ptgrading.utilities.monitoring import MonitoringFactory, MonitoringService
from ptgrading.utilities.monitoring.logging import setup_logger
from ptgrading.utilities.monitoring.metrics import JSONFileExporter, MetricsCollector


@pytest.fixture
def json_logger(tmp_path):
    log_file = tmp_path / "logs" / "grading.log"
    logger = setup_logger("ptgrading.test.json", str(log_file))
    yield logger, log_file
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_setup_logger_writes_json(json_logger):
    logger, log_file = json_logger
    logger.info("rep completed", extra={"rep_count": 3})
    for handler in logger.handlers:
        handler.flush()

    record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
    assert record["message"] == "rep completed"
    assert record["level"] == "INFO"
    assert record["logger"] == "ptgrading.test.json"
    assert record["rep_count"] == 3


def test_setup_logger_does_not_duplicate_handlers(json_logger, tmp_path):
    logger, _ = json_logger
    again = setup_logger("ptgrading.test.json", str(tmp_path / "logs" / "other.log"))
    assert again is logger
    assert len(logger.handlers) == 2


def test_console_handler_level(json_logger):
    logger, _ = json_logger
    console = [h for h in logger.handlers if type(h) is logging.StreamHandler]
    assert console and console[0].level == logging.WARNING


def test_metrics_collector():
    collector = MetricsCollector()
    collector.record("session.reps", 12, {"exercise": "pushup"})
    collector.record("session.reps", 15, {"exercise": "pushup"})

    assert [m.value for m in collector.get_metrics("session.reps")["session.reps"]] == [12.0, 15.0]
    assert collector.latest("session.reps").value == 15.0
    assert collector.latest("session.unknown") is None

    collector.clear_metrics("session.reps")
    assert collector.get_metrics() == {}


def test_json_file_exporter(tmp_path):
    collector = MetricsCollector()
    collector.record("session.form_score", 95, {"exercise": "situp"})

    output_file = JSONFileExporter(str(tmp_path / "metrics")).export(collector.get_metrics())

    with open(output_file, encoding="utf-8") as f:
        data = json.load(f)
    assert data["session.form_score"][0]["value"] == 95.0
    assert data["session.form_score"][0]["labels"] == {"exercise": "situp"}


def test_monitoring_service_export(tmp_path):
    service = MonitoringService(
        "ptgrading-test",
        log_dir=str(tmp_path / "logs"),
        metrics_dir=str(tmp_path / "metrics"),
    )
    assert service.export_metrics() is None

    service.record_metric("session.reps", 20)
    output_file = service.export_metrics()

    assert output_file is not None
    assert service.metrics_collector.get_metrics() == {}


def test_monitoring_service_caches_loggers(tmp_path):
    service = MonitoringService("ptgrading-cache", log_dir=str(tmp_path / "logs"))
    logger = service.get_logger("service.test")
    assert logger is service.get_logger("service.test")
    assert logger.name == "ptgrading-cache.service.test"
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_monitoring_factory_singleton():
    assert MonitoringFactory.get_monitoring_service() is MonitoringFactory.get_monitoring_service()
