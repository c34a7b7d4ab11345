"""Observability: logging and metrics for the notification registry."""

from notifycenter.observability.logger import get_logger
from notifycenter.observability.metrics import Metrics

__all__ = ["get_logger", "Metrics"]
