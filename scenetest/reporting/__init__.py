"""Reporting module - outcome aggregation and JSON reports."""

from .json_reporter import JsonReporter
from .reporter import Outcome, TestReporter

__all__ = ["JsonReporter", "Outcome", "TestReporter"]
