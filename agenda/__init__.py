"""Agenda: a date-partitioned personal task tracker."""

__version__ = "0.1.0"
