"""Exceptions, logging and external command helpers."""
