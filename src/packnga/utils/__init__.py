"""Shared utilities for packnga."""
