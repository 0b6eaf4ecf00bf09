"""Pinpoint command-line interface."""
