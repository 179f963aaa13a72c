"""
Shared Infrastructure
=====================

Logging setup and helpers.
"""
