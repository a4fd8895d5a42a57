# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for lljob.

This module collects the foundational utilities used across the lljob
codebase: configuration, error handling, structured logging, time-string
conversions and CLI help formatting.
"""
