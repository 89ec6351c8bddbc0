"""
Configuration loading and validation for library defaults.

Provides a strongly typed settings object for default durations, traversal
depth limits, and log level, with upfront validation.
"""
