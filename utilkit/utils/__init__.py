"""
Generic utility functions shared across modules.

Includes time/clock and scheduler abstractions, mathematical helpers, date
arithmetic, token decoding, logging setup, and error classes.
"""
