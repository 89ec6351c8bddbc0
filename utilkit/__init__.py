"""
utilkit – generic helper routines shared across application code.

Call-rate control (debounce/throttle), recursive structural data operations
(chunk, flatten, deep equality, deep clone, field selection), string
normalization, numeric sequences, and date arithmetic.
"""

from loguru import logger

# Library records stay silent until an application calls setup_logging()
logger.disable("utilkit")
