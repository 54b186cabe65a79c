"""lottohist — history API for lottery number computations.

Users register and log in, then save and read back the parameters
and rendered summaries of their lottery-number computation runs.
"""

__version__ = "0.1.0"
