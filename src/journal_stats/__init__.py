"""Trading journal performance statistics.

Pure transforms from a list of journal trades to the figures a trading
dashboard shows: win rates, profit, drawdown, streaks, monthly and
category breakdowns, and headline ratios.
"""

__version__ = "0.1.0"
