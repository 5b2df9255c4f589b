"""
Read models derived from the ledger (balances, leaderboard, totals).
"""
