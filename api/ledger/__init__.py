"""
Append-only purchase ledger: record model, store contract and backends.
"""
