"""
Error taxonomy shared by the ledger and the aggregation layer.

`api/main.py` maps these onto HTTP responses:
- ValidationError -> 400, message returned to the client
- StorageError    -> 500, generic message, detail stays in the server log
"""

from __future__ import annotations


class LedgerError(RuntimeError):
    pass


# Malformed or missing purchase input. The client must fix it and resubmit.
class ValidationError(LedgerError):
    pass


# Persistence unreachable or a query failed.
class StorageError(LedgerError):
    pass
