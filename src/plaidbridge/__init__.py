"""plaidbridge: small tools around the Plaid API.

This package provides:
- A one-shot export of Plaid transactions to a CSV file
- A passthrough HTTP server for the Plaid Link token flow and item management
- A Typer command line that drives both
"""

__version__ = "0.1.0"
