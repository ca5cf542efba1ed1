"""Command groups for the plaidbridge CLI."""
