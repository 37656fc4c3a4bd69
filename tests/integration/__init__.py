"""Integration tests for edi-exchange.

Integration tests drive the full fetch/upload workflow over real transports:
- A local directory tree standing in for the trading partner's server
- A live SFTP server (only when EDI_HOST is configured)

Run with: poetry run pytest tests/integration/ -v -s
Skip in CI: pytest -m "not integration"
"""
