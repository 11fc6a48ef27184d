"""Wallet withdrawal requests and their admin processing."""
