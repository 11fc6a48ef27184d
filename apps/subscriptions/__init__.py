"""Subscription plans, upgrade approvals and usage quotas."""
