"""
Referrals App - Commission Ledger

Two-tier referral commissions credited when a subscription upgrade is
approved, plus the per-account wallet they accumulate in.

Architecture:
- commission: pure commission arithmetic and the plan price table
- services.referral_graph: depth-bounded referrer/upline traversal
- services.ledger: atomic credit/debit of account ledger fields
- services.dashboard: referral and withdrawal history read model
- Models: CommissionCredit (audit trail of every credit)
"""
