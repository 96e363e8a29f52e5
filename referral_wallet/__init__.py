"""
Referral wallet and redemption engine.

Turns referral events into wallet credit, enforces redemption limits
against lifetime earnings, and keeps the redeem history and payout
audit trail.
"""

__version__ = "1.0.0"
