"""
Redemption services package.

- eligibility: lifetime redemption ceiling
- request_handler: redemption requests (validation, debit, history)
- lifecycle_handler: processing -> deposited / failed transitions
- query_service: redeem history reads
"""

from referral_wallet.services.redemption.eligibility import (
    RedemptionEligibilityCalculator,
)
from referral_wallet.services.redemption.lifecycle_handler import (
    RedemptionLifecycleHandler,
)
from referral_wallet.services.redemption.query_service import (
    RedemptionQueryService,
)
from referral_wallet.services.redemption.request_handler import (
    RedemptionRequestHandler,
)


__all__ = [
    "RedemptionEligibilityCalculator",
    "RedemptionLifecycleHandler",
    "RedemptionQueryService",
    "RedemptionRequestHandler",
]
