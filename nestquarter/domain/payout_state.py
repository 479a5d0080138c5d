"""Host payout states.

States:
- pending: Payout requested, waiting for its scheduled date
- processing: Transfer handed to the payment provider
- completed: Funds sent to the host
- failed: Transfer rejected; may be retried

Payouts are created pending here; later states are written by the transfer
process outside this service.
"""

from enum import Enum


class PayoutStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
