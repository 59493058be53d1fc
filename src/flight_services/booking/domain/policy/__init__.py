from .cancellation_fee_policy import CancellationFeePolicy as CancellationFeePolicy
from .cancellation_fee_policy import (
    FixedCancellationFeePolicy as FixedCancellationFeePolicy,
)
