from .booking_lifecycle import can_cancel as can_cancel
from .booking_lifecycle import can_check_in as can_check_in
from .booking_lifecycle import can_modify as can_modify
from .booking_lifecycle import transition as transition
from .refund_calculator import calculate_refund as calculate_refund
from .status_transitions import TERMINAL_STATUSES as TERMINAL_STATUSES
from .status_transitions import allowed_transitions as allowed_transitions
from .status_transitions import can_transition as can_transition
from .status_transitions import is_terminal as is_terminal
