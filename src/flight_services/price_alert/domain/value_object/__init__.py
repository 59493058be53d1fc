from .alert_id import AlertId as AlertId
from .notification_directive import NotificationDirective as NotificationDirective
from .passenger_counts import PassengerCounts as PassengerCounts
from .price_history import PRICE_HISTORY_CAPACITY as PRICE_HISTORY_CAPACITY
from .price_history import PriceHistory as PriceHistory
from .price_history import PriceHistoryEntry as PriceHistoryEntry
