from .price_alert_factory import AlertDetails as AlertDetails
from .price_alert_factory import PassengerCountDetails as PassengerCountDetails
from .price_alert_factory import PriceAlertFactory as PriceAlertFactory
