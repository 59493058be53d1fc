from .entity import PriceAlert as PriceAlert
from .enum import AlertType as AlertType
from .enum import NotificationKind as NotificationKind
from .factory import AlertDetails as AlertDetails
from .factory import PriceAlertFactory as PriceAlertFactory
from .gateway import NotificationDelivery as NotificationDelivery
from .gateway import PriceSampler as PriceSampler
from .repository import PriceAlertRepository as PriceAlertRepository
from .value_object import AlertId as AlertId
from .value_object import NotificationDirective as NotificationDirective
