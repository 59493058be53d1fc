from .notification_delivery import NotificationDelivery as NotificationDelivery
from .price_sampler import PriceSampler as PriceSampler
