from .price_alert_repository import PriceAlertRepository as PriceAlertRepository
