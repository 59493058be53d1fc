from .price_alert import PriceAlert as PriceAlert
