from .error_response import ErrorResponse as ErrorResponse
from .error_response import error_response as error_response
from .logger import get_logger as get_logger
from .validators import to_decimal as to_decimal
