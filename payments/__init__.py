from payments.paypal import (
    PayPalAPIError,
    PayPalDigitalGood,
    PayPalError,
    PayPalGood,
    PayPalOrder,
    PayPalPaymentResponse,
    PayPalResponse,
    sum_digital_good_amounts,
)
from payments.paypal_client import PayPalClient

__all__ = [
    "PayPalAPIError",
    "PayPalClient",
    "PayPalDigitalGood",
    "PayPalError",
    "PayPalGood",
    "PayPalOrder",
    "PayPalPaymentResponse",
    "PayPalResponse",
    "sum_digital_good_amounts",
]
