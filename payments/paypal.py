"""
PayPal NVP Types

This module holds the value types exchanged with the PayPal NVP API:
- Orders and line items (physical and digital goods)
- Parsed API responses and the payment projection over them
- The error raised when PayPal declares a call failed
"""

from dataclasses import dataclass, field
from urllib.parse import urlencode

from payments.nvp import first_value

NVP_SANDBOX_URL = "https://api-3t.sandbox.paypal.com/nvp"
NVP_PRODUCTION_URL = "https://api-3t.paypal.com/nvp"
CHECKOUT_SANDBOX_URL = "https://www.sandbox.paypal.com/cgi-bin/webscr"
CHECKOUT_PRODUCTION_URL = "https://www.paypal.com/cgi-bin/webscr"
NVP_VERSION = "94"

FAILURE_ACKS = ("failure", "failurewithwarning")
MAINTENANCE_MESSAGE = "PayPal is undergoing maintenance.\nPlease try again later."


@dataclass
class PayPalOrder:
    sub_total: float
    shipping: float
    discount: float
    total: float
    currency_code: str
    return_url: str
    cancel_url: str


@dataclass
class PayPalGood:
    """A physical line item; ``id`` is sent as the item number when set."""

    name: str
    amount: float
    quantity: int
    id: str = ""


@dataclass
class PayPalDigitalGood:
    name: str
    amount: float
    quantity: int


def sum_digital_good_amounts(goods: list[PayPalDigitalGood]) -> float:
    """Total of amount * quantity over all digital goods."""
    total = 0.0
    for good in goods:
        total += good.amount * good.quantity
    return total


@dataclass
class PayPalPaymentResponse:
    transaction_id: str = ""
    status: str = ""
    type: str = ""
    fee: float = 0.0
    amount: float = 0.0
    currency: str = ""
    reason_code: str = ""

    def populate(self, values: dict[str, list[str]]) -> "PayPalPaymentResponse":
        """
        Fill the fields from the first payment of a DoExpressCheckoutPayment reply.

        Amounts that do not parse as plain numbers (including ones with
        digit separators or surrounding whitespace) are left at 0.0 rather
        than raising; callers relying on ``amount`` or ``fee`` should check the
        transaction status first.
        """
        self.transaction_id = first_value(values, "PAYMENTINFO_0_TRANSACTIONID")
        self.status = first_value(values, "PAYMENTINFO_0_PAYMENTSTATUS")
        self.amount = _parse_float(first_value(values, "PAYMENTINFO_0_AMT"))
        self.fee = _parse_float(first_value(values, "PAYMENTINFO_0_FEEAMT"))
        self.currency = first_value(values, "PAYMENTINFO_0_CURRENCYCODE")
        self.type = first_value(values, "PAYMENTINFO_0_PAYMENTTYPE")
        self.reason_code = first_value(values, "PAYMENTINFO_0_REASONCODE")
        return self


def _parse_float(raw: str) -> float:
    # float() also takes digit separators and padding; PayPal never sends them
    if "_" in raw or raw != raw.strip():
        return 0.0
    try:
        return float(raw)
    except ValueError:
        return 0.0


@dataclass
class PayPalResponse:
    ack: str = ""
    correlation_id: str = ""
    timestamp: str = ""
    version: str = ""
    build: str = ""
    token: str = ""
    values: dict[str, list[str]] = field(default_factory=dict)
    used_sandbox: bool = False

    @classmethod
    def from_values(
        cls, values: dict[str, list[str]], used_sandbox: bool
    ) -> "PayPalResponse":
        """Promote the common NVP reply fields out of a parsed body."""
        return cls(
            ack=first_value(values, "ACK"),
            correlation_id=first_value(values, "CORRELATIONID"),
            timestamp=first_value(values, "TIMESTAMP"),
            version=first_value(values, "VERSION"),
            build=first_value(values, "BUILD"),
            token=first_value(values, "TOKEN"),
            values=values,
            used_sandbox=used_sandbox,
        )

    def get(self, key: str, default: str = "") -> str:
        """First raw value for ``key``, for fields without a named attribute."""
        return first_value(self.values, key, default)

    @property
    def success(self) -> bool:
        """False when PayPal reported an error code or a failure ack."""
        if self.get("L_ERRORCODE0"):
            return False
        return self.ack.lower() not in FAILURE_ACKS

    def checkout_url(self) -> str:
        """URL to send the buyer to so they can approve the payment."""
        query = urlencode({"cmd": "_express-checkout", "token": self.token})
        base = CHECKOUT_SANDBOX_URL if self.used_sandbox else CHECKOUT_PRODUCTION_URL
        return f"{base}?{query}"

    def payment(self) -> PayPalPaymentResponse:
        return PayPalPaymentResponse().populate(self.values)


class PayPalError(Exception):
    pass


class PayPalAPIError(PayPalError):
    """
    Raised when a PayPal NVP reply declares failure.

    The parsed reply is kept on ``response`` so callers can still read the
    correlation id or any other field PayPal sent back.
    """

    def __init__(
        self,
        ack: str = "",
        error_code: str = "",
        short_message: str = "",
        long_message: str = "",
        severity_code: str = "",
        response: PayPalResponse | None = None,
    ):
        self.ack = ack
        self.error_code = error_code
        self.short_message = short_message
        self.long_message = long_message
        self.severity_code = severity_code
        self.response = response
        super().__init__(self.message)

    @classmethod
    def from_response(cls, response: PayPalResponse) -> "PayPalAPIError":
        return cls(
            ack=response.ack,
            error_code=response.get("L_ERRORCODE0"),
            short_message=response.get("L_SHORTMESSAGE0"),
            long_message=response.get("L_LONGMESSAGE0"),
            severity_code=response.get("L_SEVERITYCODE0"),
            response=response,
        )

    @property
    def message(self) -> str:
        if self.error_code and self.short_message:
            return f"PayPal Error {self.error_code}: {self.short_message}"
        if self.ack:
            return self.ack
        return MAINTENANCE_MESSAGE

    def __str__(self):
        return self.message
