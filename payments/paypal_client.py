"""
PayPal NVP Client

This module talks to the PayPal Name-Value Pair API for Express Checkout:
- SetExpressCheckout (physical and digital goods)
- GetExpressCheckoutDetails
- DoExpressCheckoutPayment
"""

import requests
import structlog
from opentelemetry import trace

from core.dependencies import get_settings
from core.logging import BusinessEvents
from core.metrics import record_request
from core.settings import Settings
from payments.nvp import format_amount, line_item_key, parse_nvp, redact
from payments.paypal import (
    NVP_PRODUCTION_URL,
    NVP_SANDBOX_URL,
    NVP_VERSION,
    PayPalAPIError,
    PayPalDigitalGood,
    PayPalGood,
    PayPalOrder,
    PayPalResponse,
)

log = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)


class PayPalClient:
    def __init__(
        self,
        username: str,
        password: str,
        signature: str,
        uses_sandbox: bool,
        session: requests.Session | None = None,
    ):
        """
        Initialize the client with 3-token API credentials.

        Args:
            username: API username
            password: API password
            signature: API signature
            uses_sandbox: Send calls to the sandbox instead of production
            session: Optional transport; a new requests.Session is used otherwise
        """
        self._username = username
        self._password = password
        self._signature = signature
        self._uses_sandbox = uses_sandbox
        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        session: requests.Session | None = None,
    ) -> "PayPalClient":
        """Build a client from settings, defaulting to the process-wide ones."""
        if settings is None:
            settings = get_settings()
        return cls(
            settings.PAYPAL_USERNAME,
            settings.PAYPAL_PASSWORD,
            settings.PAYPAL_SIGNATURE,
            settings.PAYPAL_SANDBOX,
            session=session,
        )

    @property
    def uses_sandbox(self) -> bool:
        return self._uses_sandbox

    @property
    def endpoint(self) -> str:
        return NVP_SANDBOX_URL if self._uses_sandbox else NVP_PRODUCTION_URL

    def perform_request(self, params: dict[str, str]) -> PayPalResponse:
        """
        Sign and POST an NVP call, then parse the reply.

        Raises:
            PayPalAPIError: PayPal acknowledged the call as a failure or
                returned an error code. The parsed reply is on ``.response``.
            requests.RequestException: the call never produced a body.
        """
        payload = dict(params)
        payload["USER"] = self._username
        payload["PWD"] = self._password
        payload["SIGNATURE"] = self._signature
        payload["VERSION"] = NVP_VERSION

        method = payload.get("METHOD", "")
        environment = "sandbox" if self._uses_sandbox else "production"
        log.info(
            BusinessEvents.PAYPAL_REQUEST,
            method=method,
            environment=environment,
            params=redact(payload),
        )

        with tracer.start_as_current_span("paypal.nvp") as span:
            span.set_attribute("paypal.method", method)
            span.set_attribute("paypal.environment", environment)

            try:
                http_response = self.session.post(self.endpoint, data=payload)
                body = http_response.text
            except requests.RequestException as e:
                log.error(
                    BusinessEvents.PAYPAL_TRANSPORT_ERROR,
                    method=method,
                    environment=environment,
                    error=str(e),
                )
                record_request(method, "error")
                raise

            response = PayPalResponse.from_values(
                parse_nvp(body), used_sandbox=self._uses_sandbox
            )
            span.set_attribute("paypal.ack", response.ack)

            if not response.success:
                error = PayPalAPIError.from_response(response)
                log.warning(
                    BusinessEvents.PAYPAL_FAILURE,
                    method=method,
                    ack=error.ack,
                    error_code=error.error_code,
                    short_message=error.short_message,
                    severity=error.severity_code,
                    correlation_id=response.correlation_id,
                )
                record_request(method, "failure")
                raise error

        log.info(
            BusinessEvents.PAYPAL_SUCCESS,
            method=method,
            ack=response.ack,
            correlation_id=response.correlation_id,
            token=response.token,
        )
        record_request(method, "success")
        return response

    def set_express_checkout_digital_goods(
        self,
        payment_amount: float,
        currency_code: str,
        return_url: str,
        cancel_url: str,
        goods: list[PayPalDigitalGood],
    ) -> PayPalResponse:
        params = {
            "METHOD": "SetExpressCheckout",
            "PAYMENTREQUEST_0_AMT": format_amount(payment_amount),
            "PAYMENTREQUEST_0_PAYMENTACTION": "Sale",
            "PAYMENTREQUEST_0_CURRENCYCODE": currency_code,
            "RETURNURL": return_url,
            "CANCELURL": cancel_url,
            "REQCONFIRMSHIPPING": "0",
            "NOSHIPPING": "1",
            "SOLUTIONTYPE": "Sole",
        }

        for i, good in enumerate(goods):
            params[line_item_key("NAME", i)] = good.name
            params[line_item_key("AMT", i)] = format_amount(good.amount)
            params[line_item_key("QTY", i)] = str(good.quantity)
            params[line_item_key("ITEMCATEGORY", i)] = "Digital"

        return self.perform_request(params)

    def set_express_checkout(
        self, order: PayPalOrder, goods: list[PayPalGood]
    ) -> PayPalResponse:
        params = {
            "METHOD": "SetExpressCheckout",
            "PAYMENTREQUEST_0_ITEMAMT": format_amount(order.sub_total),
            "PAYMENTREQUEST_0_SHIPPINGAMT": format_amount(order.shipping),
            "PAYMENTREQUEST_0_AMT": format_amount(order.total),
            "PAYMENTREQUEST_0_PAYMENTACTION": "Sale",
            "PAYMENTREQUEST_0_CURRENCYCODE": order.currency_code,
            "RETURNURL": order.return_url,
            "CANCELURL": order.cancel_url,
            "REQCONFIRMSHIPPING": "0",
            "NOSHIPPING": "1",
            "SOLUTIONTYPE": "Sole",
        }

        for i, good in enumerate(goods):
            if good.id:
                params[line_item_key("NUMBER", i)] = good.id
            params[line_item_key("NAME", i)] = good.name
            params[line_item_key("AMT", i)] = format_amount(good.amount)
            params[line_item_key("QTY", i)] = str(good.quantity)

        # PayPal has no order-level discount field; send it as a negative item
        if order.discount > 0:
            i = len(goods)
            params[line_item_key("NAME", i)] = "DISCOUNT"
            params[line_item_key("AMT", i)] = format_amount(-order.discount)
            params[line_item_key("QTY", i)] = "1"

        return self.perform_request(params)

    def do_express_checkout_sale(
        self, token: str, payer_id: str, currency_code: str, final_payment_amount: float
    ) -> PayPalResponse:
        """Charge the buyer immediately."""
        return self.do_express_checkout_payment(
            token, payer_id, "Sale", currency_code, final_payment_amount
        )

    def do_express_checkout_payment(
        self,
        token: str,
        payer_id: str,
        payment_type: str,
        currency_code: str,
        final_payment_amount: float,
    ) -> PayPalResponse:
        """
        Complete an approved checkout.

        ``payment_type`` is "Sale", "Authorization" or "Order" (ship later);
        it is sent to PayPal as given.
        """
        params = {
            "METHOD": "DoExpressCheckoutPayment",
            "TOKEN": token,
            "PAYERID": payer_id,
            "PAYMENTREQUEST_0_PAYMENTACTION": payment_type,
            "PAYMENTREQUEST_0_CURRENCYCODE": currency_code,
            "PAYMENTREQUEST_0_AMT": format_amount(final_payment_amount),
        }
        return self.perform_request(params)

    def get_express_checkout_details(self, token: str) -> PayPalResponse:
        params = {
            "METHOD": "GetExpressCheckoutDetails",
            "TOKEN": token,
        }
        return self.perform_request(params)
