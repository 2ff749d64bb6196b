"""Shared test doubles for the PayPal NVP client tests."""

from urllib.parse import urlencode


class MockResponse:
    """Stand-in for requests.Response carrying a raw NVP body."""

    def __init__(self, text="", status_code=200):
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        pass


def nvp_body(**fields):
    """Encode keyword fields the way PayPal encodes its replies."""
    return urlencode(fields)


def sent_params(session):
    """Form fields passed to the last session.post call."""
    return session.post.call_args.kwargs["data"]


SUCCESS_BODY = nvp_body(
    TOKEN="EC-8UH37592L1234567",
    TIMESTAMP="2014-03-01T12:00:00Z",
    CORRELATIONID="a1b2c3d4e5f6",
    ACK="Success",
    VERSION="94",
    BUILD="9720069",
)
