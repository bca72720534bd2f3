from .credentials import SessionCredentials, parse_cookie
from .typeahead_client import StaticTransport, TypeaheadClient

__all__ = ["SessionCredentials", "parse_cookie", "StaticTransport", "TypeaheadClient"]
