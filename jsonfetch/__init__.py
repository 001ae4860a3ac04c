from jsonfetch.client import Method, RequestClient, ResponseInterceptor
from jsonfetch.schemas.envelope import ResultEnvelope

__all__ = ["Method", "RequestClient", "ResponseInterceptor", "ResultEnvelope"]
