from dataclasses import dataclass
from typing import Generic, TypeVar

import httpx

T = TypeVar("T")


@dataclass
class ResultEnvelope(Generic[T]):
    """Uniform result of a RequestClient call.

    ``error`` is True iff ``status`` is outside 200..299. ``data`` is the
    decoded JSON body, or an empty dict for 204 and undecodable bodies.
    """

    status: int
    error: bool
    data: T
    raw_response: httpx.Response
