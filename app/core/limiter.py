"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Limit strings live here only.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

LOGIN_LIMIT = "10/minute"
REGISTER_LIMIT = "5/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"
UPLOAD_LIMIT = "30/minute"
SEARCH_LIMIT = "60/minute"

limit_auth = limiter.limit(LOGIN_LIMIT)
limit_register = limiter.limit(REGISTER_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
limit_upload = limiter.limit(UPLOAD_LIMIT)
limit_search = limiter.limit(SEARCH_LIMIT)
