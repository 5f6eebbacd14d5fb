"""Authorization header construction."""

import base64


def build_auth_header(api_key: str) -> str:
    """Build the HTTP Basic ``Authorization`` value for an API key.

    The service expects the literal user ``api`` and the key as password.
    Never raises: a blank key still yields a well-formed (but useless) header,
    rejecting blank keys is up to the caller.

    Args:
        api_key: Raw API key; surrounding whitespace is ignored

    Returns:
        Header value of the form ``"Basic <base64(api:key)>"``
    """
    credentials = f"api:{api_key.strip()}"
    encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"
