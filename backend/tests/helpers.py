"""Small helpers shared by the API tests."""

import base64


def basic_auth(email: str, password: str) -> dict:
    """Authorization header for HTTP Basic credentials."""
    token = base64.b64encode(f"{email}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}
