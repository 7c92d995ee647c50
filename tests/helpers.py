import time

from jose import jwt

JWT_SECRET = "test-signing-secret"


def make_token(user_id=None, secret=JWT_SECRET, **claims):
    payload = {"iat": int(time.time()), "exp": int(time.time()) + 300}
    if user_id is not None:
        payload["sub"] = user_id
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_headers(user_id):
    return {"Authorization": f"Bearer {make_token(user_id)}"}


class StubSigner:
    """Stands in for the ImageKit client."""

    def __init__(self, error=None):
        self.calls = 0
        self.error = error

    def get_authentication_parameters(self):
        self.calls += 1
        if self.error:
            raise self.error
        return {"token": "token-123", "expire": 1893456000, "signature": "abc123signature"}
