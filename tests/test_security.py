from datetime import timedelta

from jose import jwt

from shared.security import create_access_token, verify_access_token
from shared.security.jwt_handler import ALGORITHM


def test_token_round_trip():
    token = create_access_token({"sub": "42", "role": "USER"})

    payload = verify_access_token(token)

    assert payload["sub"] == "42"
    assert payload["role"] == "USER"
    assert payload["exp"] > payload["iat"]


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "42"}, expires_delta=timedelta(minutes=-1))

    assert verify_access_token(token) is None


def test_token_signed_with_another_key_is_rejected():
    forged = jwt.encode({"sub": "42"}, "some-other-secret", algorithm=ALGORITHM)

    assert verify_access_token(forged) is None
    assert verify_access_token("not-a-token") is None


def test_rate_limit_key_prefers_the_member_id():
    from starlette.requests import Request

    from shared.security import member_or_ip

    request = Request({
        "type": "http",
        "method": "POST",
        "path": "/orders/checkout",
        "headers": [],
        "query_string": b"",
        "client": ("10.0.0.1", 52100),
    })
    assert member_or_ip(request) == "ip:10.0.0.1"

    request.state.user_id = 7
    assert member_or_ip(request) == "member:7"
