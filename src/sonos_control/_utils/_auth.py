import base64


def encode_client_keys(client_id: str, client_secret: str) -> str:
    """Base64-encode ``client_id:client_secret`` for the token endpoints."""
    if not client_id or not client_secret:
        raise ValueError("Both client_id and client_secret are required.")
    raw = f"{client_id}:{client_secret}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def bearer_auth_headers(access_token: str) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {access_token}",
    }


def basic_auth_headers(encoded_keys: str) -> dict[str, str]:
    return {
        "Content-Type": "application/x-www-form-urlencoded;charset=utf-8",
        "Authorization": f"Basic {encoded_keys}",
    }
