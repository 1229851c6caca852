from fastapi.testclient import TestClient

from family_loans.config import settings

DEFAULT_PASSWORD = "pw1234"


def register(client: TestClient, family_name: str, password: str = DEFAULT_PASSWORD):
    """Register a family account; the client keeps the session cookie"""
    response = client.post(
        "/api/register", json={"familyName": family_name, "password": password}
    )
    assert response.status_code == 200, response.text
    return response


def login(client: TestClient, family_name: str, password: str = DEFAULT_PASSWORD):
    return client.post("/api/login", json={"familyName": family_name, "password": password})


def loan_payload(**overrides) -> dict:
    """Valid loan request body using the dashboard's camelCase names"""
    payload = {
        "borrowedBy": "Alice",
        "lenderName": "SBI",
        "loanSource": "bank",
        "amount": 50000,
        "date": "2024-01-01",
    }
    payload.update(overrides)
    return payload


def session_cookie(token: str) -> dict:
    """Cookie header carrying a raw session token"""
    return {"Cookie": f"{settings.SESSION_COOKIE_NAME}={token}"}
