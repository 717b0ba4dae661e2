"""Public authentication endpoints."""

from infrastructure.api_client import ApiGateway, Endpoint
from use_cases.domain_models import LoginResult

LOGIN = Endpoint("POST", "/api/auth/login")


def login(gateway: ApiGateway, email: str, password: str) -> LoginResult:
    response = gateway.send(LOGIN.bind(json={"email": email, "password": password}))
    return LoginResult.from_api(response.data or {})
