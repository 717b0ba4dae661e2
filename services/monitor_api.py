"""Endpoints unlocked by the monitor capability of a STUDENT."""

from typing import List, Optional

from infrastructure.api_client import ApiGateway, Endpoint
from use_cases.domain_models import AbsenceRequest, parse_list

EARLY_ABSENCE_REQUESTS = Endpoint("GET", "/api/monitor/absence-requests/early")
APPROVE_ABSENCE = Endpoint("PUT", "/api/monitor/absence-requests/{id}/approve")
REJECT_ABSENCE = Endpoint("PUT", "/api/monitor/absence-requests/{id}/reject")


def get_early_absence_requests(gateway: ApiGateway) -> List[AbsenceRequest]:
    response = gateway.send(EARLY_ABSENCE_REQUESTS.bind())
    return parse_list(AbsenceRequest, response.data)


def approve_absence_request(gateway: ApiGateway, request_id: int, comments: Optional[str] = None) -> None:
    gateway.send(APPROVE_ABSENCE.bind(path_params={"id": request_id}, params={"comments": comments}))


def reject_absence_request(gateway: ApiGateway, request_id: int, reason: str) -> None:
    gateway.send(REJECT_ABSENCE.bind(path_params={"id": request_id}, params={"reason": reason}))
