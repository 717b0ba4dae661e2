"""Endpoints available to the WARDEN role."""

from typing import Any, List, Optional

from infrastructure.api_client import ApiGateway, Endpoint
from use_cases.domain_models import AbsenceRequest, DeletionRequest, MonthlyExpense, SystemSetting, parse_list

DELETION_REQUESTS = Endpoint("GET", "/api/warden/deletion-requests")
APPROVE_DELETION = Endpoint("PUT", "/api/warden/deletion-requests/{id}/approve")
REJECT_DELETION = Endpoint("PUT", "/api/warden/deletion-requests/{id}/reject")
EXPENSES = Endpoint("GET", "/api/warden/expenses")
EXPENSES_BY_MONTH = Endpoint("GET", "/api/warden/expenses/{month_year}")
LATE_ABSENCE_REQUESTS = Endpoint("GET", "/api/warden/absence-requests/late")
APPROVE_ABSENCE = Endpoint("PUT", "/api/warden/absence-requests/{id}/approve")
REJECT_ABSENCE = Endpoint("PUT", "/api/warden/absence-requests/{id}/reject")
SETTINGS = Endpoint("GET", "/api/warden/settings")
CUTOFF_TIME = Endpoint("GET", "/api/warden/settings/absence-cutoff-time")
UPDATE_CUTOFF_TIME = Endpoint("PUT", "/api/warden/settings/absence-cutoff-time")


def get_deletion_requests(gateway: ApiGateway) -> List[DeletionRequest]:
    response = gateway.send(DELETION_REQUESTS.bind())
    return parse_list(DeletionRequest, response.data)


def approve_deletion(gateway: ApiGateway, request_id: int) -> None:
    gateway.send(APPROVE_DELETION.bind(path_params={"id": request_id}))


def reject_deletion(gateway: ApiGateway, request_id: int, reason: str) -> None:
    gateway.send(REJECT_DELETION.bind(path_params={"id": request_id}, params={"reason": reason}))


def get_expenses(gateway: ApiGateway) -> List[MonthlyExpense]:
    response = gateway.send(EXPENSES.bind())
    return parse_list(MonthlyExpense, response.data)


def get_expenses_by_month(gateway: ApiGateway, month_year: str) -> Any:
    # Shape varies by server version; returned as-is for display.
    return gateway.send(EXPENSES_BY_MONTH.bind(path_params={"month_year": month_year})).data


def get_late_absence_requests(gateway: ApiGateway) -> List[AbsenceRequest]:
    response = gateway.send(LATE_ABSENCE_REQUESTS.bind())
    return parse_list(AbsenceRequest, response.data)


def approve_absence_request(gateway: ApiGateway, request_id: int, comments: Optional[str] = None) -> None:
    gateway.send(APPROVE_ABSENCE.bind(path_params={"id": request_id}, params={"comments": comments}))


def reject_absence_request(gateway: ApiGateway, request_id: int, reason: str) -> None:
    gateway.send(REJECT_ABSENCE.bind(path_params={"id": request_id}, params={"reason": reason}))


def get_all_settings(gateway: ApiGateway) -> List[SystemSetting]:
    response = gateway.send(SETTINGS.bind())
    return parse_list(SystemSetting, response.data)


def get_cutoff_time(gateway: ApiGateway) -> Optional[str]:
    return gateway.send(CUTOFF_TIME.bind()).data


def update_cutoff_time(gateway: ApiGateway, cutoff_time: str) -> None:
    gateway.send(UPDATE_CUTOFF_TIME.bind(json={"cutoffTime": cutoff_time}))
