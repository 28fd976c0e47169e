"""Billing endpoints."""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from constants import (
    AUDIT_ACTION_BILLING,
    AUDIT_ACTION_REPORTS,
    AUDIT_MODULE_BILLING,
    CLIENT_FILTER_ALL,
    DEFAULT_REQUESTED_BY,
)
from exceptions import ClientNotFoundError
from models import Client, get_db
from repositories import ClientRepository, RateRepository
from services import AuditService, ChargeCalculator, RateResolver, RequestContext
from services.billing_export import build_billing_csv, export_filename
from services.billing_types import BillingWindow
from utils.validation import normalize_size_class

router = APIRouter()


class BillingRequest(BaseModel):
    """Billing window as YYYY-MM-DD strings, parsed by BillingWindow."""

    start: str
    end: str
    client_id: Optional[str] = None


class ChargeLineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    movement_id: str
    container_id: str
    client_id: int | None
    client_code: str | None
    client_name: str | None
    size_class: str
    container_size: str
    date_in: date
    date_out: date | None
    storage_days: int
    free_days: int
    billable_days: int
    storage_rate: float
    storage_charge: float
    handling_in: bool
    handling_out: bool
    handling_count: int
    handling_rate: float
    handling_charge: float
    total: float


class BillingSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_storage_charge: float
    total_handling_charge: float
    total_charge: float
    record_count: int
    total_storage_days: int
    total_billable_days: int


class BillingWarningResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    message: str
    movement_id: str | None = None
    container_id: str | None = None
    client_id: int | None = None
    size_class: str | None = None


class BillingResponse(BaseModel):
    success: bool = True
    data: List[ChargeLineResponse]
    summary: BillingSummaryResponse
    warnings: List[BillingWarningResponse]


class ClientOption(BaseModel):
    id: str
    code: str
    name: str
    text: str


class ClientListResponse(BaseModel):
    success: bool = True
    data: List[ClientOption]


class RateData(BaseModel):
    rate: float
    free_days: int | None = None
    source: str


class RateResponse(BaseModel):
    success: bool = True
    data: RateData


def get_request_context(
    request: Request,
    x_requested_by: Optional[str] = Header(None),
) -> RequestContext:
    """Caller identity for the audit trail."""
    return RequestContext(
        requested_by=x_requested_by or DEFAULT_REQUESTED_BY,
        ip_address=request.client.host if request.client else None,
    )


def _get_client(db: Session, external_id: str) -> Client:
    client = ClientRepository(db).get_by_external_id(external_id)
    if not client:
        raise ClientNotFoundError(f"Client not found: {external_id}")
    return client


def _client_filter(db: Session, client_id: Optional[str]) -> Optional[int]:
    if not client_id or client_id == CLIENT_FILTER_ALL:
        return None
    return _get_client(db, client_id).id


def _run_billing(db: Session, payload: BillingRequest):
    window = BillingWindow.from_strings(payload.start, payload.end)
    return ChargeCalculator(db).compute_billing(window, _client_filter(db, payload.client_id))


@router.post("/generate", response_model=BillingResponse)
async def generate_billing(
    payload: BillingRequest,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    """Calculate storage and handling charges for a date range."""
    result = _run_billing(db, payload)
    params = result.audit_parameters()

    AuditService(db).log(
        AUDIT_ACTION_BILLING,
        (
            f"Generated billing for {params['start_date']} to {params['end_date']}"
            f" (client: {payload.client_id or CLIENT_FILTER_ALL}, records: {params['record_count']})"
        ),
        context,
        module=AUDIT_MODULE_BILLING,
    )

    return BillingResponse(
        data=[ChargeLineResponse.model_validate(line) for line in result.lines],
        summary=BillingSummaryResponse.model_validate(result.summary),
        warnings=[BillingWarningResponse.model_validate(w) for w in result.warnings],
    )


@router.post("/export")
async def export_billing(
    payload: BillingRequest,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    """Download billing for a date range as CSV."""
    result = _run_billing(db, payload)
    filename = export_filename(result.window)

    AuditService(db).log(
        AUDIT_ACTION_REPORTS,
        f"Exported {result.summary.record_count} billing record(s) to CSV file: {filename}",
        context,
        module=AUDIT_MODULE_BILLING,
    )

    return Response(
        content=build_billing_csv(result),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/clients", response_model=ClientListResponse)
async def list_billing_clients(db: Session = Depends(get_db)):
    """Active clients for the billing client picker."""
    clients = ClientRepository(db).get_active_clients()
    return ClientListResponse(
        data=[
            ClientOption(
                id=client.external_id,
                code=client.client_code,
                name=client.client_name,
                text=client.display_text,
            )
            for client in clients
        ]
    )


@router.get("/storage-rate/{client_id}/{size}", response_model=RateResponse)
async def get_storage_rate(client_id: str, size: str, db: Session = Depends(get_db)):
    """Storage rate and free days that apply to a client and size."""
    client = _get_client(db, client_id)
    rates = RateResolver(RateRepository(db)).resolve(client.id, normalize_size_class(size))
    return RateResponse(
        data=RateData(rate=rates.storage_rate, free_days=rates.free_days, source=rates.storage_source)
    )


@router.get("/handling-rate/{client_id}/{size}", response_model=RateResponse)
async def get_handling_rate(client_id: str, size: str, db: Session = Depends(get_db)):
    """Handling rate that applies to a client and size."""
    client = _get_client(db, client_id)
    rates = RateResolver(RateRepository(db)).resolve(client.id, normalize_size_class(size))
    return RateResponse(
        data=RateData(rate=rates.handling_rate, source=rates.handling_source)
    )
