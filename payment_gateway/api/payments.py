"""
Payment endpoints.

POST /payments       Process a payment (optional Idempotency-Key header).
GET  /payments/{id}  Get a processed payment (card number masked).
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response
from pydantic import BaseModel, Field, field_validator

from payment_gateway.engine.orchestrator import PaymentOrchestrator
from payment_gateway.engine.results import GatewayResult
from payment_gateway.models.enums import ErrorKind, PaymentStatus
from payment_gateway.models.payment import PaymentRequest, PaymentView

router = APIRouter(prefix="/payments", tags=["payments"])

ERROR_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION_ERROR: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.IDEMPOTENCY_CONFLICT: 409,
    ErrorKind.UNSUPPORTED_PROVIDER: 422,
    ErrorKind.PROVIDER_UNAVAILABLE: 502,
    ErrorKind.PROVIDER_REJECTED: 502,
}

REPLAYED_HEADER = "Idempotent-Replayed"


class PaymentRequestBody(BaseModel):
    card_number: str = Field(..., pattern=r"^[0-9]{14,19}$", description="Card number, 14-19 digits")
    expiry_month: int = Field(..., ge=1, le=12)
    expiry_year: int
    currency: str = Field(..., pattern=r"^[A-Z]{3}$", description="ISO 4217 currency code")
    amount: int = Field(..., gt=0, description="Amount in minor currency units")
    cvv: str = Field(..., pattern=r"^[0-9]{3,4}$")
    provider: Optional[str] = Field(None, description="Provider name, e.g. SIMULATOR or STRIPE")

    @field_validator("expiry_year")
    @classmethod
    def _expiry_year_not_past(cls, value: int) -> int:
        if value < datetime.now(timezone.utc).year:
            raise ValueError("Expiry year must be in the future")
        return value

    def to_domain(self) -> PaymentRequest:
        return PaymentRequest(
            card_number=self.card_number,
            expiry_month=self.expiry_month,
            expiry_year=self.expiry_year,
            currency=self.currency,
            amount=self.amount,
            cvv=self.cvv,
            provider=self.provider,
        )


class PaymentResponse(BaseModel):
    id: str
    status: PaymentStatus
    last_four_card_digits: str
    expiry_month: int
    expiry_year: int
    currency: str
    amount: int

    model_config = {"from_attributes": True}


def get_orchestrator(request: Request) -> PaymentOrchestrator:
    return request.app.state.orchestrator


def _unwrap(result: GatewayResult) -> PaymentView:
    if result.error is not None:
        raise HTTPException(
            status_code=ERROR_STATUS_CODES[result.error.kind],
            detail={"error": result.error.kind.value, "message": result.error.message},
        )
    return result.payment


@router.post("", response_model=PaymentResponse, status_code=201)
async def create_payment(
    body: PaymentRequestBody,
    response: Response,
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key"),
    orchestrator: PaymentOrchestrator = Depends(get_orchestrator),
):
    """
    Process a payment through the selected provider.

    Idempotent when an Idempotency-Key header is sent: repeating the same
    body with the same key returns the original payment without charging
    again; a different body with the same key is a 409 conflict.
    """
    result = await orchestrator.process_payment(body.to_domain(), idempotency_key or None)
    payment = _unwrap(result)
    if result.replayed:
        response.headers[REPLAYED_HEADER] = "true"
    return PaymentResponse.model_validate(payment)


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(payment_id: str, orchestrator: PaymentOrchestrator = Depends(get_orchestrator)):
    """Get a single payment with its card number masked."""
    result = await orchestrator.get_payment_by_id(payment_id)
    return PaymentResponse.model_validate(_unwrap(result))
