"""Mapping from stored payment records to their externally safe view."""

from payment_gateway.models.payment import PaymentRecord, PaymentView

MASKED_CARD = "****"


def mask_card_number(card_number: str) -> str:
    if not card_number or len(card_number) < 4:
        return MASKED_CARD
    return card_number[-4:]


def to_response(record: PaymentRecord) -> PaymentView:
    return PaymentView(
        id=record.id,
        status=record.status,
        last_four_card_digits=mask_card_number(record.card_number),
        expiry_month=record.expiry_month,
        expiry_year=record.expiry_year,
        currency=record.currency,
        amount=record.amount,
    )
