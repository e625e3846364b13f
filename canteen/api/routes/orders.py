"""Order Routes — kiosk submission, ticket view, admin print/delete.

Invariants:
    - POST is public: the identity + quota rules are the only gate
    - PATCH/DELETE require an admin session (checked before any write)
    - Failures surface as CanteenError envelopes via the global handlers
"""

import base64
import binascii
import logging

from fastapi import APIRouter, Depends, Response, status

from canteen.api.dependencies import get_intake_engine, get_order_records, require_admin
from canteen.core.errors import ResourceNotFoundError
from canteen.schemas.order import OrderCreate, OrderResponse, PrintedPatch, TicketResponse
from canteen.services.order_intake import OrderIntakeEngine, OrderIntent
from canteen.services.order_records import OrderRecords

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/orders", tags=["orders"])

_DATA_URL_PREFIX = "base64,"


@router.post(
    "", response_model=TicketResponse, status_code=status.HTTP_201_CREATED,
)
async def submit_order(
    body: OrderCreate, engine: OrderIntakeEngine = Depends(get_intake_engine),
):
    """Admit an order and return its ticket."""
    ticket = await engine.submit_order(OrderIntent(
        identity=body.identity,
        fulfillment_mode=body.fulfillment_mode,
        meal_slot=body.meal_slot,
        quantity=body.quantity,
        pickup_time=body.pickup_time,
        pickup_name=body.pickup_name,
        guest_names=body.guest_names,
        detail=body.detail,
        signature=body.signature,
    ))
    return TicketResponse(
        id=ticket.id,
        worker_name=ticket.worker_name,
        company=ticket.company,
        fulfillment_mode=ticket.fulfillment_mode,
        meal_slot=ticket.meal_slot,
        quantity=ticket.quantity,
        date=ticket.date,
        time=ticket.time,
        tier=ticket.tier,
        is_premium=ticket.is_premium,
    )


@router.get("/{ticket_id}", response_model=OrderResponse)
async def get_order(
    ticket_id: str, records: OrderRecords = Depends(get_order_records),
):
    """Full ticket record with the employer logo, for reprinting."""
    order, logo_path = await records.get_ticket(ticket_id.upper())
    return OrderResponse.model_validate(order).model_copy(
        update={"company_logo": logo_path},
    )


@router.get("/{ticket_id}/signature")
async def get_signature(
    ticket_id: str, records: OrderRecords = Depends(get_order_records),
):
    """Stored signature decoded to PNG bytes."""
    order, _ = await records.get_ticket(ticket_id.upper())
    if not order.signature:
        raise ResourceNotFoundError("Signature", ticket_id)
    encoded = order.signature
    if _DATA_URL_PREFIX in encoded:
        encoded = encoded.split(_DATA_URL_PREFIX, 1)[1]
    try:
        image = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Undecodable signature", extra={"ticket_id": order.id})
        raise ResourceNotFoundError("Signature", ticket_id)
    return Response(
        content=image,
        media_type="image/png",
        headers={"Cache-Control": "public, max-age=31536000, immutable"},
    )


@router.patch(
    "/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def set_printed(
    ticket_id: str, body: PrintedPatch,
    records: OrderRecords = Depends(get_order_records),
):
    await records.set_printed(ticket_id.upper(), body.printed)


@router.delete(
    "/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_order(
    ticket_id: str, records: OrderRecords = Depends(get_order_records),
):
    await records.delete_order(ticket_id.upper())
