"""Draft invoice endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from invoice_engine.app.dependencies.stores import get_draft_store
from invoice_engine.app.schemas.invoice import InvoiceRecord, LineItemCreate, LineItemUpdate
from invoice_engine.app.services.drafts import DraftStore
from invoice_engine.app.services.exceptions import DraftNotFoundError, LineItemNotFoundError, StaleWriteError

router = APIRouter(prefix="/drafts", tags=["drafts"])


def _wire(invoice: InvoiceRecord) -> dict:
    return invoice.model_dump(mode="json", by_alias=True)


def _edit(action):
    try:
        record, item = action()
    except DraftNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Draft not found")
    except LineItemNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Line item not found")
    except StaleWriteError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return {"invoice": _wire(record), "item": item.model_dump(mode="json", by_alias=True)}


@router.get("")
def list_drafts(store: DraftStore = Depends(get_draft_store)):
    return {bill_number: _wire(record) for bill_number, record in store.list_drafts().items()}


@router.post("/new")
def new_draft():
    # Not persisted until it is saved
    return _wire(InvoiceRecord(is_draft=True))


@router.post("")
def save_draft(invoice: InvoiceRecord, store: DraftStore = Depends(get_draft_store)):
    try:
        saved = store.save_draft(invoice)
    except StaleWriteError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return _wire(saved)


@router.get("/{bill_number}")
def read_draft(bill_number: str, store: DraftStore = Depends(get_draft_store)):
    draft = store.get_draft(bill_number)
    if not draft:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Draft not found")
    return _wire(draft)


@router.delete("/{bill_number}", status_code=status.HTTP_204_NO_CONTENT)
def delete_draft(bill_number: str, store: DraftStore = Depends(get_draft_store)):
    try:
        store.delete_draft(bill_number)
    except StaleWriteError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{bill_number}/items", status_code=status.HTTP_201_CREATED)
def add_line_item(bill_number: str, item_in: LineItemCreate, store: DraftStore = Depends(get_draft_store)):
    def action():
        try:
            return store.add_line_item(
                bill_number,
                description=item_in.description,
                unit_rate=item_in.unit_rate,
                quantity=item_in.quantity,
                item_id=item_in.id,
            )
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))

    return _edit(action)


@router.patch("/{bill_number}/items/{item_id}")
def update_line_item(
    bill_number: str,
    item_id: str,
    item_in: LineItemUpdate,
    store: DraftStore = Depends(get_draft_store),
):
    return _edit(lambda: store.update_line_item(bill_number, item_id, **item_in.model_dump(exclude_unset=True)))


@router.delete("/{bill_number}/items/{item_id}")
def remove_line_item(bill_number: str, item_id: str, store: DraftStore = Depends(get_draft_store)):
    return _edit(lambda: store.remove_line_item(bill_number, item_id))
