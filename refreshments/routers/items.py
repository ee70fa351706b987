# refreshments/routers/items.py
from fastapi import APIRouter, Depends, status

from refreshments.dependencies import get_counter
from refreshments.schemas.catalog import CatalogSummary, ItemCreate, ItemRead, ItemUpdate
from refreshments.services.session_service import CounterSession

router = APIRouter(prefix="/items", tags=["Catalog"])


@router.get("", response_model=list[ItemRead])
def list_items(counter: CounterSession = Depends(get_counter)):
    """
    List the catalog as currently shown on the counter.
    """
    return counter.items


@router.get("/summary", response_model=CatalogSummary)
def catalog_summary(counter: CounterSession = Depends(get_counter)):
    """
    Item count and price range.
    """
    return counter.catalog_summary()


@router.post("", response_model=ItemRead, status_code=status.HTTP_201_CREATED)
def create_item(
    payload: ItemCreate,
    counter: CounterSession = Depends(get_counter),
):
    """
    Add a catalog item.

    - 422 if the name is blank or the price is not a non-negative number.
    """
    return counter.create_item(payload.name, payload.price)


@router.patch("/{item_id}", response_model=ItemRead)
def update_item(
    item_id: int,
    payload: ItemUpdate,
    counter: CounterSession = Depends(get_counter),
):
    """
    Update name and/or price of an item.

    Past purchases keep the price they were recorded with.
    """
    return counter.update_item(item_id, payload.name, payload.price)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: int,
    counter: CounterSession = Depends(get_counter),
):
    """
    Delete a catalog item. Recorded purchases are not touched.
    """
    counter.delete_item(item_id)
    return None
