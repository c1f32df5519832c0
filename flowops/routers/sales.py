"""
Sales router. Recording a sale deducts the menu item's recipe from stock.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from flowops.core.config import get_settings
from flowops.core.deps import get_current_principal
from flowops.core.policy import Principal
from flowops.db.session import get_db
from flowops.schemas.sale import (
    DeductionResponse,
    SaleCreate,
    SaleRecordResponse,
    SaleResponse,
    SkippedIngredientResponse,
)
from flowops.services.sales import SaleService
from flowops.services.store import SaleStore

router = APIRouter(prefix="/sales", tags=["sales"])
settings = get_settings()


@router.get("", response_model=List[SaleResponse])
def list_sales(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Most recent sales, newest first."""
    sales = SaleStore(db).recent(principal, settings.SALES_HISTORY_LIMIT)
    return [SaleResponse.model_validate(sale) for sale in sales]


@router.post("", response_model=SaleRecordResponse, status_code=status.HTTP_201_CREATED)
def record_sale(
    sale_data: SaleCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """
    Record a sale and deduct stock for every linked recipe line.

    Linked inventory rows that no longer exist are skipped and listed in
    ``skipped_ingredients``; the sale itself still succeeds.
    """
    result = SaleService(db).record_sale(principal, sale_data.menu_item_id, sale_data.quantity_sold)
    return SaleRecordResponse(
        sale=SaleResponse.model_validate(result.sale),
        deductions=[
            DeductionResponse(
                ingredient_id=d.ingredient_id,
                inventory_item_id=d.inventory_item_id,
                item_name=d.item_name,
                amount=float(d.amount),
                remaining=float(d.remaining),
            )
            for d in result.deductions
        ],
        skipped_ingredients=[
            SkippedIngredientResponse(
                ingredient_id=s.ingredient_id,
                ingredient_name=s.ingredient_name,
                inventory_item_id=s.inventory_item_id,
                reason=s.reason,
            )
            for s in result.skipped_ingredients
        ],
    )
