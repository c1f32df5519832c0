"""
Sale recording with automatic stock deduction.

A sale is one transaction: insert the Sale row, then for every recipe line
linked to an inventory row decrement that row by ``ingredient.quantity *
quantity_sold``. The decrement is a single UPDATE evaluated by the database,
so concurrent sales of the same item never lose an update.

Stock is a ledger, not a gauge: quantities may go negative and the manual
OK/LOW/OUT status is never touched here.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flowops.core.errors import InternalError, ValidationError
from flowops.core.policy import Principal
from flowops.db.base import utcnow
from flowops.models import Ingredient, InventoryItem, InventoryLog, MenuItem, Sale
from flowops.models.enums import InventoryLogReason
from flowops.services.store import MenuStore

logger = logging.getLogger(__name__)


@dataclass
class Deduction:
    """Stock taken from one inventory row."""
    ingredient_id: UUID
    inventory_item_id: UUID
    item_name: str
    amount: Decimal
    remaining: Decimal


@dataclass
class SkippedIngredient:
    """Linked recipe line that could not be deducted."""
    ingredient_id: UUID
    ingredient_name: str
    inventory_item_id: UUID
    reason: str


@dataclass
class SaleResult:
    sale: Sale
    deductions: List[Deduction] = field(default_factory=list)
    skipped_ingredients: List[SkippedIngredient] = field(default_factory=list)


class SaleService:

    def __init__(self, db: Session):
        self.db = db

    def record_sale(self, principal: Principal, menu_item_id: UUID, quantity_sold: int) -> SaleResult:
        """
        Record ``quantity_sold`` units of a menu item and deduct its recipe.

        Commits on success. Any database failure rolls back the sale together
        with every deduction and surfaces as ``InternalError``.

        Raises:
            NotFound: menu item missing or outside the principal's scope
            ValidationError: quantity_sold is not a positive integer
        """
        if isinstance(quantity_sold, bool) or not isinstance(quantity_sold, int) or quantity_sold <= 0:
            raise ValidationError.single("quantity_sold", "Quantity sold must be a positive integer")

        menu_item = MenuStore(self.db).get(menu_item_id, principal)

        try:
            sale = Sale(
                menu_item_id=menu_item.id,
                quantity_sold=quantity_sold,
                establishment=menu_item.establishment,
                date=utcnow(),
            )
            self.db.add(sale)
            self.db.flush()

            result = SaleResult(sale=sale)
            for ingredient in menu_item.ingredients:
                if ingredient.inventory_item_id is None:
                    continue
                self._deduct(principal, menu_item, ingredient, sale, quantity_sold, result)

            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.error(f"Sale of menu item {menu_item_id} rolled back", exc_info=True)
            raise InternalError("Failed to record sale")

        self.db.refresh(sale)
        logger.info(
            f"Recorded sale of {quantity_sold} x {menu_item.name} ({menu_item.establishment}): "
            f"{len(result.deductions)} deduction(s), {len(result.skipped_ingredients)} skipped"
        )
        return result

    def _deduct(
        self,
        principal: Principal,
        menu_item: MenuItem,
        ingredient: Ingredient,
        sale: Sale,
        quantity_sold: int,
        result: SaleResult,
    ) -> None:
        amount = Decimal(str(ingredient.quantity)) * quantity_sold
        # Same-establishment guard: a recipe may not drain another tenant's stock
        stmt = (
            update(InventoryItem)
            .where(
                InventoryItem.id == ingredient.inventory_item_id,
                InventoryItem.establishment == menu_item.establishment,
            )
            .values(quantity=InventoryItem.quantity - amount, last_updated=utcnow())
            .execution_options(synchronize_session=False)
        )
        if self.db.execute(stmt).rowcount == 0:
            logger.warning(
                f"Skipping ingredient '{ingredient.name}' of '{menu_item.name}': "
                f"inventory item {ingredient.inventory_item_id} not found in {menu_item.establishment}"
            )
            result.skipped_ingredients.append(SkippedIngredient(
                ingredient_id=ingredient.id,
                ingredient_name=ingredient.name,
                inventory_item_id=ingredient.inventory_item_id,
                reason="inventory item not found",
            ))
            return

        name, remaining = self.db.execute(
            select(InventoryItem.name, InventoryItem.quantity).where(InventoryItem.id == ingredient.inventory_item_id)
        ).one()
        remaining = Decimal(str(remaining))
        if remaining < 0:
            logger.warning(f"Inventory item '{name}' ({menu_item.establishment}) is overdrawn: {remaining}")

        self.db.add(InventoryLog(
            inventory_item_id=ingredient.inventory_item_id,
            item_name=name,
            change=-amount,
            reason=InventoryLogReason.SALE.value,
            sale_id=sale.id,
            author=principal.name,
            establishment=menu_item.establishment,
        ))
        result.deductions.append(Deduction(
            ingredient_id=ingredient.id,
            inventory_item_id=ingredient.inventory_item_id,
            item_name=name,
            amount=amount,
            remaining=remaining,
        ))
