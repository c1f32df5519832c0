"""
Menu router: menu items and their recipes.

Reads are open to every member of the establishment; writes need
menu-management rights (managers and system admins).
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from flowops.core.deps import get_current_principal
from flowops.core.errors import Forbidden, ValidationError
from flowops.core.policy import Principal, can_manage_menu, resolve_establishment
from flowops.db.session import get_db
from flowops.models import InventoryItem, MenuItem
from flowops.schemas.common import MessageResponse
from flowops.schemas.menu import (
    IngredientCreate,
    IngredientResponse,
    IngredientUpdate,
    MenuItemCreate,
    MenuItemResponse,
    MenuItemUpdate,
)
from flowops.services.store import IngredientStore, MenuStore
from flowops.services.timeline import TimelineRecorder

router = APIRouter(prefix="/menu", tags=["menu"])
ingredients_router = APIRouter(prefix="/ingredients", tags=["menu"])


def require_menu_manager(principal: Principal = Depends(get_current_principal)) -> Principal:
    if not can_manage_menu(principal):
        raise Forbidden("Only managers can edit the menu")
    return principal


def check_inventory_link(db: Session, menu_item: MenuItem, inventory_item_id: Optional[UUID], field: str) -> None:
    """A recipe line may only link stock of its menu item's establishment."""
    if inventory_item_id is None:
        return
    item = db.get(InventoryItem, inventory_item_id)
    if item is None or item.establishment != menu_item.establishment:
        raise ValidationError.single(field, "Inventory item not found in this establishment")


@router.get("", response_model=List[MenuItemResponse])
def list_menu_items(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Menu items with their recipes."""
    return [MenuItemResponse.model_validate(item) for item in MenuStore(db).list(principal)]


@router.get("/{item_id}", response_model=MenuItemResponse)
def get_menu_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return MenuItemResponse.model_validate(MenuStore(db).get(item_id, principal))


@router.post("", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
def create_menu_item(
    item_data: MenuItemCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_menu_manager),
):
    """Create a menu item, optionally with its full recipe."""
    item = MenuStore(db).create(
        item_data,
        establishment=resolve_establishment(principal, item_data.establishment),
    )
    ingredients = IngredientStore(db)
    for index, ingredient_data in enumerate(item_data.ingredients):
        check_inventory_link(db, item, ingredient_data.inventory_item_id, f"ingredients.{index}.inventory_item_id")
        ingredients.create(ingredient_data, menu_item_id=item.id)

    TimelineRecorder(db).menu_item_created(principal, item)
    db.commit()
    db.refresh(item)
    return MenuItemResponse.model_validate(item)


@router.patch("/{item_id}", response_model=MenuItemResponse)
def update_menu_item(
    item_id: UUID,
    update_data: MenuItemUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_menu_manager),
):
    item = MenuStore(db).update(item_id, update_data, principal)
    db.commit()
    db.refresh(item)
    return MenuItemResponse.model_validate(item)


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_menu_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_menu_manager),
):
    """Delete a menu item and its recipe. Past sales keep their rows."""
    MenuStore(db).delete(item_id, principal)
    db.commit()
    return MessageResponse(message="Menu item deleted")


@router.post("/{item_id}/ingredients", response_model=IngredientResponse, status_code=status.HTTP_201_CREATED)
def add_ingredient(
    item_id: UUID,
    ingredient_data: IngredientCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_menu_manager),
):
    menu_item = MenuStore(db).get(item_id, principal)
    check_inventory_link(db, menu_item, ingredient_data.inventory_item_id, "inventory_item_id")

    ingredient = IngredientStore(db).create(ingredient_data, menu_item_id=menu_item.id)
    db.commit()
    db.refresh(ingredient)
    return IngredientResponse.model_validate(ingredient)


@ingredients_router.patch("/{ingredient_id}", response_model=IngredientResponse)
def update_ingredient(
    ingredient_id: UUID,
    update_data: IngredientUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_menu_manager),
):
    store = IngredientStore(db)
    ingredient = store.get(ingredient_id, principal)
    if "inventory_item_id" in update_data.model_fields_set:
        check_inventory_link(db, ingredient.menu_item, update_data.inventory_item_id, "inventory_item_id")

    ingredient = store.update(ingredient_id, update_data, principal)
    db.commit()
    db.refresh(ingredient)
    return IngredientResponse.model_validate(ingredient)


@ingredients_router.delete("/{ingredient_id}", response_model=MessageResponse)
def delete_ingredient(
    ingredient_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_menu_manager),
):
    IngredientStore(db).delete(ingredient_id, principal)
    db.commit()
    return MessageResponse(message="Ingredient deleted")
