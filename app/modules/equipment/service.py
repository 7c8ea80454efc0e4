from supabase import Client
from app.modules.equipment.schemas import EquipmentCreate, EquipmentUpdate, EquipmentResponse
from app.core.notifications import Notifier
from app.core.errors import report_failure
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class EquipmentService:
    def __init__(self, supabase: Client, notifier: Optional[Notifier] = None):
        self.supabase = supabase
        self.notifier = notifier or Notifier()

    def list_equipment(self, category: Optional[str] = None) -> List[EquipmentResponse]:
        """List equipment ordered by name, optionally for one category. Returns [] on failure."""
        try:
            query = self.supabase.table("equipment").select("*")
            if category:
                query = query.eq("category", category)
            result = query.order("name").execute()
            return [EquipmentResponse(**row) for row in (result.data or [])]
        except Exception as e:
            report_failure(logger, self.notifier, "Error loading equipment", e)
            return []

    def get_equipment(self, equipment_id: str) -> EquipmentResponse:
        try:
            result = self.supabase.table("equipment")\
                .select("*")\
                .eq("id", equipment_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Equipment not found")

            return EquipmentResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error loading equipment", e)

    def create_equipment(self, equipment_data: EquipmentCreate) -> EquipmentResponse:
        try:
            insert_data = equipment_data.model_dump()
            if insert_data["available_quantity"] is None:
                insert_data["available_quantity"] = equipment_data.total_quantity

            result = self.supabase.table("equipment").insert(insert_data).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create equipment")

            self.notifier.success("Equipment added", f"{equipment_data.name} was added successfully.")
            return EquipmentResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error adding equipment", e)

    def update_equipment(self, equipment_id: str, equipment_data: EquipmentUpdate) -> EquipmentResponse:
        try:
            update_data = equipment_data.model_dump(exclude_unset=True)
            if not update_data:
                return self.get_equipment(equipment_id)

            if "total_quantity" in update_data or "available_quantity" in update_data:
                current = self.get_equipment(equipment_id)
                total = update_data.get("total_quantity", current.total_quantity)
                available = update_data.get("available_quantity", current.available_quantity)
                if available > total:
                    raise HTTPException(status_code=400, detail="available_quantity cannot exceed total_quantity")

            result = self.supabase.table("equipment")\
                .update(update_data)\
                .eq("id", equipment_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Equipment not found")

            self.notifier.success("Equipment updated", f"{result.data[0]['name']} was updated successfully.")
            return EquipmentResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error updating equipment", e)

    def delete_equipment(self, equipment_id: str) -> bool:
        try:
            result = self.supabase.table("equipment")\
                .delete()\
                .eq("id", equipment_id)\
                .execute()

            self.notifier.success("Equipment deleted", "The equipment was deleted successfully.")
            return len(result.data or []) > 0
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error deleting equipment", e)

    def reserve_quantity(self, equipment_id: str, quantity: int) -> EquipmentResponse:
        """Take quantity out of available stock; 409 when not enough is available"""
        current = self.get_equipment(equipment_id)
        if current.available_quantity < quantity:
            raise HTTPException(
                status_code=409,
                detail=f"Only {current.available_quantity} {current.name} available, {quantity} requested"
            )
        try:
            result = self.supabase.table("equipment")\
                .update({"available_quantity": current.available_quantity - quantity})\
                .eq("id", equipment_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Equipment not found")
            return EquipmentResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error reserving equipment", e)

    def return_equipment(self, equipment_id: str, quantity: int, announce: bool = True) -> None:
        """Give quantity back to available stock through the return_equipment procedure.

        409 when the units would push available_quantity above total_quantity.
        """
        current = self.get_equipment(equipment_id)
        if current.available_quantity + quantity > current.total_quantity:
            raise HTTPException(
                status_code=409,
                detail=f"Cannot return {quantity} {current.name}: only "
                       f"{current.total_quantity - current.available_quantity} are out"
            )
        try:
            self.supabase.rpc("return_equipment", {
                "equipment_id": equipment_id,
                "quantity": quantity
            }).execute()
            logger.info(f"Returned {quantity} unit(s) of equipment {equipment_id}")
            if announce:
                self.notifier.success("Equipment returned", f"{quantity} unit(s) returned to stock.")
        except Exception as e:
            raise report_failure(logger, self.notifier, "Error returning equipment", e)
