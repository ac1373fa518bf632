# app/modules/packing/schemas.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.core.workflow import LookupPolicy, PackageType, TaskStatus

class PackingTaskCreate(BaseModel):
    order_id: int
    picking_task_id: Optional[int] = Field(None, description="Si se omite se busca la tarea completada del pedido")
    picking_cart_id: Optional[int] = Field(None, description="Si se omite se busca el carro completo de la tarea")
    assigned_to: Optional[str] = None
    lookup_policy: LookupPolicy = Field(
        LookupPolicy.MOST_RECENT,
        description="Criterio cuando la búsqueda automática encuentra varios candidatos"
    )

class CompletePackingRequest(BaseModel):
    weight: float = Field(..., gt=0, description="Peso del paquete")
    package_type: PackageType

class PackingTaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_id: int
    picking_task_id: Optional[int] = None
    picking_cart_id: Optional[int] = None
    assigned_to: Optional[str] = None
    status: TaskStatus
    package_weight: Optional[float] = None
    package_type: Optional[PackageType] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
