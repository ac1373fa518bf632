# app/core/workflow.py
"""
Estados y tablas de transición de todas las entidades del almacén.

Toda validación de "desde qué estado se puede pasar a cuál" pasa por
`ensure_transition` / `ensure_status`; los servicios nunca comparan
strings de estado a mano.
"""
from enum import Enum
from typing import Dict, Iterable, Set, Type, Union

from app.core.exceptions import InvalidTransitionError, ValidationError


class InvoiceStatus(str, Enum):
    NEW = "new"
    IN_PROGRESS = "in_progress"
    ACCEPTED = "accepted"
    ACCEPTED_WITH_DISCREPANCIES = "accepted_with_discrepancies"

class InvoiceItemStatus(str, Enum):
    PENDING = "pending"
    SCANNED = "scanned"
    COUNTED = "counted"

class LocationStatus(str, Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    OCCUPIED = "occupied"

class PlacementCartStatus(str, Enum):
    FREE = "free"
    OCCUPIED = "occupied"

class OrderStatus(str, Enum):
    NEW = "new"
    PROCESSING = "processing"
    PICKING = "picking"
    PICKED = "picked"
    PACKING = "packing"
    PACKED = "packed"
    SHIPPING = "shipping"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

class OrderItemStatus(str, Enum):
    PENDING = "pending"
    RESERVED = "reserved"
    PICKED = "picked"
    PACKED = "packed"
    CANCELLED = "cancelled"

class PickingTaskStatus(str, Enum):
    CREATED = "created"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class PickingItemStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    PICKED = "picked"
    CANCELLED = "cancelled"

class PickingCartStatus(str, Enum):
    FREE = "free"
    ASSIGNED = "assigned"
    IN_USE = "in_use"
    COMPLETE = "complete"

class TaskStatus(str, Enum):
    """Estados comunes de tareas de empaque y despacho"""
    CREATED = "created"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class PackageType(str, Enum):
    BOX = "box"
    ENVELOPE = "envelope"
    PALLET = "pallet"
    OTHER = "other"

class LookupPolicy(str, Enum):
    """Qué hacer cuando una búsqueda implícita devuelve varios candidatos"""
    FIRST = "first"
    MOST_RECENT = "most_recent"
    ERROR_ON_AMBIGUOUS = "error_on_ambiguous"


# ===== TABLAS DE TRANSICIÓN =====

_ORDER_OPEN = {
    OrderStatus.NEW, OrderStatus.PROCESSING, OrderStatus.PICKING,
    OrderStatus.PICKED, OrderStatus.PACKING, OrderStatus.PACKED,
    OrderStatus.SHIPPING,
}

TRANSITIONS: Dict[str, Dict[Enum, Set[Enum]]] = {
    "invoice": {
        InvoiceStatus.NEW: {InvoiceStatus.IN_PROGRESS},
        InvoiceStatus.IN_PROGRESS: {
            InvoiceStatus.ACCEPTED,
            InvoiceStatus.ACCEPTED_WITH_DISCREPANCIES,
        },
    },
    "invoice_item": {
        InvoiceItemStatus.PENDING: {InvoiceItemStatus.SCANNED},
        InvoiceItemStatus.SCANNED: {InvoiceItemStatus.COUNTED},
    },
    "placement_cart": {
        PlacementCartStatus.FREE: {PlacementCartStatus.OCCUPIED},
        PlacementCartStatus.OCCUPIED: {PlacementCartStatus.OCCUPIED, PlacementCartStatus.FREE},
    },
    "order": {
        OrderStatus.NEW: {OrderStatus.PROCESSING},
        OrderStatus.PROCESSING: {OrderStatus.PICKING},
        OrderStatus.PICKING: {OrderStatus.PICKED},
        OrderStatus.PICKED: {OrderStatus.PACKING},
        OrderStatus.PACKING: {OrderStatus.PACKED},
        OrderStatus.PACKED: {OrderStatus.SHIPPING},
        # la cancelación del despacho devuelve el pedido a "packed"
        OrderStatus.SHIPPING: {OrderStatus.SHIPPED, OrderStatus.PACKED},
        OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    },
    "order_item": {
        OrderItemStatus.PENDING: {OrderItemStatus.RESERVED},
        OrderItemStatus.RESERVED: {OrderItemStatus.PICKED},
        OrderItemStatus.PICKED: {OrderItemStatus.PACKED},
    },
    "picking_task": {
        PickingTaskStatus.CREATED: {PickingTaskStatus.IN_PROGRESS, PickingTaskStatus.CANCELLED},
        PickingTaskStatus.ASSIGNED: {PickingTaskStatus.IN_PROGRESS, PickingTaskStatus.CANCELLED},
        PickingTaskStatus.IN_PROGRESS: {PickingTaskStatus.COMPLETED, PickingTaskStatus.CANCELLED},
    },
    "picking_item": {
        PickingItemStatus.PENDING: {PickingItemStatus.IN_PROGRESS},
        PickingItemStatus.IN_PROGRESS: {PickingItemStatus.IN_PROGRESS, PickingItemStatus.PICKED},
    },
    "picking_cart": {
        PickingCartStatus.FREE: {PickingCartStatus.ASSIGNED},
        PickingCartStatus.ASSIGNED: {PickingCartStatus.IN_USE, PickingCartStatus.FREE},
        PickingCartStatus.IN_USE: {
            PickingCartStatus.IN_USE, PickingCartStatus.COMPLETE, PickingCartStatus.FREE,
        },
        PickingCartStatus.COMPLETE: {PickingCartStatus.FREE},
    },
    "packing_task": {
        TaskStatus.CREATED: {TaskStatus.IN_PROGRESS, TaskStatus.CANCELLED},
        TaskStatus.IN_PROGRESS: {TaskStatus.COMPLETED, TaskStatus.CANCELLED},
    },
    "shipping_task": {
        TaskStatus.CREATED: {TaskStatus.IN_PROGRESS, TaskStatus.CANCELLED},
        TaskStatus.IN_PROGRESS: {TaskStatus.COMPLETED, TaskStatus.CANCELLED},
    },
}

for _status in _ORDER_OPEN:
    TRANSITIONS["order"].setdefault(_status, set()).add(OrderStatus.CANCELLED)


StatusLike = Union[Enum, str]


def _value(status: StatusLike) -> str:
    return status.value if isinstance(status, Enum) else str(status)


def can_transition(entity: str, current: StatusLike, target: StatusLike) -> bool:
    table = TRANSITIONS[entity]
    current_value, target_value = _value(current), _value(target)
    for source, targets in table.items():
        if source.value == current_value:
            return any(t.value == target_value for t in targets)
    return False


def ensure_transition(entity: str, current: StatusLike, target: StatusLike) -> None:
    """Lanza InvalidTransitionError si `current -> target` no está en la tabla"""
    if not can_transition(entity, current, target):
        raise InvalidTransitionError(
            f"No se puede pasar {entity} de '{_value(current)}' a '{_value(target)}'",
            details={
                "entity": entity,
                "current": _value(current),
                "target": _value(target),
            }
        )


def ensure_status(
    entity: str,
    current: StatusLike,
    expected: Union[StatusLike, Iterable[StatusLike]]
) -> None:
    """Guarda "debe estar en estado X" con el mismo formato de error"""
    if isinstance(expected, (str, Enum)):
        expected = [expected]
    expected_values = [_value(e) for e in expected]
    if _value(current) not in expected_values:
        raise InvalidTransitionError(
            f"{entity} en estado '{_value(current)}'. "
            f"Estado requerido: {', '.join(expected_values)}",
            details={
                "entity": entity,
                "current": _value(current),
                "expected": expected_values,
            }
        )


def parse_status(enum_cls: Type[Enum], value: str) -> Enum:
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(
            f"Estado inválido: {value}",
            details={"allowed": [e.value for e in enum_cls]}
        )
