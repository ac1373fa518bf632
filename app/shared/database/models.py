from sqlalchemy import Column, Integer, String, Boolean, DateTime, Float, Text, ForeignKey, Numeric, Table
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.config.database import Base
from app.core.exceptions import CapacityError
from app.core.workflow import (
    InvoiceStatus, InvoiceItemStatus, LocationStatus, PlacementCartStatus,
    OrderStatus, OrderItemStatus, PickingTaskStatus, PickingItemStatus,
    PickingCartStatus, TaskStatus
)

class TimestampMixin:
    """Mixin para timestamps automáticos"""
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

# ===== USUARIOS =====

class User(Base):
    """Usuario del almacén (admin, manager, worker)"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(150), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(50), default='worker', nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.current_timestamp())
    last_login = Column(DateTime)

# ===== CATÁLOGO =====

class Product(Base, TimestampMixin):
    """Producto identificado por SKU"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String(255), unique=True, nullable=False, index=True)
    product_id = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    barcode = Column(String(255), index=True)
    category = Column(String(255), default="General", nullable=False)
    length = Column(Float)
    width = Column(Float)
    height = Column(Float)
    weight = Column(Float)

    @property
    def dimensions(self):
        return {
            "length": self.length,
            "width": self.width,
            "height": self.height,
            "weight": self.weight
        }

# ===== UBICACIONES =====

class Location(Base):
    """Celda de almacenamiento con capacidad fija"""
    __tablename__ = "locations"
    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    id = Column(Integer, primary_key=True, index=True)
    barcode = Column(String(255), unique=True, nullable=False, index=True)
    zone = Column(String(50), nullable=False)
    aisle = Column(String(50), nullable=False)
    rack = Column(String(50), nullable=False)
    level = Column(String(50), nullable=False)
    position = Column(String(50), nullable=False)
    capacity = Column(Integer, nullable=False)
    used_capacity = Column(Integer, default=0, nullable=False)
    status = Column(String(50), default=LocationStatus.AVAILABLE.value, nullable=False)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    @property
    def free_capacity(self) -> int:
        return self.capacity - (self.used_capacity or 0)

    def refresh_status(self) -> None:
        """El estado siempre se deriva de la ocupación"""
        used = self.used_capacity or 0
        if used <= 0:
            self.status = LocationStatus.AVAILABLE.value
        elif used >= self.capacity:
            self.status = LocationStatus.OCCUPIED.value
        else:
            self.status = LocationStatus.RESERVED.value

    def set_used_capacity(self, used: int) -> None:
        if used < 0 or used > self.capacity:
            raise CapacityError(
                f"Capacidad inválida para la ubicación {self.barcode}",
                details={
                    "location_id": self.id,
                    "capacity": self.capacity,
                    "requested_used_capacity": used
                }
            )
        self.used_capacity = used
        self.refresh_status()

    def occupy(self, quantity: int) -> None:
        if (self.used_capacity or 0) + quantity > self.capacity:
            raise CapacityError(
                "Capacidad insuficiente en la ubicación",
                details={
                    "location_id": self.id,
                    "requested": quantity,
                    "available": self.free_capacity
                }
            )
        self.set_used_capacity((self.used_capacity or 0) + quantity)

    def release(self, quantity: int) -> None:
        self.set_used_capacity(max(0, (self.used_capacity or 0) - quantity))

# ===== RECEPCIÓN =====

class Invoice(Base, TimestampMixin):
    """Factura de proveedor"""
    __tablename__ = "invoices"
    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    id = Column(Integer, primary_key=True, index=True)
    invoice_number = Column(String(255), unique=True, nullable=False)
    barcode = Column(String(255))
    status = Column(String(50), default=InvoiceStatus.NEW.value, nullable=False)
    completed_at = Column(DateTime)

    # Relationships
    items = relationship(
        "InvoiceItem", back_populates="invoice",
        cascade="all, delete-orphan", order_by="InvoiceItem.id"
    )

class InvoiceItem(Base):
    """Línea de factura"""
    __tablename__ = "invoice_items"
    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False, index=True)
    product_id = Column(String(255), nullable=False)
    sku = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    barcode = Column(String(255))
    expected_quantity = Column(Integer, nullable=False)
    actual_quantity = Column(Integer, default=0, nullable=False)
    placed_quantity = Column(Integer, default=0, nullable=False)
    status = Column(String(50), default=InvoiceItemStatus.PENDING.value, nullable=False)
    placement_cart_id = Column(Integer, ForeignKey("placement_carts.id"))

    # Relationships
    invoice = relationship("Invoice", back_populates="items")

class PlacementCart(Base):
    """Tarima/carro de acomodo con mercancía contada pendiente de ubicar"""
    __tablename__ = "placement_carts"
    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    id = Column(Integer, primary_key=True, index=True)
    status = Column(String(50), default=PlacementCartStatus.FREE.value, nullable=False)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    # Relationships
    items = relationship(
        "PlacementCartItem", back_populates="cart",
        cascade="all, delete-orphan", order_by="PlacementCartItem.id"
    )

class PlacementCartItem(Base):
    __tablename__ = "placement_cart_items"

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("placement_carts.id"), nullable=False, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False)
    invoice_item_id = Column(Integer, ForeignKey("invoice_items.id"), nullable=False)
    sku = Column(String(255), nullable=False)
    quantity = Column(Integer, default=0, nullable=False)
    placed_quantity = Column(Integer, default=0, nullable=False)

    # Relationships
    cart = relationship("PlacementCart", back_populates="items")

# ===== INVENTARIO =====

class InventoryRecord(Base):
    """Fila del libro de inventario: cantidad de un SKU en una ubicación"""
    __tablename__ = "inventory"
    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"))
    invoice_item_id = Column(Integer, ForeignKey("invoice_items.id"))
    sku = Column(String(255), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    status = Column(String(50), default="placed", nullable=False)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    # Relationships
    location = relationship("Location")

# ===== PEDIDOS =====

class Order(Base, TimestampMixin):
    """Pedido de cliente"""
    __tablename__ = "orders"
    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String(255), unique=True, nullable=False)
    external_order_id = Column(String(255))
    customer_name = Column(String(255))
    customer_address = Column(Text)
    customer_phone = Column(String(50))
    customer_email = Column(String(255))
    status = Column(String(50), default=OrderStatus.NEW.value, nullable=False, index=True)
    priority = Column(Integer, default=0, nullable=False)

    # Relationships
    items = relationship(
        "OrderItem", back_populates="order",
        cascade="all, delete-orphan", order_by="OrderItem.id"
    )

    @property
    def customer(self):
        return {
            "name": self.customer_name,
            "address": self.customer_address,
            "phone": self.customer_phone,
            "email": self.customer_email
        }

class OrderItem(Base):
    __tablename__ = "order_items"
    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    sku = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    picked_quantity = Column(Integer, default=0, nullable=False)
    status = Column(String(50), default=OrderItemStatus.PENDING.value, nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")

# ===== PICKING =====

picking_task_orders = Table(
    "picking_task_orders",
    Base.metadata,
    Column("picking_task_id", Integer, ForeignKey("picking_tasks.id"), primary_key=True),
    Column("order_id", Integer, ForeignKey("orders.id"), primary_key=True),
)

class PickingTask(Base):
    """Tarea de recolección que agrupa líneas de uno o varios pedidos"""
    __tablename__ = "picking_tasks"
    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    id = Column(Integer, primary_key=True, index=True)
    assigned_to = Column(String(255))
    status = Column(String(50), default=PickingTaskStatus.CREATED.value, nullable=False, index=True)
    started_at = Column(DateTime)
    completed_at = Column(DateTime)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    # Relationships
    orders = relationship("Order", secondary=picking_task_orders, order_by="Order.id")
    items = relationship(
        "PickingItem", back_populates="task",
        cascade="all, delete-orphan", order_by="PickingItem.id"
    )

    @property
    def order_ids(self):
        return [o.id for o in self.orders]

class PickingItem(Base):
    """Línea de picking: cantidad de un ítem de pedido a tomar de una ubicación"""
    __tablename__ = "picking_items"
    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("picking_tasks.id"), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    order_item_id = Column(Integer, ForeignKey("order_items.id"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    sku = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    picked_quantity = Column(Integer, default=0, nullable=False)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False)
    status = Column(String(50), default=PickingItemStatus.PENDING.value, nullable=False)

    # Relationships
    task = relationship("PickingTask", back_populates="items")
    location = relationship("Location")

    @property
    def remaining_quantity(self) -> int:
        return self.quantity - (self.picked_quantity or 0)

class PickingCart(Base):
    """Carro físico de recolección"""
    __tablename__ = "picking_carts"
    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    id = Column(Integer, primary_key=True, index=True)
    barcode = Column(String(255), unique=True, nullable=False)
    status = Column(String(50), default=PickingCartStatus.FREE.value, nullable=False, index=True)
    assigned_to = Column(String(255))
    picking_task_id = Column(Integer, ForeignKey("picking_tasks.id"))
    created_at = Column(DateTime, server_default=func.current_timestamp())
    updated_at = Column(DateTime, server_default=func.current_timestamp(), onupdate=func.current_timestamp())

    # Relationships
    items = relationship(
        "PickingCartItem", back_populates="cart",
        cascade="all, delete-orphan", order_by="PickingCartItem.id"
    )

    def release(self) -> None:
        """Deja el carro libre, sin tarea, responsable ni mercancía"""
        self.status = PickingCartStatus.FREE.value
        self.picking_task_id = None
        self.assigned_to = None
        self.items.clear()

class PickingCartItem(Base):
    __tablename__ = "picking_cart_items"

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("picking_carts.id"), nullable=False, index=True)
    sku = Column(String(255), nullable=False)
    quantity = Column(Integer, default=0, nullable=False)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)

    # Relationships
    cart = relationship("PickingCart", back_populates="items")

# ===== EMPAQUE Y DESPACHO =====

class PackingTask(Base):
    __tablename__ = "packing_tasks"
    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    picking_task_id = Column(Integer, ForeignKey("picking_tasks.id"))
    picking_cart_id = Column(Integer, ForeignKey("picking_carts.id"))
    assigned_to = Column(String(255))
    status = Column(String(50), default=TaskStatus.CREATED.value, nullable=False, index=True)
    package_weight = Column(Float)
    package_type = Column(String(50))
    started_at = Column(DateTime)
    completed_at = Column(DateTime)
    created_at = Column(DateTime, server_default=func.current_timestamp())

class ShippingTask(Base):
    __tablename__ = "shipping_tasks"
    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    packing_task_id = Column(Integer, ForeignKey("packing_tasks.id"), nullable=False)
    assigned_to = Column(String(255))
    status = Column(String(50), default=TaskStatus.CREATED.value, nullable=False, index=True)
    tracking_number = Column(String(255))
    carrier = Column(String(255))
    shipping_method = Column(String(255))
    shipping_cost = Column(Numeric(10, 2))
    cancellation_reason = Column(Text)

    # Dirección copiada del cliente del pedido
    shipping_name = Column(String(255))
    shipping_address = Column(Text)
    shipping_phone = Column(String(50))
    shipping_email = Column(String(255))

    started_at = Column(DateTime)
    completed_at = Column(DateTime)
    created_at = Column(DateTime, server_default=func.current_timestamp())

