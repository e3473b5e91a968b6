# app/routers/__init__.py

from .masters.category_router import router as category_router
from .masters.product_router import router as product_router

from .inventory.warehouse_inventory_router import router as warehouse_inventory_router
from .inventory.warehouse_router import router as warehouse_router


__all__ = [
"category_router",
"product_router",

"warehouse_inventory_router",
"warehouse_router",
]
