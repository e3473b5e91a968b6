# Masters
from app.models.masters.category_models import Category
from app.models.masters.product_models import Product

# Inventory
from app.models.inventory.warehouse_models import Warehouse
from app.models.inventory.warehouse_inventory_models import WarehouseInventory
from app.models.inventory.inventory_transfer_models import InventoryTransfer
