"""NetBox API access."""

from nbrecon.tools.base import InventoryAPI, ListResult
from nbrecon.tools.netbox_tool import NetBoxAPITool

__all__ = ["InventoryAPI", "ListResult", "NetBoxAPITool"]
