"""Services - endpoint pipelines built on itemkeeper.pipeline."""

from itemkeeper.services.items import (
    CreateItemService,
    DeleteItemService,
    GetItemService,
    ListItemsService,
    UpdateItemService,
)

__all__ = [
    "CreateItemService",
    "ListItemsService",
    "GetItemService",
    "UpdateItemService",
    "DeleteItemService",
]
