"""Item endpoints - one pipeline per operation, plus the components they share."""

from itemkeeper.services.items.contexts import (
    CreateItemRequest,
    DeleteItemRequest,
    GetItemRequest,
    ListItemsRequest,
    UpdateItemRequest,
)
from itemkeeper.services.items.pipelines import (
    CreateItemService,
    DeleteItemService,
    GetItemService,
    ItemServicePipeline,
    ListItemsService,
    UpdateItemService,
)

__all__ = [
    "CreateItemRequest",
    "ListItemsRequest",
    "GetItemRequest",
    "UpdateItemRequest",
    "DeleteItemRequest",
    "ItemServicePipeline",
    "CreateItemService",
    "ListItemsService",
    "GetItemService",
    "UpdateItemService",
    "DeleteItemService",
]
