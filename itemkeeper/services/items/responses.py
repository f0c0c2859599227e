"""
Response building for item pipelines.

Responses are plain dicts with camelCase keys. Envelopes and versioning
belong to the transport layer.
"""

from __future__ import annotations

from typing import Any

from itemkeeper.core.utils import utc_now
from itemkeeper.pipeline.context import PipelineContext
from itemkeeper.services.items.contexts import (
    ItemCreationContext,
    ItemRetrievalContext,
    SingleItemContext,
)


class ItemResponseBuilder:
    """Builds the dict returned by each item pipeline."""

    def build_create_response(self, context: ItemCreationContext) -> dict[str, Any]:
        response = context.item.to_dict()
        return self._finish(response, context)

    def build_list_response(
        self,
        context: ItemRetrievalContext,
        visible_ids: list[str],
    ) -> dict[str, Any]:
        items = [context.item_details[i] for i in visible_ids]
        response: dict[str, Any] = {
            "items": items,
            "count": len(items),
            "hasMore": context.next_token is not None,
            "userId": context.user.user_id,
            "limit": context.limit,
            "sortOrder": context.sort_order,
            "metadata": {
                "rawItemCount": context.get_metadata("rawItemCount", 0),
                "filteredItemCount": len(items),
            },
        }
        if context.next_token is not None:
            response["nextToken"] = context.next_token
        if context.team_id:
            response["teamId"] = context.team_id
        return self._finish(response, context)

    def build_get_response(self, context: SingleItemContext) -> dict[str, Any]:
        response = dict(context.item_details)
        response["found"] = True
        return self._finish(response, context)

    def build_update_response(self, context: SingleItemContext) -> dict[str, Any]:
        item = context.item
        response = {
            "id": item.id,
            "message": item.message,
            "userId": item.user_id,
            "updatedAt": item.updated_at.isoformat(),
            "updated": True,
        }
        return self._finish(response, context)

    def build_delete_response(self, context: SingleItemContext) -> dict[str, Any]:
        response = {
            "id": context.item_id,
            "userId": context.item.user_id,
            "deleted": context.deleted,
            "deletedAt": utc_now().isoformat(),
        }
        return self._finish(response, context)

    def _finish(self, response: dict[str, Any], context: PipelineContext) -> dict[str, Any]:
        response["requestId"] = context.request_id
        warnings = context.get_metadata("warnings")
        if warnings:
            response["warnings"] = [w.to_api_error().model_dump() for w in warnings]
        return response
