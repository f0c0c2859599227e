"""HTTP binding for the item pipelines."""

from itemkeeper.api.app import create_app

__all__ = ["create_app"]
