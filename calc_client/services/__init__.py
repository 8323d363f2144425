from .calc_service import ServiceClient, create_client

__all__ = ["ServiceClient", "create_client"]
