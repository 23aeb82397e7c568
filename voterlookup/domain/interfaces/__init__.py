from .i_registry_gateway import FetchedToken, IRegistryGateway

__all__ = [
    "FetchedToken",
    "IRegistryGateway",
]
