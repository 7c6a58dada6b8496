from .external_card_store import ExternalCardStoreProtocol, ExternalContainer, PermissionState

__all__ = ["ExternalCardStoreProtocol", "ExternalContainer", "PermissionState"]
