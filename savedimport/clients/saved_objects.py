"""Dependency provider for the saved objects store client."""

from savedimport.services.saved_objects_service import SavedObjectsService

_saved_objects_service: SavedObjectsService | None = None


def get_saved_objects_service() -> SavedObjectsService:
    """Get or create the SavedObjectsService singleton."""
    global _saved_objects_service
    if _saved_objects_service is None:
        _saved_objects_service = SavedObjectsService()
    return _saved_objects_service
