from typing import Any, Mapping

from bootcamp_directory.domain.exceptions import AuthorizationError
from bootcamp_directory.domain.models.user import User


def ensure_can_modify(document: Mapping[str, Any], actor: User, resource: str) -> None:
    """Only the document's owner or an admin may change it."""
    if actor.is_admin:
        return
    if document.get("user_id") != actor.id:
        raise AuthorizationError(f"User {actor.id} is not authorized to modify {resource} {document.get('id')}")
