"""Reply generation for the companion conversation."""

from zenstudent.services.orchestration.companion_responder import (
    CompanionResponder,
    ResponseCollaborator,
)

__all__ = ["CompanionResponder", "ResponseCollaborator"]
