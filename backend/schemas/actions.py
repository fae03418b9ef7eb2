"""
Result variants returned by the mutation handlers.

A handler never raises to signal a redirect: it returns Redirect, so a generic
`except Exception` around persistence can't swallow it. Routes translate each
variant into an HTTP response.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Union

from backend.schemas.auth import Principal


@dataclass(frozen=True)
class Redirect:
    """Navigate the browser to `path` (rendered as 303 See Other)."""
    path: str


@dataclass(frozen=True)
class ActionSuccess:
    """Acknowledgment without navigation (used by delete)."""
    message: str


@dataclass(frozen=True)
class ActionError:
    """Generic user-facing failure (persistence errors)."""
    message: str


@dataclass
class FormState:
    """
    State handed back to a form after a failed submission.

    Attributes:
        message: Summary shown above the form
        errors: Field name -> list of messages (validation failures only)
        is_validation_error: True when nothing was written because input was rejected
    """
    message: Optional[str] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)
    is_validation_error: bool = False


@dataclass(frozen=True)
class ActionContext:
    """
    Explicit request context for a mutation handler.

    Attributes:
        principal: The authenticated principal, or None
        form: Submitted fields as string key/value pairs
    """
    principal: Optional[Principal]
    form: Mapping[str, Optional[str]]


MutationResult = Union[Redirect, FormState]
DeleteResult = Union[ActionSuccess, ActionError]
