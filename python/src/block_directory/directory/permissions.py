"""
Authorization Gate

Checks that a caller may browse the block directory before any catalog traffic.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from ..config import directory_logger
from ..errors import Unauthorized

INSTALL_CAPABILITY = "install_plugins"
ACTIVATE_CAPABILITY = "activate_plugins"
REQUIRED_CAPABILITIES = (INSTALL_CAPABILITY, ACTIVATE_CAPABILITY)


@dataclass(frozen=True)
class CallerContext:
    """Who is asking, as resolved by the host application."""
    user_id: str | None = None
    capabilities: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


CapabilityCheck = Callable[[CallerContext, str], bool]


def caller_has_capability(caller: CallerContext, capability: str) -> bool:
    """Default capability check: look the capability up on the caller itself."""
    return capability in caller.capabilities


def authorization_required_code(caller: CallerContext) -> int:
    """401 for anonymous callers, 403 for authenticated callers lacking rights."""
    return 403 if caller.is_authenticated else 401


def check_search_permissions(caller: CallerContext, can: CapabilityCheck = caller_has_capability):
    """Raise Unauthorized unless the caller may install and activate modules."""
    if all(can(caller, capability) for capability in REQUIRED_CAPABILITIES):
        return

    directory_logger.warning(f"Block directory access denied for caller {caller.user_id}")
    raise Unauthorized(
        "Sorry, you are not allowed to browse the block directory.",
        status_code=authorization_required_code(caller)
    )
