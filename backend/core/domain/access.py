"""
core.domain.access: Role-based access helpers shared by the service layer
and the views.

The office has two staff roles (``accounts.models.UserRole``):

* ``administrator``: everything an editor can do, plus the reporting
  module.
* ``editor``: case encoding: create / update / delete cases, add notes
  and services.

The role travels inside the signed bearer token (``role`` claim), so the
helpers below work on any authenticated principal exposing a ``role``
attribute: the stateless ``TokenUser`` produced by the authentication
class as well as the ``UserRecord`` returned by the storage layer.

Usage::

    from core.domain.access import HasRole

    class ReportView(APIView):
        permission_classes = [IsAuthenticated, HasRole.of("administrator")]
"""

from __future__ import annotations

from typing import Any

from rest_framework.permissions import BasePermission


def get_user_role_name(user: Any) -> str | None:
    """
    Return the role name carried by ``user``, or ``None`` if it has none.

    Anonymous principals and tokens issued without a ``role`` claim both
    yield ``None``.
    """
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    role = getattr(user, "role", None)
    return str(role) if role else None


class HasRole(BasePermission):
    """
    DRF permission class granting access only to the configured roles.

    Build a concrete class with :meth:`of`; DRF instantiates permission
    classes without arguments.
    """

    allowed_roles: tuple[str, ...] = ()
    message = "You do not have permission to perform this action."

    @classmethod
    def of(cls, *roles: str) -> type[HasRole]:
        return type(
            f"HasRole_{'_'.join(roles)}",
            (cls,),
            {"allowed_roles": tuple(roles)},
        )

    def has_permission(self, request, view) -> bool:
        return get_user_role_name(request.user) in self.allowed_roles
