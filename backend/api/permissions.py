from rest_framework.permissions import BasePermission

from .domain_core import Role, get_user_role


class HasSchoolRole(BasePermission):
    """Allow authenticated users whose profile role is in ``allowed_roles``."""
    allowed_roles = ()
    message = "You do not have permission to perform this action."

    def has_permission(self, request, view):
        role = get_user_role(request.user)
        return role is not None and role in self.allowed_roles


class IsAdminOrPrincipal(HasSchoolRole):
    allowed_roles = (Role.ADMIN, Role.PRINCIPAL)


class IsTeacher(HasSchoolRole):
    allowed_roles = (Role.TEACHER,)
