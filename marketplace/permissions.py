from rest_framework import permissions

from utils.rbac import is_vendor


class IsVendor(permissions.BasePermission):
    """
    Vendors (and admins) only. Used for catalog writes and order status changes.
    """

    message = "Vendor access required"

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and is_vendor(request.user))
