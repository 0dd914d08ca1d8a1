from rest_framework import permissions


class IsOwner(permissions.BasePermission):
    """
    Permission to only allow farmers to access their own records
    """

    def has_object_permission(self, request, view, obj):
        if hasattr(obj, 'user_id'):
            return obj.user_id == request.user.id

        return obj == request.user
