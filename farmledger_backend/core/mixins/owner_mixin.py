from django.http import Http404
from rest_framework.exceptions import NotFound


class OwnerQuerysetMixin:
    """
    Restrict a view's queryset to rows owned by the requesting user.

    Views set ``owner_field`` when the owner lives somewhere other than ``user``.
    Rows owned by someone else are reported as missing, never as forbidden.
    """
    owner_field = 'user'
    not_found_message = 'Not found.'

    def get_queryset(self):
        queryset = super().get_queryset()
        return queryset.filter(**{self.owner_field: self.request.user})

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise NotFound(self.not_found_message)

    def perform_create(self, serializer):
        serializer.save(**{self.owner_field: self.request.user})
