from collections.abc import Mapping

from rest_framework.exceptions import ValidationError

from core.exceptions import NoUpdatableFields


class PatchableFieldsMixin:
    """
    Restrict update payloads to an explicit set of patchable fields.

    Keys outside ``patchable_fields`` are dropped; a request carrying none
    of them is rejected before the instance is touched.
    """
    patchable_fields = frozenset()

    def get_patch_data(self, data):
        if not isinstance(data, Mapping):
            raise ValidationError({'non_field_errors': ['Request body must be a JSON object.']})

        updates = {key: data[key] for key in data if key in self.patchable_fields}
        if not updates:
            raise NoUpdatableFields()
        return updates
