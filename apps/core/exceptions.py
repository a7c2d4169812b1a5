# core/exceptions.py

"""
Error taxonomy for cooperative operations.

- NotFound: a referenced member, user, loan, dividend or task does not exist
- InvalidArgument: a domain rule rejected the input before any mutation
- InvariantViolation: the store is inconsistent (programming error)
"""

from django.core.exceptions import ObjectDoesNotExist, ValidationError


class NotFound(ObjectDoesNotExist):
    """Referenced entity does not exist"""

    def __init__(self, entity, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} #{entity_id} not found")


class InvalidArgument(ValidationError):
    """Input rejected by a domain rule"""

    def __str__(self):
        return '; '.join(self.messages)


class InvariantViolation(RuntimeError):
    """Store state that correct operation never produces"""
