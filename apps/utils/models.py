# utils/models.py

"""
Base record shared by every entity held in the cooperative store.

Records are plain dataclasses: the store assigns ``id`` on creation and hands
out copies, so a record is only ever changed through ``Repository.update``.
"""

from dataclasses import dataclass, asdict, fields
from typing import Optional
import logging

logger = logging.getLogger(__name__)


# =============================================================================
# BASE RECORD
# =============================================================================

@dataclass(kw_only=True)
class BaseRecord:
    """Common behaviour for store records"""

    id: Optional[int] = None

    # Fields never serialised (e.g. password hashes)
    HIDDEN_FIELDS = ()

    @classmethod
    def field_names(cls):
        return {f.name for f in fields(cls)}

    def to_dict(self):
        """Serialise the record for JSON responses"""
        data = asdict(self)
        for name in self.HIDDEN_FIELDS:
            data.pop(name, None)
        return data

    def __str__(self):
        return f"{self.__class__.__name__} #{self.id}"


def choice_values(choices):
    """Return the stored values of a Django-style choices list"""
    return [value for value, _label in choices]
