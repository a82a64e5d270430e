import dataclasses
import logging
from typing import Optional

from .errors import UnsupportedBitFieldError
from .tables import Sign, bit_field_size

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class GroupState:
    """Running state of the grouping pass."""
    group: int = 0
    total_bits: int = 0
    max_bits: int = 0
    type: str = ''
    sign: Optional[Sign] = None

    def starts_new_group(self, field):
        return (
            self.total_bits == 0
            or self.total_bits + field.bits > self.max_bits
            or field.type != self.type
            or field.sign != self.sign
        )

    def open_bit_group(self, field, sizes):
        size = bit_field_size(field.type, sizes)
        if size is None:
            raise UnsupportedBitFieldError(field.source or f"{field.type} {field.name}:{field.bits}")
        self.group += 1
        self.total_bits = field.bits
        self.max_bits = size * 8
        self.type = field.type
        self.sign = field.sign

    def close_bit_group(self):
        self.group += 1
        self.total_bits = 0
        self.max_bits = 0
        self.type = ''
        self.sign = None


def assign_groups(fields, sizes=None):
    """Number the fields so that bit-fields sharing one storage unit share a group.

    Every ordinary field and array gets a group of its own. A bit-field joins
    the preceding bit-field's group while type and sign match and the bits
    still fit the type's width; otherwise it opens a new group.
    """
    state = GroupState()
    grouped = []
    for field in fields:
        if not field.is_bit_field:
            state.close_bit_group()
        elif state.starts_new_group(field):
            state.open_bit_group(field, sizes)
        else:
            state.total_bits += field.bits
        grouped.append(dataclasses.replace(field, group=state.group))
        logger.debug("field %s (%s) -> group %d", field.name, field.type, state.group)
    return grouped
