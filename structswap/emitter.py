import dataclasses
import logging
from typing import Optional

from .errors import UnsupportedBitFieldError
from .grouper import assign_groups
from .parser import Field, extract_struct_name, parse_fields
from .tables import Direction, bit_field_size, select_converter, sign_keyword

logger = logging.getLogger(__name__)

DEFAULT_STRUCT_NAME = 'MyStruct'
POINTER_NAME = 'p'
INDENT = '    '


@dataclasses.dataclass
class OffsetState:
    """Last ordinary field seen, and the bit-field bytes emitted after it."""
    anchor: Optional[Field] = None
    offset: int = 0


def walk_groups(fields, sizes=None):
    """Yield the first field of every group with the offset state in effect for it."""
    state = OffsetState()
    previous_group = None
    for field in fields:
        if field.group == previous_group:
            continue
        previous_group = field.group
        yield field, dataclasses.replace(state)
        if field.is_bit_field:
            size = bit_field_size(field.type, sizes)
            if size is None:
                raise UnsupportedBitFieldError(field.source or f"{field.type} {field.name}:{field.bits}")
            state.offset += size
        else:
            state.anchor = field
            state.offset = 0


def member(name):
    return f"{POINTER_NAME}->{name}"


def unit_address(state):
    if state.anchor is None:
        address = f"(char*){POINTER_NAME}"
    else:
        anchor = member(state.anchor.name)
        address = f"(char*)&{anchor} + sizeof({anchor})"
    if state.offset:
        address += f" + {state.offset}"
    return address


def convert_statements(field, state, primitive):
    if field.is_bit_field:
        target = f"*({sign_keyword(field.sign)}{field.type}*)({unit_address(state)})"
        return [f"{INDENT}{target} = {primitive}({target});"]
    if field.is_array:
        array = member(field.name)
        element = f"{array}[i]"
        return [
            f"{INDENT}for (size_t i = 0; i < sizeof({array}) / sizeof({array}[0]); ++i)",
            f"{INDENT}{INDENT}{element} = {primitive}({element});",
        ]
    target = member(field.name)
    return [f"{INDENT}{target} = {primitive}({target});"]


def function_name(struct_name, direction):
    return f"Reverse{struct_name}To{direction.value}"


def emit_function(struct_name, fields, direction, nothrow=False, sizes=None):
    qualifier = ' noexcept' if nothrow else ''
    lines = [f"void {function_name(struct_name, direction)}({struct_name}* {POINTER_NAME}){qualifier}", '{']
    for field, state in walk_groups(fields, sizes):
        primitive = select_converter(field.type, direction, sizes)
        if not primitive:
            continue
        lines.extend(convert_statements(field, state, primitive))
    lines.append('}')
    return lines


def resolve_struct_name(lines, placeholder=DEFAULT_STRUCT_NAME):
    name = extract_struct_name(lines)
    if not name:
        logger.warning("no struct name found, using %s", placeholder)
        return placeholder
    return name


def prepare(lines, sizes=None, placeholder=DEFAULT_STRUCT_NAME):
    """Parse and group the struct text.

    Returns (struct name, grouped fields); the name is None when no field is
    recognized.
    """
    lines = list(lines)
    fields = assign_groups(parse_fields(lines), sizes)
    if not fields:
        return None, []
    struct_name = resolve_struct_name(lines, placeholder)
    logger.debug("struct %s: %d fields", struct_name, len(fields))
    return struct_name, fields


def render(struct_name, fields, nothrow=False, sizes=None):
    if not fields:
        return []
    output = emit_function(struct_name, fields, Direction.TO_LITTLE, nothrow, sizes)
    output.append('')
    output.extend(emit_function(struct_name, fields, Direction.TO_BIG, nothrow, sizes))
    return output


def generate(lines, nothrow=False, sizes=None, placeholder=DEFAULT_STRUCT_NAME):
    """Generate the to-little-endian and to-big-endian functions for a struct.

    Returns the output lines, or an empty list when no field is recognized.
    Raises UnsupportedBitFieldError before producing anything when a
    bit-field type has no storage size.
    """
    struct_name, fields = prepare(lines, sizes, placeholder)
    return render(struct_name, fields, nothrow, sizes)
