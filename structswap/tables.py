import enum

# Type sizes in bytes.
# 'long' is 8 on most 64-bit Unix targets; kept at 4 unless overridden in the config.
TYPE_SIZES = {
    'char': 1,
    'short': 2,
    'int': 4,
    'long': 4,
    'long long': 8,
}

INTEGER_TYPES = ('short', 'int', 'long', 'long long')


class Sign(enum.Enum):
    DEFAULT = 'default'
    SIGNED = 'signed'
    UNSIGNED = 'unsigned'


SIGN_KEYWORDS = {
    Sign.DEFAULT: '',
    Sign.SIGNED: 'signed ',
    Sign.UNSIGNED: 'unsigned ',
}


class Direction(enum.Enum):
    """Target byte order of a generated function."""
    TO_LITTLE = 'LittleEndian'
    TO_BIG = 'BigEndian'


# (to big, to little) primitive for each swappable type
CONVERTERS = {
    'short': ('htons', 'ntohs'),
    'int': ('htonl', 'ntohl'),
    'long': ('htonl', 'ntohl'),
    'long long': ('htonll', 'ntohll'),
    'float': ('htonf', 'ntohf'),
    'double': ('htond', 'ntohd'),
}

# integer primitives by storage width, for configured type sizes
WIDTH_CONVERTERS = {
    2: ('htons', 'ntohs'),
    4: ('htonl', 'ntohl'),
    8: ('htonll', 'ntohll'),
}

PRIMITIVE_WIDTHS = {
    'htons': 2, 'ntohs': 2,
    'htonl': 4, 'ntohl': 4,
    'htonll': 8, 'ntohll': 8,
    'htonf': 4, 'ntohf': 4,
    'htond': 8, 'ntohd': 8,
}


def sign_keyword(sign):
    return SIGN_KEYWORDS[sign]


def select_converter(type_name, direction, sizes=None):
    """Return the byte-swap primitive for a type, or '' when the value is copied as is.

    Integer types follow the width in `sizes` when one is given, so a
    configured 8-byte 'long' uses the 64-bit primitives.
    """
    pair = CONVERTERS.get(type_name)
    if pair is None:
        return ''
    if sizes is not None and type_name in INTEGER_TYPES and type_name in sizes:
        pair = WIDTH_CONVERTERS.get(sizes[type_name])
        if pair is None:
            return ''
    to_big, to_little = pair
    return to_big if direction is Direction.TO_BIG else to_little


def bit_field_size(type_name, sizes=None):
    """Byte width of the storage unit behind a bit-field of the given type.

    Returns None for types that cannot hold swappable bit-fields: types
    missing from the size table, and single-byte types, which have no byte
    order to reverse.
    """
    if sizes is None:
        sizes = TYPE_SIZES
    size = sizes.get(type_name)
    if size is None or size < 2:
        return None
    return size


def swap_bytes(primitive, data):
    """Apply a primitive to the raw bytes of a value as a little-endian host would."""
    width = PRIMITIVE_WIDTHS[primitive]
    if len(data) != width:
        raise ValueError(f"{primitive} expects {width} bytes, got {len(data)}")
    return bytes(reversed(data))
