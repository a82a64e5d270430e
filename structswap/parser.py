"""Struct text parsing.

Input:  lines of a C/C++ struct definition.
Output: the struct name and the ordered list of recognized fields.

Only single-line `//` comments are understood, and each declaration has to
end with `;` on the line where it starts. Declarations that do not match
(pointers, function members, initializers) are skipped without error.
"""

import dataclasses
import logging
import re

from .tables import Sign

logger = logging.getLogger(__name__)

COMMENT_MARKER = '//'
STRUCT_NAME_PATTERN = re.compile(r'\bstruct\s+([A-Za-z_]\w*)')
FIELD_PATTERN = re.compile(
    r'''
    \b
    (?:(?:const|volatile)\s+)*
    (?:(?P<sign>signed|unsigned)\s+)?
    (?:(?P<long>long)\s+)?
    (?:(?P<len>[A-Za-z_]\w*)\s+)?
    (?:(?P<int>int)\s+)?
    (?P<name>[A-Za-z_]\w*)\s*
    (?P<array>\[[^\]]*\])?\s*
    (?::\s*(?P<bits>\d+))?\s*
    ;
    ''',
    re.VERBOSE,
)


@dataclasses.dataclass(frozen=True)
class RawDeclaration:
    sign_token: str
    long_token: str
    len_token: str
    int_token: str
    name: str
    array: str
    bits: str
    source: str


@dataclasses.dataclass(frozen=True)
class Field:
    sign: Sign
    name: str
    type: str
    bits: int = 0
    is_array: bool = False
    group: int = 0
    source: str = ''

    @property
    def is_bit_field(self):
        return self.bits > 0


def strip_comment(line):
    return line.split(COMMENT_MARKER, 1)[0].strip()


def extract_struct_name(lines):
    """Return the identifier after the first `struct` keyword, or '' if there is none."""
    for line in lines:
        match = STRUCT_NAME_PATTERN.search(strip_comment(line))
        if match:
            return match.group(1)
    return ''


def tokenize_line(line):
    """Split one comment-free line into its raw declarations, left to right."""
    raws = []
    for match in FIELD_PATTERN.finditer(line):
        raws.append(
            RawDeclaration(
                sign_token=match.group('sign') or '',
                long_token=match.group('long') or '',
                len_token=match.group('len') or '',
                int_token=match.group('int') or '',
                name=match.group('name') or '',
                array=match.group('array') or '',
                bits=match.group('bits') or '',
                source=match.group(0).strip(),
            )
        )
    return raws


def fold_bare_int(raw):
    # `int x` and `long int x` capture int in the len slot.
    if raw.len_token == 'int' and not raw.int_token:
        return dataclasses.replace(raw, len_token='', int_token='int')
    return raw


def base_type(raw):
    type_name = f"{raw.long_token} {raw.len_token}".strip()
    return type_name or raw.int_token


def parse_sign(token):
    if token == 'unsigned':
        return Sign.UNSIGNED
    if token:
        return Sign.SIGNED
    return Sign.DEFAULT


def to_field(raw):
    raw = fold_bare_int(raw)
    type_name = base_type(raw)
    if not type_name or not raw.name:
        return None
    return Field(
        sign=parse_sign(raw.sign_token),
        name=raw.name,
        type=type_name,
        bits=int(raw.bits) if raw.bits else 0,
        is_array=bool(raw.array),
        source=raw.source,
    )


def parse_fields(lines):
    fields = []
    for line in lines:
        stripped = strip_comment(line)
        if not stripped:
            continue
        for raw in tokenize_line(stripped):
            field = to_field(raw)
            if field is None:
                logger.debug("skipping declaration %r", raw.source)
                continue
            fields.append(field)
    return fields
