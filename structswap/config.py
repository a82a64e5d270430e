"""YAML settings and layout reports."""

import dataclasses
from typing import Dict

import yaml

from .emitter import DEFAULT_STRUCT_NAME, walk_groups
from .errors import ConfigError
from .tables import INTEGER_TYPES, TYPE_SIZES, WIDTH_CONVERTERS

CONFIG_KEYS = ('type_sizes', 'nothrow', 'struct_name')


@dataclasses.dataclass
class Settings:
    type_sizes: Dict[str, int] = dataclasses.field(default_factory=lambda: dict(TYPE_SIZES))
    nothrow: bool = False
    struct_name: str = DEFAULT_STRUCT_NAME


def parse_settings(data):
    settings = Settings()
    if data is None:
        return settings
    if not isinstance(data, dict):
        raise ConfigError("config must be a mapping")

    unknown = sorted(set(data) - set(CONFIG_KEYS))
    if unknown:
        raise ConfigError(f"unknown config keys: {', '.join(unknown)}")

    type_sizes = data.get('type_sizes') or {}
    if not isinstance(type_sizes, dict):
        raise ConfigError("type_sizes must map type names to byte sizes")
    for type_name, size in type_sizes.items():
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise ConfigError(f"type size for '{type_name}' must be a positive integer, got {size!r}")
        # integer types must keep a width the ntoh/hton primitives can swap
        if type_name in INTEGER_TYPES and size not in WIDTH_CONVERTERS:
            widths = ', '.join(str(w) for w in sorted(WIDTH_CONVERTERS))
            raise ConfigError(f"type size for '{type_name}' must be one of {widths}, got {size}")
        settings.type_sizes[str(type_name)] = size

    if 'nothrow' in data:
        if not isinstance(data['nothrow'], bool):
            raise ConfigError("nothrow must be true or false")
        settings.nothrow = data['nothrow']

    if 'struct_name' in data:
        name = data['struct_name']
        if not isinstance(name, str) or not name.isidentifier():
            raise ConfigError(f"struct_name must be an identifier, got {name!r}")
        settings.struct_name = name

    return settings


def load_settings(filename):
    try:
        with open(filename, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {filename}: {e.strerror}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"cannot decode config {filename}: {e.reason}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {filename}: {e}") from e
    return parse_settings(data)


def build_layout(struct_name, fields, sizes=None):
    """Describe the grouped fields of a struct as plain data."""
    unit_offsets = {}
    for field, state in walk_groups(fields, sizes):
        if field.is_bit_field:
            unit_offsets[field.group] = {
                'anchor': state.anchor.name if state.anchor else None,
                'offset': state.offset,
            }

    entries = []
    for field in fields:
        entry = {
            'name': field.name,
            'type': field.type,
            'sign': field.sign.value,
            'group': field.group,
            'bits': field.bits,
            'array': field.is_array,
        }
        unit = unit_offsets.pop(field.group, None)
        if unit is not None:
            entry['unit'] = unit
        entries.append(entry)

    return {'struct': struct_name, 'fields': entries}


def write_layout(layout, filename):
    with open(filename, 'w', encoding='utf-8') as f:
        yaml.dump(layout, f, sort_keys=False)
