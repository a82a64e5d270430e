import argparse
import logging
import sys

from .config import Settings, build_layout, load_settings, write_layout
from .emitter import prepare, render
from .errors import StructSwapError

logger = logging.getLogger(__name__)


def read_lines(filename):
    source = 'stdin' if filename in (None, '-') else filename
    try:
        if source == 'stdin':
            return sys.stdin.read().splitlines()
        with open(filename, 'r', encoding='utf-8') as f:
            return f.read().splitlines()
    except OSError as e:
        raise StructSwapError(f"cannot read {source}: {e.strerror}") from e
    except UnicodeDecodeError as e:
        raise StructSwapError(f"cannot decode {source} as UTF-8: {e.reason}") from e


def write_output(lines, filename):
    text = "\n".join(lines) + "\n" if lines else ''
    if filename is None:
        sys.stdout.write(text)
        return
    try:
        with open(filename, 'w', encoding='utf-8') as f:
            f.write(text)
    except OSError as e:
        raise StructSwapError(f"cannot write {filename}: {e.strerror}") from e


def run(args):
    settings = load_settings(args.config) if args.config else Settings()
    nothrow = settings.nothrow if args.nothrow is None else args.nothrow
    sizes = settings.type_sizes

    lines = read_lines(args.input)
    struct_name, fields = prepare(lines, sizes, settings.struct_name)
    output = render(struct_name, fields, nothrow, sizes)

    # the layout goes first so a failed write never leaves generated code behind
    if args.layout:
        try:
            write_layout(build_layout(struct_name, fields, sizes), args.layout)
        except OSError as e:
            raise StructSwapError(f"cannot write {args.layout}: {e.strerror}") from e
        logger.info("wrote layout to %s", args.layout)

    write_output(output, args.out)
    if args.out:
        print(f"Converted {args.input or 'stdin'} to {args.out}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate functions that reverse the byte order of a C/C++ struct's fields")
    parser.add_argument('input', nargs='?', help="Header or struct text to read (stdin when omitted or '-')")
    parser.add_argument('-o', '--out', metavar='OUTPUT', help="Write the generated code here instead of stdout")
    parser.add_argument('--nothrow', action=argparse.BooleanOptionalAction, default=None,
                        help="Mark the generated functions noexcept (overrides the config)")
    parser.add_argument('--config', metavar='CONFIG_YAML', help="YAML settings (type_sizes, nothrow, struct_name)")
    parser.add_argument('--layout', metavar='OUTPUT_YAML', help="Also write the grouped field layout as YAML")
    parser.add_argument('-v', '--verbose', action='store_true', help="Log debug details")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
        stream=sys.stderr,
    )

    try:
        run(args)
    except StructSwapError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
