"""Load fk schema files and print them in normalized form.

Usage: python -m fk [-v] FILE...
"""

import argparse
import logging
import sys

from .exceptions import FkValueError
from .format import format_schema
from .parse import parse_file


def main(argv=None):
    parser = argparse.ArgumentParser(prog='fk', description='Check fk schema files')
    parser.add_argument('files', nargs='+', metavar='FILE', help='schema file to load')
    parser.add_argument('-v', '--verbose', action='store_true', help='log each declaration')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s: %(message)s')

    for path in args.files:
        try:
            schema = parse_file(path)
        except OSError as e:
            print('error: IoError: %s' %(e,), file=sys.stderr)
            return 1
        except FkValueError as e:
            print('error: %s: %s: %s' %(type(e).__name__, path, e), file=sys.stderr)
            return 1
        sys.stdout.write(format_schema(schema))

    return 0


if __name__ == '__main__':
    sys.exit(main())
