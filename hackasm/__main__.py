# coding: utf-8

#---------------------------------------------------------------------------------------
# (C)2023 Robert Woodhead. Creative Commons Attribution License
#---------------------------------------------------------------------------------------

# Usage: python3 -m hackasm [-s] [-o output] [--tidy] [--strict] [--debug] {asm input file}
#
# Generates a .hack output file of the same name unless -o is given; if -s is used,
# some handy symbol tables are printed as well.

import argparse
import logging
import os
import sys
from typing import List, Optional

from .assembler import Assembly, assemble_file, output_name
from .symbols import print_symbol_table
from .tables import MAXRAM, MAXROM


def report(result: Assembly) -> None:

    for e in result.errors:
        print('Error in line ' + str(e.number) + ': ' + e.message)
        print('\t' + e.source.rstrip('\r\n'))


def main(argv: Optional[List[str]] = None) -> int:

    parser = argparse.ArgumentParser(
                    prog = 'hackasm',
                    description = 'Assembles HACK programs',
                    epilog = 'Results are stored in a .hack file with the same name as the .asm file')

    parser.add_argument('filename', help='The HACK .asm file to be assembled')
    parser.add_argument('-o', '--output', required=False, help='where to write the .hack file')
    parser.add_argument('-s', '--symbols', action='store_true', required=False, help='prints helpful symbol tables')
    parser.add_argument('--tidy', action='store_true', required=False, help='ignore whitespace and trailing // comments')
    parser.add_argument('--strict', action='store_true', required=False, help='write nothing if any line has an error')
    parser.add_argument('--debug', action='store_true', required=False, help='log each pass in detail')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr)

    fname = args.filename

    if not fname.endswith('.asm'):
        print('Error: Input filename must end in .asm')
        return 1

    if not os.path.isfile(fname):
        print(f'Error: Input file [{fname}] does not exist')
        return 1

    oname = args.output or output_name(fname)

    try:
        result = assemble_file(fname, oname, lenient=args.tidy, strict=args.strict)
    except OSError as oops:
        print(f'Error: {oops}')
        return 1

    if args.symbols:
        print_symbol_table(result.symbols)

    report(result)

    pc = result.program_length
    ram = result.ram_used

    if result.errors and args.strict:
        print(f'Assembly aborted -- {len(result.errors)} error(s) detected.')
        return 1

    print(f'Program length: {pc} (of {MAXROM}, {int(pc*100/MAXROM)}%), RAM usage: {ram} (of {MAXRAM}, {int(ram*100/MAXRAM)}%)')

    if result.errors:
        print(f'Assembly finished with {len(result.errors)} error(s) - {len(result.words)} of {pc} instructions written to ' + oname)
        return 1

    print('Assembly successful - results written to ' + oname)
    return 0


if __name__ == '__main__':
    sys.exit(main())
