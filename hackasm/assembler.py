# coding: utf-8

#---------------------------------------------------------------------------------------
# (C)2023 Robert Woodhead. Creative Commons Attribution License
#---------------------------------------------------------------------------------------

# The two-pass driver.
#
# Pass 1 walks the whole source, counting instructions and binding each (LABEL)
# to the address of the instruction that follows it.
#
# Pass 2 walks the source again, parsing and encoding every instruction and
# allocating variables as new @symbols turn up.
#
# Every line gets a LineResult, so a caller can tell a line that was encoded
# from one that was skipped (comments, blanks, labels) or rejected. A rejected
# line produces no code, but assembly carries on with the next line.

import logging
import os
from enum import Enum
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from .encoder import codegen
from .errors import AsmError
from .parser import Kind, Label, Skip, classify, parse_label, parse_line, prepare
from .symbols import SymbolTable

logger = logging.getLogger(__name__)


class Status(Enum):
    ENCODED = 'encoded'
    SKIPPED = 'skipped'
    REJECTED = 'rejected'


class LineResult(NamedTuple):
    number: int                     # 1-based source line number
    source: str                     # the line as read, terminator included
    status: Status
    word: Optional[str] = None      # binary word, if ENCODED
    message: Optional[str] = None   # reason, if REJECTED


class Assembly:

    def __init__(self, results: List[LineResult], symbols: SymbolTable, program_length: int) -> None:
        self.results = results
        self.symbols = symbols
        self.program_length = program_length    # pass 1 count, rejected lines included

    @property
    def words(self) -> List[str]:
        return [r.word for r in self.results if r.status == Status.ENCODED]

    @property
    def errors(self) -> List[LineResult]:
        return [r for r in self.results if r.status == Status.REJECTED]

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def ram_used(self) -> int:
        return self.symbols.ram


# Pass 1: populate the symbol table with the address labels. Returns the number
# of instructions and any label errors, keyed by line number.

def first_pass(lines: List[str], symbols: SymbolTable, lenient: bool = False) -> Tuple[int, Dict[int, str]]:

    errors: Dict[int, str] = {}
    pc = 0  # Program counter

    for number, line in enumerate(lines, 1):
        o = prepare(line, lenient)
        match classify(o):

            case Kind.LABEL:
                try:
                    symbols.define_label(parse_label(o).symbol, pc)
                except AsmError as oops:
                    errors[number] = str(oops)

            case Kind.ADDRESS | Kind.COMPUTE:
                pc += 1

    logger.debug('pass 1: %d instructions, %d labels', pc, len(symbols.labels))
    return pc, errors


# Pass 2: parse and encode each line. Labels were dealt with in pass 1, so here
# they only need to be checked.

def second_pass(lines: List[str], symbols: SymbolTable, label_errors: Dict[int, str], lenient: bool = False) -> List[LineResult]:

    results: List[LineResult] = []
    symbols.reset_variables()

    for number, line in enumerate(lines, 1):
        try:
            op = parse_line(line, lenient)
            match op:

                case Label(symbol=sym):
                    if number in label_errors:
                        raise AsmError(label_errors[number])
                    if sym not in symbols.labels:
                        raise AsmError(f'Label [{sym}] was not defined in pass 1')
                    results.append(LineResult(number, line, Status.SKIPPED))

                case Skip():
                    results.append(LineResult(number, line, Status.SKIPPED))

                case _:
                    results.append(LineResult(number, line, Status.ENCODED, word=codegen(op, symbols)))

        except AsmError as oops:
            logger.debug('line %d rejected: %s', number, oops)
            results.append(LineResult(number, line, Status.REJECTED, message=str(oops)))

    logger.debug('pass 2: %d words, ram at %d', sum(r.status == Status.ENCODED for r in results), symbols.ram)
    return results


def assemble(lines: Iterable[str], lenient: bool = False) -> Assembly:
    """
    Assemble HACK source lines. Each call starts from a fresh symbol table, so
    assembling the same source twice gives the same result.
    """

    lines = list(lines)
    symbols = SymbolTable()

    pc, label_errors = first_pass(lines, symbols, lenient)
    results = second_pass(lines, symbols, label_errors, lenient)

    return Assembly(results, symbols, pc)


def output_name(fname: str) -> str:

    return fname[:-4] + '.hack'


# Make sure the output file can be written, without creating or truncating it
# (--strict may decide not to write it at all).

def check_writable(oname: str) -> None:

    if os.path.isdir(oname):
        raise IsADirectoryError(f"Output [{oname}] is a directory")
    if os.path.exists(oname):
        if not os.access(oname, os.W_OK):
            raise PermissionError(f"Output file [{oname}] is not writable")
    else:
        folder = os.path.dirname(oname) or os.curdir
        if not os.path.isdir(folder):
            raise FileNotFoundError(f"Output directory [{folder}] does not exist")
        if not os.access(folder, os.W_OK):
            raise PermissionError(f"Output directory [{folder}] is not writable")


# Read a .asm file, assemble it, and write the .hack file. File errors (OSError)
# are left for the caller. The output is checked before either pass runs. If
# strict is set, nothing is written when any line was rejected.

def assemble_file(fname: str, oname: Optional[str] = None, lenient: bool = False, strict: bool = False) -> Assembly:

    oname = oname or output_name(fname)

    with open(fname, newline='') as asmfile:
        lines = asmfile.readlines()

    check_writable(oname)

    result = assemble(lines, lenient)

    if strict and not result.ok:
        logger.debug('%d error(s), not writing %s', len(result.errors), oname)
        return result

    with open(oname, 'w') as hackfile:
        for p in result.words:
            hackfile.write(p + '\n')

    return result
