# coding: utf-8

#---------------------------------------------------------------------------------------
# (C)2023 Robert Woodhead. Creative Commons Attribution License
#---------------------------------------------------------------------------------------

# Line classification and field parsing.
#
# Every source line turns into exactly one of:
#
#   Skip          comment or blank line, produces no code
#   Label         (LABEL) declaration, produces no code but names the next instruction
#   AInstruction  @value or @symbol
#   CInstruction  dest=comp;jump, with dest and jump optional
#
# A fresh object is built for every line, so nothing from one line can leak into
# the next one.

from enum import Enum
from typing import NamedTuple, Optional, Union

from .errors import AsmError
from .tables import DECIMALCHARS, MAXADDR

TERMINATORS = ('\r\n', '\n', '\r')


class Kind(Enum):
    SKIP = 'skip'
    LABEL = 'label'
    ADDRESS = 'A'
    COMPUTE = 'C'


class Skip(NamedTuple):
    pass


class Label(NamedTuple):
    symbol: str


class AInstruction(NamedTuple):
    value: Optional[int] = None      # literal address, or
    symbol: Optional[str] = None     # symbol to be resolved via the symbol table


class CInstruction(NamedTuple):
    dest: str
    comp: str
    jump: str


Operation = Union[Skip, Label, AInstruction, CInstruction]

SKIP = Skip()


def strip_terminator(line: str) -> str:

    for t in TERMINATORS:
        if line.endswith(t):
            return line[:-len(t)]
    return line


# Lenient mode: kill all the whitespace (evil trick) and any trailing comment.

def tidy(line: str) -> str:

    return ''.join(line.split('//')[0].split())


# What kind of line is this? Only needs to look at the start of the line, so
# pass 1 can count instructions without parsing their fields.

def classify(o: str) -> Kind:

    if o.startswith('//') or o == '':
        return Kind.SKIP
    elif o[0] == '(':
        return Kind.LABEL
    elif o[0] == '@':
        return Kind.ADDRESS
    else:
        return Kind.COMPUTE


def parse_label(o: str) -> Label:

    if not o.endswith(')'):
        raise AsmError('Label definition does not end in )')
    return Label(o[1:-1])


def parse_address(o: str) -> AInstruction:
    """
    Parse the operand of an @-instruction. A leading digit means a decimal
    constant, anything else is a symbol.

    >>> parse_address('21')
    AInstruction(value=21, symbol=None)
    >>> parse_address('LOOP')
    AInstruction(value=None, symbol='LOOP')
    """

    if o == '':
        raise AsmError('@ instruction has no value')
    elif o[0] in DECIMALCHARS:
        for c in o:
            if c not in DECIMALCHARS:
                raise AsmError(f'Invalid constant [{o}]')
        if len(o.lstrip('0')) > len(str(MAXADDR)):
            raise AsmError(f'@ value {o[:8]}... out of 0..{MAXADDR} range')
        return AInstruction(value=int(o.lstrip('0') or '0'))
    else:
        return AInstruction(symbol=o)


def parse_compute(o: str) -> CInstruction:
    """
    Split a C-instruction into its dest, comp and jump fields. The = only marks
    a destination if it turns up before any ;.

    >>> parse_compute('D=D+A')
    CInstruction(dest='D', comp='D+A', jump='')
    >>> parse_compute('0;JMP')
    CInstruction(dest='', comp='0', jump='JMP')
    """

    eq = o.find('=')
    semi = o.find(';')

    if eq != -1 and (semi == -1 or eq < semi):
        dest, rest = o[:eq], o[eq+1:]
    else:
        dest, rest = '', o

    if ';' in rest:
        comp, jump = rest.split(';', 1)
        jump = jump.split(' ', 1)[0]    # anything after the jump mnemonic is ignored
    else:
        comp, jump = rest, ''

    return CInstruction(dest=dest, comp=comp, jump=jump)


def prepare(line: str, lenient: bool = False) -> str:

    o = strip_terminator(line)
    return tidy(o) if lenient else o


def parse_line(line: str, lenient: bool = False) -> Operation:
    """Classify a raw source line (terminator included) and parse out its fields."""

    o = prepare(line, lenient)

    match classify(o):

        case Kind.SKIP:             # comment or blank line
            return SKIP

        case Kind.LABEL:            # (LABEL)
            return parse_label(o)

        case Kind.ADDRESS:          # @-op
            return parse_address(o[1:])

        case Kind.COMPUTE:          # C-op
            return parse_compute(o)
