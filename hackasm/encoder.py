# coding: utf-8

#---------------------------------------------------------------------------------------
# (C)2023 Robert Woodhead. Creative Commons Attribution License
#---------------------------------------------------------------------------------------

# Turn parsed instructions into 16-character binary words.

from .errors import AsmError
from .parser import AInstruction, CInstruction, Operation
from .symbols import SymbolTable
from .tables import CINSTR, COMPBITS, COMPS, DESTBITS, DESTS, JMPBITS, JMPS, MAXADDR, WORDBITS


def word(code: int) -> str:

    return f'{code:0{WORDBITS}b}'


def encode_address(value: int) -> str:
    """
    Encode an @-instruction. The top bit is always 0, so only 15-bit values fit.

    >>> encode_address(2)
    '0000000000000010'
    >>> encode_address(32767)
    '0111111111111111'
    """

    if (value < 0) or (MAXADDR < value):
        raise AsmError(f'@ value {value} out of 0..{MAXADDR} range')
    return word(value)


def encode_compute(dest: str, comp: str, jump: str) -> str:
    """
    Encode a C-instruction as 111 + comp + dest + jump.

    >>> encode_compute('D', 'A', '')
    '1110110000010000'
    >>> encode_compute('', '0', 'JMP')
    '1110101010000111'
    """

    if comp not in COMPS:
        raise AsmError(f'Unknown alu operation [{comp}]')
    if dest not in DESTS:
        raise AsmError(f'Unknown destination [{dest}]')
    if jump not in JMPS:
        raise AsmError(f'Unknown jump [{jump}]')

    c = CINSTR
    c = (c << COMPBITS) | COMPS[comp]
    c = (c << DESTBITS) | DESTS[dest]
    c = (c << JMPBITS) | JMPS[jump]
    return word(c)


# Generate the code for an instruction. Symbols are looked up here, which is
# also where never-before-seen symbols get allocated as variables.

def codegen(o: Operation, symbols: SymbolTable) -> str:

    match o:

        case AInstruction(value=None, symbol=sym):
            return encode_address(symbols.resolve_or_allocate(sym))

        case AInstruction(value=av):
            return encode_address(av)

        case CInstruction(dest=od, comp=oc, jump=oj):
            return encode_compute(od, oc, oj)

        case other:
            raise AsmError(f'No code generated for {type(other).__name__}')
