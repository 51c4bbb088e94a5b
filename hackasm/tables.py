# coding: utf-8

#---------------------------------------------------------------------------------------
# (C)2023 Robert Woodhead. Creative Commons Attribution License
#---------------------------------------------------------------------------------------

# Machine constants and the fixed lookup tables used to build HACK instructions.

from typing import Dict

Values = Dict[str, int]     # Name:Values pairs, for example in symbol tables

WORDBITS = 16               # Width of an instruction word
MAXRAM = 16384              # Limit of ram space (screen map starts here)
MAXROM = 32768              # Limit of rom space
MAXADDR = 32767             # Largest value an @-instruction can load
VARBASE = 16                # Locations 0-15 are reserved, so 16 is the first variable

DECIMALCHARS = set('0123456789')

# Predefined symbols. These exist before pass 1 and are never changed.

PREDEFINED: Values = {

    'R0': 0,
    'R1': 1,
    'R2': 2,
    'R3': 3,
    'R4': 4,
    'R5': 5,
    'R6': 6,
    'R7': 7,
    'R8': 8,
    'R9': 9,
    'R10': 10,
    'R11': 11,
    'R12': 12,
    'R13': 13,
    'R14': 14,
    'R15': 15,

    'SP': 0,
    'LCL': 1,
    'ARG': 2,
    'THIS': 3,
    'THAT': 4,

    'SCREEN': 16384,
    'KBD': 24576,

}

# C instruction prefix (top 3 bits).

CINSTR = 0b111

# Opcodes for jmps (3 bits). The empty string is "no jump".

JMPS: Values = {

    '':     0b000,
    'JGT':  0b001,
    'JEQ':  0b010,
    'JGE':  0b011,
    'JLT':  0b100,
    'JNE':  0b101,
    'JLE':  0b110,
    'JMP':  0b111

}

# Opcodes for destinations (3 bits). Only the canonical orderings are accepted.

DESTS: Values = {

    '':     0b000,
    'M':    0b001,
    'D':    0b010,
    'MD':   0b011,
    'A':    0b100,
    'AM':   0b101,
    'AD':   0b110,
    'AMD':  0b111

}

# Opcodes for comps (7 bits: the a-bit followed by c1..c6).

COMPS: Values = {

    '0':    0b0101010,
    '1':    0b0111111,
    '-1':   0b0111010,
    'D':    0b0001100,
    'A':    0b0110000,
    '!D':   0b0001101,
    '!A':   0b0110001,
    '-D':   0b0001111,
    '-A':   0b0110011,
    'D+1':  0b0011111,
    'A+1':  0b0110111,
    'D-1':  0b0001110,
    'A-1':  0b0110010,
    'D+A':  0b0000010,
    'D-A':  0b0010011,
    'A-D':  0b0000111,
    'D&A':  0b0000000,
    'D|A':  0b0010101,

    'M':    0b1110000,
    '!M':   0b1110001,
    '-M':   0b1110011,
    'M+1':  0b1110111,
    'M-1':  0b1110010,
    'D+M':  0b1000010,
    'D-M':  0b1010011,
    'M-D':  0b1000111,
    'D&M':  0b1000000,
    'D|M':  0b1010101,

}

# Field widths, in bits.

COMPBITS = 7
DESTBITS = 3
JMPBITS = 3
