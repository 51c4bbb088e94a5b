# coding: utf-8

#---------------------------------------------------------------------------------------
# (C)2023 Robert Woodhead. Creative Commons Attribution License
#---------------------------------------------------------------------------------------

import logging
import shutil
from typing import Iterator, List

from .errors import AsmError
from .tables import DECIMALCHARS, MAXRAM, PREDEFINED, VARBASE, Values

logger = logging.getLogger(__name__)

# The symbol table. Starts out holding the predefined symbols; pass 1 adds the
# address labels and pass 2 adds variables the first time an @symbol refers to
# something that isn't already known. We also keep lists of the symbols of each
# kind so that a nicely formatted table can be printed at the end of assembly.

class SymbolTable:

    def __init__(self) -> None:
        self.symbols: Values = dict(PREDEFINED)
        self.predefined: List[str] = list(PREDEFINED)
        self.labels: List[str] = []
        self.variables: List[str] = []
        self.ram: int = VARBASE         # next free variable slot

    def __contains__(self, name: str) -> bool:
        return name in self.symbols

    def __getitem__(self, name: str) -> int:
        return self.symbols[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def define_label(self, name: str, address: int) -> int:
        """Bind a (LABEL) to the address of the next instruction. First definition wins."""

        if name == '':
            raise AsmError('Empty symbol')
        elif name[0] in DECIMALCHARS:
            raise AsmError(f'Badly formed symbol [{name}]')
        elif name in self.predefined:
            raise AsmError(f'Label [{name}] redefines a predefined symbol')
        elif name in self.symbols:
            raise AsmError(f'Symbol [{name}] previously defined')

        self.symbols[name] = address
        self.labels.append(name)
        logger.debug('label %s = %d', name, address)
        return address

    def resolve_or_allocate(self, name: str) -> int:
        """
        Return the value of a symbol, allocating the next free RAM slot to it
        if it has never been seen before (ie: it is a variable).
        """

        if name in self.symbols:
            return self.symbols[name]

        if name == '':
            raise AsmError('Empty symbol')
        if self.ram >= MAXRAM:
            raise AsmError(f'Out of RAM (data) memory allocating [{name}]')

        address = self.ram
        self.symbols[name] = address
        self.variables.append(name)
        self.ram += 1
        logger.debug('variable %s = %d', name, address)
        return address

    def reset_variables(self) -> None:
        """Rewind the variable allocator. Labels and predefined symbols are untouched."""

        for name in self.variables:
            del self.symbols[name]
        self.variables = []
        self.ram = VARBASE


# Print out a segment of the symbol table in a nicely formatted way.

def print_symbols(symbols: SymbolTable, valid: List[str], title: str, byname: bool, width: int = 0) -> None:

    # .sort() helper functions, permits sorting by value or name (case-insensitive).

    def byValues(s: str):
        return symbols[s]

    def byNames(s: str):
        return s.upper()

    # Filter out the desired symbols.

    valid_symbols = [s for s in symbols if s in valid]

    if not valid_symbols:
        return

    if byname:
        valid_symbols.sort(key=byNames)
    else:
        valid_symbols.sort(key=byValues)

    # How wide is a column of symbols and values?

    num_symbols = len(valid_symbols)
    max_width = max([len(s) for s in valid_symbols])

    ruler = '-'*max_width + ' -----'
    separator = ' | '

    # How many columns can we fit in a line?

    if width <= 0:
        width = shutil.get_terminal_size().columns

    num_cols = min([(width - len(separator)) // (len(ruler) + len(separator)), num_symbols])

    if num_cols == 0:
        num_cols = 1

    # Given that many columns, how many rows do we need? And with that many rows,
    # we may not need all the columns.

    num_rows = (num_symbols + num_cols - 1) // num_cols
    num_cols = (num_symbols + num_rows - 1) // num_rows

    formatted_symbols = [f'{s:{max_width}} {symbols[s]:5}' for s in valid_symbols]

    print(title + (' (by name)' if byname else ' (by value)'))
    print(separator.join([ruler for i in range(0, num_cols)]))

    # Symbols are ordered column-first, which is easier to read. The final column
    # may have some empty entries.

    for row in range(0, num_rows):
        print(separator.join([formatted_symbols[num_rows * col + row] if num_rows * col + row < num_symbols else '' for col in range(0, num_cols)]))

    print()


def print_symbol_table(symbols: SymbolTable, width: int = 0) -> None:

    print()
    print_symbols(symbols, symbols.predefined, 'Predefined Symbols', byname=True, width=width)
    print_symbols(symbols, symbols.labels, 'Branch Addresses', byname=True, width=width)
    print_symbols(symbols, symbols.labels, 'Branch Addresses', byname=False, width=width)
    print_symbols(symbols, symbols.variables, 'Variables', byname=True, width=width)
    print_symbols(symbols, symbols.variables, 'Variables', byname=False, width=width)
