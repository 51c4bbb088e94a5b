# hackasm/__init__.py
from .errors import AsmError
from .symbols import SymbolTable, print_symbol_table
from .parser import AInstruction, CInstruction, Label, Skip, Kind, classify, parse_line
from .encoder import codegen, encode_address, encode_compute
from .assembler import Assembly, LineResult, Status, assemble, assemble_file
