# coding: utf-8

#---------------------------------------------------------------------------------------
# (C)2023 Robert Woodhead. Creative Commons Attribution License
#---------------------------------------------------------------------------------------

# Raised for anything wrong with a single source line. The pass driver catches it,
# records the message against the line, and carries on with the next line.

class AsmError(Exception):
    pass
