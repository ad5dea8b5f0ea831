# src/retro_decompiler/core/__init__.py
"""
Decompiler Core Package
"""
from .address import ADDRESS_SPACE, MAX_ADDRESS, Address
from .argument import Argument, ArgumentKind, GotoIcon
from .bytecode import OperationCodeStore, Row, SourceLine, prepare_lines
from .decompiler import DecodeFunction, decompile_map
from .errors import CapacityError, DecompilerError, FormatError, ParseFailure
from .opcode import OpCode
from .view import DecodedView, DecompiledRow, GapMarker, ViewRow
