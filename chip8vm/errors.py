class Chip8Error(Exception):
    pass


class MachineFault(Chip8Error):
    def __init__(self, message: str, opcode: int, pc: int) -> None:
        super().__init__(message)
        self.opcode = opcode
        self.pc = pc


class InvalidOpcodeError(MachineFault):
    def __init__(self, opcode: int, pc: int, context: str | None = None) -> None:
        detail = f" ({context})" if context else ""
        super().__init__(f"Invalid opcode 0x{opcode:04X}{detail} at PC 0x{pc:04X}", opcode, pc)
        self.context = context


class StackOverflowError(MachineFault):
    def __init__(self, opcode: int, pc: int, depth: int) -> None:
        super().__init__(f"Stack overflow ({depth} levels) calling 0x{opcode:04X} at PC 0x{pc:04X}", opcode, pc)
        self.depth = depth


class RomLoadError(Chip8Error):
    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"Failed to load ROM '{path}': {reason}")
        self.path = path
