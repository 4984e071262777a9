"""
Error classes for the cloudvm decoder and stack machine.

Two families:
    - DecodeError: the program listing cannot be turned into instructions.
    - VMError (alias RuntimeFault): a decoded program misbehaved while
      executing at a particular point.

Nothing in the core catches these; the CLI turns them into a diagnostic.
"""


class CloudVMError(Exception):
    """Base class for every error raised by cloudvm."""


class DecodeError(CloudVMError):
    """A line of the program listing could not be decoded."""

    def __init__(self, message: str, source: str = "<string>", line: int = 0, text: str = ""):
        self.message = message
        self.source = source
        self.line = line
        self.text = text
        super().__init__(f"{source}:{line}: {message} (in {text!r})")


class VMError(CloudVMError):
    """VM execution error."""

    def __init__(self, message: str, ip: int = -1, instruction=None, point=None):
        self.message = message
        self.ip = ip
        self.instruction = instruction
        self.point = point
        location = f"VM Error at IP={ip}"
        if point is not None:
            location += f" for point ({point.x}, {point.y}, {point.z})"
        super().__init__(f"{location}: {message}")


RuntimeFault = VMError


class StackUnderflowError(VMError):
    """Stack underflow error."""

    def __init__(self, ip: int = -1, instruction=None, point=None):
        super().__init__("Stack underflow", ip, instruction, point)


class ProgramCounterError(VMError):
    """Program counter left the instruction sequence."""

    def __init__(self, ip: int, program_length: int, point=None):
        self.program_length = program_length
        super().__init__(
            f"Program counter out of range (program has {program_length} instructions)",
            ip,
            None,
            point,
        )
