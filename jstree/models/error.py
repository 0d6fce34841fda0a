"""Assembly error taxonomy."""

from typing import Optional


class ParseError(Exception):
    """Base exception for AST assembly errors."""
    pass


class UnknownNodeKind(ParseError):
    """Raised when a node tag is outside the supported variant set."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Unknown node kind: {tag}")


class UnexpectedKind(ParseError):
    """Raised when a context requires one variant and gets another."""

    def __init__(self, expected: str, got: Optional[str]):
        self.expected = expected
        self.got = got
        super().__init__(f"Expected {expected}, got {got}")


class MalformedNode(ParseError):
    """Raised when a required field is missing or has the wrong shape."""

    def __init__(self, kind: str, field: str, detail: Optional[str] = None):
        self.kind = kind
        self.field = field
        self.detail = detail
        message = f"Malformed {kind}: field '{field}'"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class NestingTooDeep(ParseError):
    """Raised when a subtree nests deeper than the interpreter can recurse."""

    def __init__(self, kind: Optional[str]):
        self.kind = kind or "<unknown>"
        super().__init__(f"Nesting too deep under {self.kind}")


class AssemblyTimeout(ParseError):
    """Raised when concurrent assembly exceeds its deadline."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Assembly did not finish within {timeout}s")


class AcornError(Exception):
    """Raised when the acorn subprocess fails or emits invalid output."""

    def __init__(self, message: str, exit_code: Optional[int] = None, stderr: str = ""):
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(message)
