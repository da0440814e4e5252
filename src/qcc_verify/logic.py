from functools import cached_property
from pathlib import Path
from qcc_core.hexcodec import HexFormatError, hex_decode
from qcc_core.protocol import (
    SELFREF,
    PROLOGUE_DECL_OPEN,
    PROLOGUE_DECL_CLOSE,
    SELFREF_DECL_OPEN,
    SELFREF_DECL_CLOSE,
)
from .const import ERRORS

class ProgramLayoutError(ValueError):
    pass

def reconstruct(prologue_literal: bytes, selfref_literal: bytes) -> bytes:
    """What get_self() formats from the two embedded literals."""
    return (
        hex_decode(prologue_literal)
        + PROLOGUE_DECL_OPEN + prologue_literal + PROLOGUE_DECL_CLOSE
        + SELFREF_DECL_OPEN + selfref_literal + SELFREF_DECL_CLOSE
        + hex_decode(selfref_literal)
    )

class ProgramImage:
    """An emitted program split into its visible prologue and two literals.

    Parsing runs from the end: the prologue holds arbitrary source text,
    which may itself contain declaration-like lines.
    """

    def __init__(self, text: bytes):
        self.text = text
        if not text.endswith(SELFREF):
            raise ProgramLayoutError("program does not end with the get_self() source")
        head = text[: -len(SELFREF)]

        if not head.endswith(SELFREF_DECL_CLOSE):
            raise ProgramLayoutError("selfref declaration not terminated")
        head = head[: -len(SELFREF_DECL_CLOSE)]
        cut = head.rfind(SELFREF_DECL_OPEN)
        if cut == -1:
            raise ProgramLayoutError("selfref declaration not found")
        self.selfref_literal = head[cut + len(SELFREF_DECL_OPEN):]
        head = head[:cut]

        if not head.endswith(PROLOGUE_DECL_CLOSE):
            raise ProgramLayoutError("prologue declaration not terminated")
        head = head[: -len(PROLOGUE_DECL_CLOSE)]
        cut = head.rfind(PROLOGUE_DECL_OPEN)
        if cut == -1:
            raise ProgramLayoutError("prologue declaration not found")
        self.prologue_literal = head[cut + len(PROLOGUE_DECL_OPEN):]
        self.visible_prologue = head[:cut]

    @cached_property
    def self_text(self) -> bytes:
        # Computed on first access only, like the static pointer in get_self().
        return reconstruct(self.prologue_literal, self.selfref_literal)

def split_program(text: bytes) -> ProgramImage:
    return ProgramImage(text)

def _fail(errors: list) -> dict:
    return {"status":"FAIL","error_count":len(errors),"errors":errors}

def verify_program(path: Path) -> dict:
    errors = []
    text = Path(path).read_bytes()

    try:
        image = split_program(text)
    except ProgramLayoutError as e:
        errors.append({"code":"E_LAYOUT_MISSING","message":ERRORS["E_LAYOUT_MISSING"],"detail":str(e)})
        return _fail(errors)

    try:
        prologue = hex_decode(image.prologue_literal)
        selfref = hex_decode(image.selfref_literal)
    except HexFormatError as e:
        errors.append({"code":"E_HEX_FORMAT","message":ERRORS["E_HEX_FORMAT"],"detail":str(e)})
        return _fail(errors)

    if prologue != image.visible_prologue:
        errors.append({"code":"E_PROLOGUE_MISMATCH","message":ERRORS["E_PROLOGUE_MISMATCH"],
                       "expected_len":len(image.visible_prologue),"decoded_len":len(prologue)})
        return _fail(errors)

    if selfref != SELFREF:
        errors.append({"code":"E_SELFREF_MISMATCH","message":ERRORS["E_SELFREF_MISMATCH"]})
        return _fail(errors)

    if image.self_text != text:
        errors.append({"code":"E_SELF_MISMATCH","message":ERRORS["E_SELF_MISMATCH"]})
        return _fail(errors)

    return {"status":"PASS","error_count":0,"errors":[]}
