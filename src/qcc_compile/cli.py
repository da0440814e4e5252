"""qcc - Quine Emitter: source file to self-reconstructing program."""
from __future__ import annotations

import io
import sys
from dataclasses import dataclass
from importlib import resources
from typing import BinaryIO
from warnings import warn

import click

from qcc_core.hexcodec import hex_decode, hex_encode
from qcc_core.protocol import (
    WARNING,
    PROLOGUE_HEADERS,
    PROLOGUE_PROTOTYPE,
    PREPROCESSOR_MACRO,
    HEX_DECODE_HELPER,
    SELFREF,
    PROLOGUE_DECL_OPEN,
    PROLOGUE_DECL_CLOSE,
    SELFREF_DECL_OPEN,
    SELFREF_DECL_CLOSE,
    EXIT_USAGE,
    EXIT_SCRATCH,
)
from qcc_compile.streams import DualChannelWriter, ScratchAllocationError, forward_chunks

MINIMAL_USAGE = "Usage: qcc-minimal <source file>"


@dataclass(frozen=True)
class QuineConfig:
    """Which fixed text blocks go into the prologue."""

    suppress_include: bool = False
    suppress_prototype: bool = False
    suppress_warning: bool = False
    define_macro: bool = False
    output_self: bool = False


def stage_prologue(fp: BinaryIO, writer: DualChannelWriter, config: QuineConfig) -> None:
    """Write the prologue blocks through writer, in their fixed order."""
    if not config.suppress_warning:
        writer.emit(WARNING)
    if not config.suppress_include:
        writer.emit(PROLOGUE_HEADERS)
    if not config.suppress_prototype:
        writer.emit(PROLOGUE_PROTOTYPE)
    if config.define_macro:
        writer.emit(PREPROCESSOR_MACRO)

    if forward_chunks(fp, writer):
        warn("Source contains a NUL byte; the emitted get_self() output stops at it")

    writer.emit(b"\n")
    writer.emit(HEX_DECODE_HELPER)
    writer.emit(b"\n")


def quine_source(fp: BinaryIO, out: BinaryIO, config: QuineConfig | None = None) -> int:
    """Emit the self-reconstructing program for fp to out.

    Returns the number of prologue bytes staged.
    """
    if config is None:
        config = QuineConfig()

    with DualChannelWriter(out) as writer:
        stage_prologue(fp, writer, config)

        # Replay the staged copy into the prologue declaration
        out.write(PROLOGUE_DECL_OPEN)
        writer.replay(out)
        out.write(PROLOGUE_DECL_CLOSE)
        staged = writer.staged_bytes

    out.write(SELFREF_DECL_OPEN)
    out.write(hex_encode(SELFREF))
    out.write(SELFREF_DECL_CLOSE)

    out.write(SELFREF)
    out.flush()
    return staged


def assemble(source: bytes, config: QuineConfig | None = None) -> tuple[bytes, bytes]:
    """Build (prologue_bytes, selfref_bytes) for source without touching stdout."""
    if config is None:
        config = QuineConfig()

    visible = io.BytesIO()
    staged = io.BytesIO()
    with DualChannelWriter(visible) as writer:
        stage_prologue(io.BytesIO(source), writer, config)
        writer.replay(staged)

    prologue = hex_decode(staged.getvalue())
    if prologue != visible.getvalue():
        raise RuntimeError("FATAL: staged prologue diverged from visible prologue")
    return prologue, SELFREF


# Packages whose modules make up this tool, in output order.
SOURCE_PACKAGES = ("qcc_core", "qcc_compile", "qcc_verify")


def own_source() -> bytes:
    """Concatenate every module of the tool, each under a header line."""
    parts = []
    for package in SOURCE_PACKAGES:
        modules = {
            entry.name: entry
            for entry in resources.files(package).iterdir()
            if entry.name.endswith(".py") and entry.is_file()
        }
        for name in sorted(modules):
            parts.append(f"# ==> {package}/{name} <==\n".encode("utf-8"))
            parts.append(modules[name].read_bytes())
    return b"".join(parts)


def _open_and_quine(source: str, config: QuineConfig) -> None:
    stdout = sys.stdout.buffer
    try:
        fp = open(source, "rb")
    except OSError as e:
        click.echo(f"error opening source file: {source}", err=True)
        raise SystemExit(e.errno or 1)

    try:
        with fp:
            quine_source(fp, stdout, config)
    except ScratchAllocationError as e:
        # Output already written stays written; the exit code tells the caller.
        click.echo(f"FATAL: {e.strerror}", err=True)
        raise SystemExit(EXIT_SCRATCH)
    except OSError as e:
        click.echo(f"FATAL: {e}", err=True)
        raise SystemExit(e.errno or 1)


@click.command("qcc")
@click.argument("source", required=False)
@click.option("-i", "suppress_include", is_flag=True, help="Suppress #include directives")
@click.option("-p", "suppress_prototype", is_flag=True, help="Suppress function prototype")
@click.option("-w", "suppress_warning", is_flag=True, help="Suppress warning against modification")
@click.option("-d", "define_macro", is_flag=True, help="Define macro for conditional compilation")
@click.option("-q", "output_self", is_flag=True, help="Output own source code")
@click.pass_context
def main(
    ctx: click.Context,
    source: str | None,
    suppress_include: bool,
    suppress_prototype: bool,
    suppress_warning: bool,
    define_macro: bool,
    output_self: bool,
) -> None:
    """Emit SOURCE augmented with code that reproduces its own text."""
    if source == "-":
        raise click.UsageError(f"Empty option: {source}", ctx=ctx)

    config = QuineConfig(
        suppress_include=suppress_include,
        suppress_prototype=suppress_prototype,
        suppress_warning=suppress_warning,
        define_macro=define_macro,
        output_self=output_self,
    )

    if config.output_self:
        stdout = sys.stdout.buffer
        stdout.write(own_source())
        stdout.flush()
    elif source is None:
        click.echo(ctx.get_help())
    else:
        _open_and_quine(source, config)


@click.command(
    "qcc-minimal",
    add_help_option=False,
    context_settings={"ignore_unknown_options": True},
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def minimal_main(args: tuple[str, ...]) -> None:
    """Emit the single SOURCE argument with every block included."""
    if len(args) != 1:
        click.echo(MINIMAL_USAGE)
        raise SystemExit(EXIT_USAGE)
    _open_and_quine(args[0], QuineConfig())


if __name__ == "__main__":
    main()
