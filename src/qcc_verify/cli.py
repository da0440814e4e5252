import json
import sys
from pathlib import Path
import click
from qcc_core.hexcodec import HexFormatError
from .logic import ProgramLayoutError, split_program, verify_program

@click.group()
def main():
    pass

@main.command("program")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def program_cmd(path: Path):
    result = verify_program(path)
    click.echo(json.dumps(result, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    if result["status"] != "PASS":
        raise SystemExit(1)

@main.command("self")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def self_cmd(path: Path):
    try:
        text = split_program(path.read_bytes()).self_text
    except (ProgramLayoutError, HexFormatError) as e:
        click.echo(f"FATAL: {e}", err=True)
        raise SystemExit(1)
    stdout = sys.stdout.buffer
    stdout.write(text)
    stdout.flush()

if __name__ == "__main__":
    main()
