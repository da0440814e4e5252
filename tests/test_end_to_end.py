import os
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

REPO = Path(__file__).resolve().parents[1]


def run(args, cwd, **kw):
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO / "src"), env.get("PYTHONPATH")]))
    return subprocess.run(args, cwd=cwd, check=False, capture_output=True, env=env, **kw)


def test_emit_and_verify(tmp_path):
    out = tmp_path / "self_print.c"

    r = run([sys.executable, "-m", "qcc_compile.cli", "examples/self_print.c"], cwd=REPO)
    assert r.returncode == 0, r.stderr
    out.write_bytes(r.stdout)

    r = run([sys.executable, "-m", "qcc_verify.cli", "program", str(out)], cwd=REPO)
    assert r.returncode == 0, r.stderr + r.stdout
    assert b'"status":"PASS"' in r.stdout

    # Corrupt one hex digit in the embedded selfref and ensure failure
    b = bytearray(out.read_bytes())
    at = b.index(b'const char selfref[] = "') + len(b'const char selfref[] = "')
    b[at + 1] ^= 0x01
    out.write_bytes(bytes(b))

    r = run([sys.executable, "-m", "qcc_verify.cli", "program", str(out)], cwd=REPO)
    assert r.returncode != 0


@pytest.mark.skipif(shutil.which("cc") is None, reason="no C compiler")
def test_compiled_program_prints_itself(tmp_path):
    src = tmp_path / "self_print.c"
    exe = tmp_path / "self_print"

    r = run([sys.executable, "-m", "qcc_compile.cli", "examples/self_print.c"], cwd=REPO)
    assert r.returncode == 0, r.stderr
    src.write_bytes(r.stdout)

    r = run(["cc", "-w", "-o", str(exe), str(src)], cwd=tmp_path)
    assert r.returncode == 0, r.stderr

    r = run([str(exe)], cwd=tmp_path)
    assert r.returncode == 0
    assert r.stdout == src.read_bytes()
