import json
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8
PDF = b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n"
ELF64 = b"\x7fELF\x02\x01\x01" + b"\x00" * 9
TAR = bytearray(512)
TAR[257:262] = b"ustar"


def _run_cli(args, timeout=60):
    env = os.environ.copy()
    env["PYTHONPATH"] = str(ROOT)
    env.pop("FORMATDETECT_MAX_WORKERS", None)
    cmd = [sys.executable, "-m", "formatdetect", *args]
    return subprocess.run(
        cmd,
        text=True,
        capture_output=True,
        env=env,
        timeout=timeout,
    )


def test_cli_help():
    result = _run_cli(["--help"])
    assert result.returncode == 0
    assert "Usage:" in result.stdout
    assert "--batch" in result.stdout


def test_cli_version():
    result = _run_cli(["--version"])
    assert result.returncode == 0
    assert "formatdetect" in result.stdout


def test_cli_detects_bundled_formats(tmp_path):
    samples = {
        "image.png": PNG,
        "paper.pdf": PDF,
        "tool.so": ELF64,
        "backup.tar": bytes(TAR),
    }
    for name, data in samples.items():
        (tmp_path / name).write_bytes(data)

    result = _run_cli(["--json", "--batch", str(tmp_path)])
    assert result.returncode == 0, result.stderr

    payload = {Path(entry["file"]).name: entry for entry in json.loads(result.stdout)}
    assert payload["image.png"]["formats"][0]["name"] == "Png"
    assert payload["paper.pdf"]["formats"][0]["name"] == "Pdf"
    assert payload["tool.so"]["formats"][0]["name"] == "Elf64"
    assert payload["backup.tar"]["formats"][0]["name"] == "Tar"
    assert all(entry["extension_match"] for entry in payload.values())


def test_cli_flags_renamed_executable(tmp_path):
    disguised = tmp_path / "holiday.jpg"
    disguised.write_bytes(b"MZ\x90\x00" + b"\x00" * 60)

    result = _run_cli(["--json", "--strict", str(disguised)])
    assert result.returncode == 2
    entry = json.loads(result.stdout)[0]
    assert entry["formats"][0]["category"] == "Executable"
    assert entry["extension_match"] is False


def test_cli_recursive_batch_table(tmp_path):
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    (nested / "deep.png").write_bytes(PNG)
    (tmp_path / "top.pdf").write_bytes(PDF)

    flat = _run_cli(["--batch", str(tmp_path)])
    recursive = _run_cli(["--batch", str(tmp_path), "--recursive"])

    assert flat.returncode == 0
    assert "Detected: 1/1 files" in flat.stdout
    assert recursive.returncode == 0
    assert "Detected: 2/2 files" in recursive.stdout


def test_cli_validation_errors(tmp_path):
    result = _run_cli([str(tmp_path / "missing.bin"), "--batch", str(tmp_path)])
    assert result.returncode == 1
    assert "Cannot use both" in result.stdout
