import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

from chip8vm import __main__ as cli


class QuitAfter:
    def __init__(self, frames: int) -> None:
        self.frames = frames

    def is_pressed(self, name: str) -> bool:
        if name == cli.QUIT_KEY:
            self.frames -= 1
            return self.frames < 0
        return False


@pytest.fixture(autouse=True)
def host(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "keyboard", QuitAfter(3))
    monkeypatch.setattr(cli, "time", Mock())
    monkeypatch.setattr(cli, "list_roms", lambda: {"games": [Path("chip8-roms/games/brix.ch8")]})


def run_cli(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["chip8vm", *args])
    return cli.main()


@pytest.fixture()
def rom_file(tmp_path: Path):
    def write(name: str, content: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(content)
        return path

    return write


def test_usage_without_rom(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
    assert run_cli(monkeypatch) == 1
    err = capsys.readouterr().err
    assert "usage:" in err
    assert "GAMES:" in err
    assert "brix.ch8" in err


def test_list_roms(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
    assert run_cli(monkeypatch, "--list") == 0
    err = capsys.readouterr().err
    assert "Available ROMs:" in err
    assert "brix.ch8" in err


def test_missing_rom(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, caplog: pytest.LogCaptureFixture):
    assert run_cli(monkeypatch, str(tmp_path / "missing.ch8")) == 1
    assert "Failed to load ROM" in caplog.text


def test_machine_fault_exits_with_error(monkeypatch: pytest.MonkeyPatch, rom_file, caplog: pytest.LogCaptureFixture):
    path = rom_file("broken.ch8", b"\x00\x00")
    assert run_cli(monkeypatch, str(path)) == 1
    assert "Invalid opcode 0x0000 at PC 0x0200" in caplog.text


def test_runs_frames_until_quit(monkeypatch: pytest.MonkeyPatch, rom_file, capsys: pytest.CaptureFixture[str]):
    # 0x200: JP 0x200
    path = rom_file("loop.ch8", b"\x12\x00")
    assert run_cli(monkeypatch, str(path), "--cycles-per-frame", "2") == 0
    out = capsys.readouterr().out
    assert out.count("ROM: loop.ch8 | RUN") == 3
    assert cli.time.sleep.call_count == 3


@pytest.mark.parametrize("args", [["--fps", "0"], ["--cycles-per-frame", "-1"], ["--fps", "fast"]])
def test_rejects_invalid_rates(monkeypatch: pytest.MonkeyPatch, args: list[str]):
    with pytest.raises(SystemExit) as excinfo:
        run_cli(monkeypatch, "rom.ch8", *args)
    assert excinfo.value.code == 2
