import io
import subprocess
from pathlib import Path

import pytest
from PIL import Image

from paster.clipboard import linux
from paster.clipboard.linux import LinuxClipboard
from paster.errors import ClipboardUnavailable
from paster.models import ClipboardImage, Empty, FileList, Text


def png_bytes(size=(3, 2), color=(10, 20, 30)):
    output = io.BytesIO()
    Image.new("RGB", size, color).save(output, format="PNG")
    return output.getvalue()


class FakeX11:
    """Answers xclip invocations from a dict of target -> bytes."""

    def __init__(self, targets, fail_targets=None, stderr=b""):
        self.targets = targets
        self.fail_targets = fail_targets
        self.stderr = stderr
        self.calls = []

    def __call__(self, command, **kwargs):
        self.calls.append(command)
        assert command[:3] == ["xclip", "-selection", "clipboard"]
        target = command[command.index("-t") + 1] if "-t" in command else None
        if target == "TARGETS":
            if self.fail_targets:
                raise subprocess.CalledProcessError(1, command, b"", self.stderr)
            payload = "\n".join(["TARGETS"] + list(self.targets)).encode()
        elif target is None:
            raise subprocess.CalledProcessError(1, command, b"", b"no data")
        else:
            payload = self.targets[target]
        return subprocess.CompletedProcess(command, 0, stdout=payload, stderr=b"")


@pytest.fixture
def x11(monkeypatch):
    monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
    monkeypatch.setattr(linux.shutil, "which",
                        lambda name: "/usr/bin/xclip" if name == "xclip" else None)

    def install(fake):
        monkeypatch.setattr(linux.subprocess, "run", fake)
        return fake

    return install


def test_no_clipboard_tool(monkeypatch):
    monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
    monkeypatch.setattr(linux.shutil, "which", lambda name: None)

    with pytest.raises(ClipboardUnavailable):
        LinuxClipboard()


def test_wayland_preferred_when_available(monkeypatch):
    monkeypatch.setenv("WAYLAND_DISPLAY", "wayland-0")
    monkeypatch.setattr(linux.shutil, "which", lambda name: f"/usr/bin/{name}")

    clipboard = LinuxClipboard()

    assert clipboard.backend == "wayland"
    assert clipboard._read_command("image/png") == ["wl-paste", "--type", "image/png"]
    assert clipboard._read_command("UTF8_STRING") == [
        "wl-paste", "--type", "UTF8_STRING", "--no-newline"]


def test_uri_list(x11):
    x11(FakeX11({
        "text/uri-list": b"file:///home/me/my%20notes.txt\r\nfile:///home/me/pic.png\r\n",
        "UTF8_STRING": b"file:///home/me/my%20notes.txt",
    }))

    snapshot = LinuxClipboard().snapshot()

    assert snapshot == FileList((Path("/home/me/my notes.txt"), Path("/home/me/pic.png")))


def test_gnome_copied_files_drops_operation(x11):
    x11(FakeX11({
        "x-special/gnome-copied-files": b"copy\nfile:///tmp/a.txt\nfile:///tmp/b.txt",
    }))

    assert LinuxClipboard().query_file_list() == [Path("/tmp/a.txt"), Path("/tmp/b.txt")]


def test_uri_list_without_files_falls_through(x11):
    x11(FakeX11({
        "text/uri-list": b"# comment\nhttps://example.com/\n",
        "UTF8_STRING": b"https://example.com/",
    }))

    assert LinuxClipboard().snapshot() == Text("https://example.com/")


def test_image_is_decoded_to_rgba(x11):
    x11(FakeX11({"image/png": png_bytes()}))

    snapshot = LinuxClipboard().snapshot()

    assert isinstance(snapshot, ClipboardImage)
    assert (snapshot.width, snapshot.height) == (3, 2)
    assert len(snapshot.data) == snapshot.expected_length
    assert snapshot.data[:4] == bytes([10, 20, 30, 255])


def test_broken_image_falls_through_to_text(x11):
    x11(FakeX11({"image/png": b"not a png", "UTF8_STRING": b"caption"}))

    assert LinuxClipboard().snapshot() == Text("caption")


def test_text(x11):
    fake = x11(FakeX11({"UTF8_STRING": "héllo".encode(), "STRING": b"h?llo"}))

    assert LinuxClipboard().snapshot() == Text("héllo")
    assert ["xclip", "-selection", "clipboard", "-t", "UTF8_STRING", "-o"] in fake.calls


def test_targets_listed_once(x11):
    fake = x11(FakeX11({"UTF8_STRING": b"hi"}))

    LinuxClipboard().snapshot()

    assert sum(1 for call in fake.calls if "TARGETS" in call) == 1


def test_nothing_copied_is_empty(x11):
    x11(FakeX11({}, fail_targets=True, stderr=b"Error: target TARGETS not available"))

    assert LinuxClipboard().snapshot() == Empty()


def test_unreachable_wayland_is_fatal(monkeypatch):
    monkeypatch.setenv("WAYLAND_DISPLAY", "wayland-0")
    monkeypatch.setattr(linux.shutil, "which", lambda name: f"/usr/bin/{name}")

    def refuse(command, **kwargs):
        raise subprocess.CalledProcessError(
            1, command, b"", b"Failed to connect to a Wayland server: No such file or directory")

    monkeypatch.setattr(linux.subprocess, "run", refuse)

    with pytest.raises(ClipboardUnavailable):
        LinuxClipboard().snapshot()


def test_wayland_nothing_copied_is_empty(monkeypatch):
    monkeypatch.setenv("WAYLAND_DISPLAY", "wayland-0")
    monkeypatch.setattr(linux.shutil, "which", lambda name: f"/usr/bin/{name}")

    def nothing(command, **kwargs):
        raise subprocess.CalledProcessError(1, command, b"", b"Nothing is copied\n")

    monkeypatch.setattr(linux.subprocess, "run", nothing)

    assert LinuxClipboard().snapshot() == Empty()


def test_missing_display_is_fatal(x11):
    x11(FakeX11({}, fail_targets=True, stderr=b"Error: Can't open display: (null)"))

    with pytest.raises(ClipboardUnavailable):
        LinuxClipboard().snapshot()


def test_timeout_is_fatal(x11):
    def hang(command, **kwargs):
        raise subprocess.TimeoutExpired(command, kwargs.get("timeout"))

    x11(hang)

    with pytest.raises(ClipboardUnavailable):
        LinuxClipboard().snapshot()
